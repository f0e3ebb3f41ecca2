"""
CONTRACT 2: Indicator Engine

Input: close sequence + IndicatorParams
Output: IndicatorSnapshot

This module performs ALL mathematical calculations.
Pure Python/NumPy - deterministic, no I/O.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import ConfigDict, Field, ValidationError, field_validator

from stockwatch.schemas.market import CamelModel
from stockwatch.services.base import InvalidParamsError


# =============================================================================
# ENUMS
# =============================================================================


class CrossPosition(str, Enum):
    UP = "Up"
    DOWN = "Down"


# =============================================================================
# INPUT: IndicatorParams
# =============================================================================


class IndicatorParams(CamelModel):
    """
    Indicator periods and multipliers.
    Sent by: API (query parameters / request body)
    Received by: Indicator Engine

    Every field is independently overridable; omitted fields keep their default.
    Unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    rsi_period: int = Field(default=14, gt=0)
    macd_fast: int = Field(default=12, gt=0)
    macd_slow: int = Field(default=26, gt=0)
    macd_signal: int = Field(default=9, gt=0)
    bb_period: int = Field(default=20, gt=0)
    bb_std_dev: float = Field(default=2.0, gt=0, allow_inf_nan=False)
    sma_period: int = Field(default=14, gt=0)

    @field_validator("*", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        # bool is an int subclass; True would otherwise pass as period 1
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value

    @classmethod
    def from_overrides(cls, overrides: Optional[dict[str, Any]] = None) -> "IndicatorParams":
        """
        Build params from caller overrides, dropping unset (None) values.

        Raises:
            InvalidParamsError: If any override is unknown, non-numeric or non-positive.
        """
        provided = {k: v for k, v in (overrides or {}).items() if v is not None}
        try:
            return cls.model_validate(provided)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise InvalidParamsError(
                "IndicatorEngine",
                "Invalid indicator parameters: " + "; ".join(problems),
                details={"errors": problems},
            ) from e


# =============================================================================
# OUTPUT: IndicatorSnapshot
# =============================================================================


class MACDPoint(CamelModel):
    """One point of the MACD series."""

    model_config = ConfigDict(frozen=True)

    macd_line: float
    signal_line: float
    histogram: float


class BollingerBands(CamelModel):
    """Latest Bollinger Bands values."""

    model_config = ConfigDict(frozen=True)

    upper: float
    middle: float
    lower: float


class IndicatorSnapshot(CamelModel):
    """
    Point-in-time indicator bundle for one ticker.

    Invariant: cross_position is UP iff the last histogram value is > 0.
    """

    model_config = ConfigDict(frozen=True)

    rsi: float = Field(..., ge=0, le=100)
    macd: tuple[MACDPoint, ...] = Field(default_factory=tuple, description="Last 14 MACD points")
    cross_position: CrossPosition
    bollinger: BollingerBands
    sma: tuple[float, ...] = Field(default_factory=tuple, description="Last 10 SMA values")
