"""
CONTRACT 1: Quote Source

Input: ticker + date range
Output: PriceSeries, QuoteSummary

Daily closes and quote metadata as returned by the external quote source,
normalized into a standard format. Produced fresh per request, never persisted.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# PriceSeries
# =============================================================================


class PricePoint(CamelModel):
    """Single daily close."""

    date: date
    close: float = Field(..., gt=0)


class PriceSeries(CamelModel):
    """
    Daily closes for one ticker.

    Ordered ascending by date, no duplicate dates.
    """

    ticker: str
    points: list[PricePoint] = Field(default_factory=list)

    @field_validator("points")
    @classmethod
    def _ascending_unique_dates(cls, points: list[PricePoint]) -> list[PricePoint]:
        for prev, curr in zip(points, points[1:]):
            if curr.date <= prev.date:
                raise ValueError(
                    f"points must be strictly ascending by date ({prev.date} -> {curr.date})"
                )
        return points

    def closes(self) -> list[float]:
        return [p.close for p in self.points]

    def is_empty(self) -> bool:
        return not self.points


# =============================================================================
# QuoteSummary
# =============================================================================


class QuoteSummary(CamelModel):
    """
    Quote metadata for a ticker.

    Every field is optional - the source may return a partial summary.
    """

    symbol: Optional[str] = None
    long_name: Optional[str] = None
    quote_type: Optional[str] = None
    regular_market_price: Optional[float] = None
