"""
Snapshot Builder

CONTRACT:
    Input:  ticker, QuoteSummary, PriceSeries, IndicatorParams
    Output: TickerSnapshot

An empty series fails with NoData before the indicator engine runs.
"""

from stockwatch.services.snapshot.builder import SnapshotService, build_snapshot

__all__ = [
    "SnapshotService",
    "build_snapshot",
]
