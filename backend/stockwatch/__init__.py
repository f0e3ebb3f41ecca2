"""StockWatch - per-user stock watchlists with technical indicator snapshots."""

__version__ = "0.1.0"
