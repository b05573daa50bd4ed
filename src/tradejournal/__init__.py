"""Personal trading journal: trade store, calendar queries and profit summaries."""

__version__ = "0.1.0"
