"""account-search: filter, sort and fuzzy-match account records."""

__version__ = "0.1.0"
