"""Time-bounded unit conversions: SQLite store, HTTP API and CLI."""
__version__ = "0.1.0"
