"""tablegen: per-table source generation with injectable context."""

__version__ = "0.1.0"
