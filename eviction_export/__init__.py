"""Chart rendering engine for eviction report exports."""

__version__ = "0.3.0"
