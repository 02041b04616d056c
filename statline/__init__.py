"""OPS season series from biographical and batting tables."""

__version__ = "0.1.0"
