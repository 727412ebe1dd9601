"""Bounded line buffer with KMP line search and flat-file persistence."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "runtime",
    "search",
    "shell",
]

__version__ = "0.1.0"
