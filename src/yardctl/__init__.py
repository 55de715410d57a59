"""yardctl — stack-based wagon sorting yard."""

__version__ = "0.1.0"
