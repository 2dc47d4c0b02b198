"""Sales chart geometry engine."""

__version__ = "0.1.0"
