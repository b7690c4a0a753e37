"""Aircraft mass and balance calculator."""

__version__ = "0.1.0"
