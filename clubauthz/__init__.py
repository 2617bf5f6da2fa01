"""Club authorization and permission-grant engine."""

__version__ = "0.1.0"
