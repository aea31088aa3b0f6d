"""Software Reviews API - REST backend over the software review record store."""

__version__ = "1.0.0"
