"""NGSA web application bootstrap."""

__version__ = "0.1.0"
