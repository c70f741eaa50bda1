"""Robot shift rate calculation."""

__version__ = "0.1.0"
