"""Content feed builder for a personal site."""

__version__ = "0.1.0"
