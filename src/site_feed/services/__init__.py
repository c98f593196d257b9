"""Service layer for site-feed."""

from .writer import OutputWriter

__all__ = ["OutputWriter"]
