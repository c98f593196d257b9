"""Errors raised while loading content and assembling feeds."""

from typing import Any, Dict, List, Optional


class SiteFeedError(Exception):
    """Base class for site-feed errors."""


class CollectionNotFound(SiteFeedError):
    """Raised when a collection name is not known to the content store."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Collection not found: {name!r}")


class SchemaViolation(SiteFeedError):
    """Raised when an entry does not match its collection schema."""

    def __init__(self, collection: str, slug: str, errors: List[Dict[str, Any]]):
        self.collection = collection
        self.slug = slug
        self.errors = errors
        details = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ())) or '<entry>'}: {error.get('msg')}"
            for error in errors
        )
        super().__init__(f"Invalid entry {collection}/{slug}: {details}")


class MissingSortKey(SiteFeedError, AssertionError):
    """Raised when an entry without a date is passed to the date sort."""

    def __init__(self, collection: str, slug: Optional[str] = None):
        self.collection = collection
        self.slug = slug
        if slug is None:
            message = f"Collection {collection!r} has no 'date' field and cannot be sorted into a feed"
        else:
            message = f"Entry {collection}/{slug} has no 'date' and cannot be sorted into a feed"
        super().__init__(message)
