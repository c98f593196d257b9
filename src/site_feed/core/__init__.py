"""Content loading and feed assembly."""

from .errors import CollectionNotFound, MissingSortKey, SchemaViolation, SiteFeedError
from .feeds import FeedItem, FeedMetadata, assemble_feed, assemble_items
from .render import render_feed
from .store import ContentStore, Entry

__all__ = [
    "CollectionNotFound",
    "MissingSortKey",
    "SchemaViolation",
    "SiteFeedError",
    "FeedItem",
    "FeedMetadata",
    "assemble_feed",
    "assemble_items",
    "render_feed",
    "ContentStore",
    "Entry",
]
