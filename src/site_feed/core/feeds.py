"""Feed assembly: draft filtering, date sorting and item projection."""

import asyncio
import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .errors import MissingSortKey
from .schemas import DatedContent
from .store import ContentStore, Entry


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedMetadata:
    """Channel-level feed fields, constant for a build."""

    title: str
    description: str
    site_url: str


@dataclass(frozen=True)
class FeedItem:
    """One feed item projected from a content entry."""

    title: str
    description: str
    publication_date: dt.date
    link: str

    @classmethod
    def from_entry(cls, entry: Entry) -> "FeedItem":
        data = entry.data
        return cls(
            title=data.title,
            description=data.description,
            publication_date=data.date,
            link=entry_link(entry.collection, entry.slug),
        )

    def __str__(self) -> str:
        return f"FeedItem({self.title}, {self.publication_date.isoformat()}, {self.link})"


def entry_link(collection: str, slug: str) -> str:
    """Site-relative canonical path of an entry."""
    return f"/{collection}/{slug}/"


def is_draft(entry: Entry) -> bool:
    """Entries whose schema has no draft flag are never drafts."""
    return bool(getattr(entry.data, "draft", False))


def _publication_date(entry: Entry) -> dt.date:
    if not isinstance(entry.data, DatedContent):
        raise MissingSortKey(entry.collection, entry.slug)
    return entry.data.date


def assemble_items(entries: Iterable[Entry]) -> List[FeedItem]:
    """
    Turn materialized entries into ordered feed items.

    Drafts are dropped, the rest sorted newest first. Entries with the
    same date keep their relative input order.

    Args:
        entries: Validated entries, possibly from several collections

    Returns:
        Feed items, most recent first

    Raises:
        MissingSortKey: If a non-draft entry has no date
    """
    published = [entry for entry in entries if not is_draft(entry)]

    # sorted() is stable with reverse=True, ties stay in input order
    ordered = sorted(published, key=_publication_date, reverse=True)

    return [FeedItem.from_entry(entry) for entry in ordered]


async def assemble_feed(
    store: ContentStore,
    collections: Sequence[str],
    metadata: FeedMetadata,
) -> Tuple[FeedMetadata, List[FeedItem]]:
    """
    Build the feed items for the given collections.

    Args:
        store: Content store to read collections from
        collections: Names of date-sortable collections to include
        metadata: Channel metadata, returned unchanged

    Returns:
        Tuple of (metadata, feed items newest first)

    Raises:
        CollectionNotFound: If a collection name is unknown
        MissingSortKey: If a collection's schema has no date
        SchemaViolation: If the store rejects an entry
    """
    names = list(dict.fromkeys(collections))

    for name in names:
        if not store.definition(name).sortable_by_date:
            raise MissingSortKey(name)

    # Every collection is fully loaded before anything is sorted
    batches = await asyncio.gather(*(store.get_collection(name) for name in names))
    entries = [entry for batch in batches for entry in batch]

    items = assemble_items(entries)

    logger.info(
        "Assembled %d feed items from %s (%d drafts skipped)",
        len(items),
        ", ".join(names) or "no collections",
        len(entries) - len(items),
    )

    return metadata, items
