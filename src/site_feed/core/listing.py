"""Entry listings for index pages and the homepage."""

from typing import Dict, Iterable, List

from .feeds import is_draft
from .schemas import BLOG, TALKS, DatedContent
from .store import ContentStore, Entry


def published(entries: Iterable[Entry]) -> List[Entry]:
    """Drop drafts, keeping input order."""
    return [entry for entry in entries if not is_draft(entry)]


def latest(entries: Iterable[Entry], limit: int) -> List[Entry]:
    """
    Newest published entries first, at most `limit` of them.

    Undated entries keep store order.
    """
    visible = published(entries)
    if visible and all(isinstance(entry.data, DatedContent) for entry in visible):
        visible = sorted(visible, key=lambda entry: entry.data.date, reverse=True)
    return visible[:max(limit, 0)]


async def homepage_sections(store: ContentStore, num_posts: int, num_talks: int) -> Dict[str, List[Entry]]:
    """Entries shown on the homepage, keyed by collection name."""
    posts = await store.get_collection(BLOG)
    talks = await store.get_collection(TALKS)
    return {
        BLOG: latest(posts, num_posts),
        TALKS: latest(talks, num_talks),
    }
