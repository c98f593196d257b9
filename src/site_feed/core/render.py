"""RSS serialization of assembled feeds."""

import datetime as dt
from typing import Sequence
from urllib.parse import urljoin

from feedgen.feed import FeedGenerator

from .errors import SiteFeedError
from .feeds import FeedItem, FeedMetadata


def absolute_url(site_url: str, link: str) -> str:
    """Join a site-relative link onto the site base URL."""
    return urljoin(site_url.rstrip("/") + "/", link)


def _midnight_utc(day: dt.date) -> dt.datetime:
    return dt.datetime.combine(day, dt.time.min, tzinfo=dt.timezone.utc)


def render_feed(
    metadata: FeedMetadata,
    items: Sequence[FeedItem],
    *,
    language: str = "en",
    feed_path: str = "rss.xml",
) -> bytes:
    """
    Serialize feed items into an RSS 2.0 document.

    Args:
        metadata: Channel title, description and site URL
        items: Feed items in the order they should appear
        language: Channel language code
        feed_path: Location of the feed relative to the site root

    Returns:
        UTF-8 encoded XML document
    """
    if not metadata.title or not metadata.description:
        raise SiteFeedError("Feed metadata needs a non-empty title and description")

    fg = FeedGenerator()
    fg.title(metadata.title)
    fg.description(metadata.description)
    fg.link(href=absolute_url(metadata.site_url, "/"), rel="alternate")
    fg.link(href=absolute_url(metadata.site_url, feed_path), rel="self", type="application/rss+xml")
    fg.language(language)

    # Pin lastBuildDate to the newest item so identical content renders identically
    if items:
        fg.lastBuildDate(_midnight_utc(max(item.publication_date for item in items)))

    for item in items:
        url = absolute_url(metadata.site_url, item.link)

        # feedgen prepends by default, which would reverse the order
        fe = fg.add_entry(order="append")
        fe.guid(url, permalink=True)
        fe.title(item.title)
        fe.link(href=url)
        fe.description(item.description)
        fe.pubDate(_midnight_utc(item.publication_date))

    return fg.rss_str(pretty=True)
