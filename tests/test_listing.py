"""Tests for homepage and index listings."""
import asyncio
import datetime as dt

from conftest import write_entry, write_post
from site_feed.core.listing import homepage_sections, latest, published
from site_feed.core.schemas import BlogPost, Talk
from site_feed.core.store import ContentStore, Entry


def post(slug, day, draft=False):
    return Entry("blog", slug, BlogPost(
        title=slug, description=slug, date=dt.date(2023, 1, day), draft=draft, cover="/c.png",
    ))


def test_published_drops_drafts_in_order():
    entries = [post("a", 1), post("b", 2, draft=True), post("c", 3)]
    assert [entry.slug for entry in published(entries)] == ["a", "c"]


def test_latest_sorts_dated_entries():
    entries = [post("a", 1), post("c", 3), post("b", 2), post("d", 4, draft=True)]
    assert [entry.slug for entry in latest(entries, 2)] == ["c", "b"]


def test_latest_keeps_order_of_undated_entries():
    talks = [Entry("talks", slug, Talk(title=slug)) for slug in ("x", "y", "z")]
    assert [entry.slug for entry in latest(talks, 2)] == ["x", "y"]


def test_latest_with_zero_limit():
    assert latest([post("a", 1)], 0) == []


def test_homepage_sections(content_dir):
    for day in range(1, 6):
        write_post(content_dir, f"post-{day}", f"Post {day}", f"2023-01-0{day}")
    write_entry(content_dir, "talks", "one.md", title="One")
    write_entry(content_dir, "talks", "two.md", title="Two")

    sections = asyncio.run(homepage_sections(ContentStore(content_dir), 3, 3))

    assert [entry.slug for entry in sections["blog"]] == ["post-5", "post-4", "post-3"]
    assert [entry.slug for entry in sections["talks"]] == ["one", "two"]
