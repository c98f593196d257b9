"""Tests for the content store."""
import asyncio
import datetime as dt

import pytest

from conftest import write_entry, write_post
from site_feed.core.errors import CollectionNotFound, SchemaViolation
from site_feed.core.schemas import BlogPost, Talk
from site_feed.core.store import ContentStore


def load(store, name):
    return asyncio.run(store.get_collection(name))


def test_loads_entries_in_file_name_order(content_dir):
    write_post(content_dir, "b-second", "Second", "2023-02-01")
    write_post(content_dir, "a-first", "First", "2023-03-01")

    entries = load(ContentStore(content_dir), "blog")

    assert [entry.slug for entry in entries] == ["a-first", "b-second"]
    assert all(isinstance(entry.data, BlogPost) for entry in entries)
    assert entries[0].data.date == dt.date(2023, 3, 1)
    assert entries[0].collection == "blog"


def test_keeps_body_and_source(content_dir):
    path = write_post(content_dir, "hello-world", "Hello", "2023-01-01")
    path.write_text(path.read_text(encoding="utf-8").replace("\n\n", "\nSome *markdown* text.\n"), encoding="utf-8")

    entry = load(ContentStore(content_dir), "blog")[0]

    assert "Some *markdown* text." in entry.body
    assert entry.source == path


def test_slug_from_file_name_is_normalized(content_dir):
    write_post(content_dir, "My_First Post", "First", "2023-01-01")

    entry = load(ContentStore(content_dir), "blog")[0]

    assert entry.slug == "my-first-post"


def test_slug_front_matter_overrides_file_name(content_dir):
    write_post(content_dir, "2023-01-01-hello", "Hello", "2023-01-01", slug="hello-world")

    entry = load(ContentStore(content_dir), "blog")[0]

    assert entry.slug == "hello-world"


def test_ignores_non_markdown_files(content_dir):
    write_post(content_dir, "hello", "Hello", "2023-01-01")
    (content_dir / "blog" / "cover.png").write_bytes(b"\x89PNG")

    assert len(load(ContentStore(content_dir), "blog")) == 1


def test_talks_validate_against_talk_schema(content_dir):
    write_entry(content_dir, "talks", "testing.md", title="Testing", slides="https://slides.example.com")

    entry = load(ContentStore(content_dir), "talks")[0]

    assert isinstance(entry.data, Talk)
    assert entry.data.slides == "https://slides.example.com"


def test_unknown_collection_raises(content_dir):
    with pytest.raises(CollectionNotFound) as exc_info:
        load(ContentStore(content_dir), "podcasts")

    assert exc_info.value.name == "podcasts"


def test_missing_directory_is_empty_collection(content_dir):
    assert load(ContentStore(content_dir), "activitiesAndAppearances") == []


def test_invalid_entry_raises_schema_violation(content_dir):
    write_entry(content_dir, "blog", "broken.md", title="Broken", date="2023-01-01")

    with pytest.raises(SchemaViolation) as exc_info:
        load(ContentStore(content_dir), "blog")

    assert exc_info.value.slug == "broken"
    locs = {error["loc"] for error in exc_info.value.errors}
    assert ("description",) in locs
    assert ("cover",) in locs


def test_malformed_front_matter_raises_schema_violation(content_dir):
    directory = content_dir / "blog"
    directory.mkdir()
    (directory / "bad.md").write_text("---\ntitle: [unclosed\n---\nbody\n", encoding="utf-8")

    with pytest.raises(SchemaViolation) as exc_info:
        load(ContentStore(content_dir), "blog")

    assert exc_info.value.errors[0]["type"] == "front_matter"


def test_duplicate_slugs_are_rejected(content_dir):
    write_post(content_dir, "hello", "Hello", "2023-01-01")
    write_post(content_dir, "other", "Other", "2023-01-02", slug="hello")

    with pytest.raises(SchemaViolation) as exc_info:
        load(ContentStore(content_dir), "blog")

    assert exc_info.value.errors[0]["type"] == "duplicate_slug"


def test_custom_definitions_replace_defaults(content_dir):
    from site_feed.core.schemas import CollectionDefinition

    store = ContentStore(content_dir, {"notes": CollectionDefinition("notes", BlogPost)})

    assert store.names == ["notes"]
    with pytest.raises(CollectionNotFound):
        store.definition("blog")


def test_explicit_slug_is_used_as_written(content_dir):
    """A front matter slug keeps its path separators."""
    write_post(content_dir, "hello", "Hello", "2023-01-01", slug="/2023/hello/")

    entry = load(ContentStore(content_dir), "blog")[0]

    assert entry.slug == "2023/hello"


def test_quoted_iso_datetime_is_accepted(content_dir):
    write_post(content_dir, "a", "A", "2023-01-01T10:30:00Z")

    entry = load(ContentStore(content_dir), "blog")[0]

    assert entry.data.date == dt.date(2023, 1, 1)


def test_empty_title_and_description_are_rejected(content_dir):
    write_entry(content_dir, "blog", "empty.md", title="", description="", date="2023-01-01", cover="/c.png")

    with pytest.raises(SchemaViolation) as exc_info:
        load(ContentStore(content_dir), "blog")

    locs = {error["loc"] for error in exc_info.value.errors}
    assert locs == {("title",), ("description",)}
