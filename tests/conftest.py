"""Shared fixtures for site-feed tests."""
import logging
from pathlib import Path

import pytest
import yaml


def write_entry(content_dir: Path, collection: str, name: str, body: str = "", **front_matter) -> Path:
    """Write a Markdown entry with YAML front matter."""
    directory = content_dir / collection
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    header = yaml.safe_dump(front_matter, sort_keys=False, allow_unicode=True)
    path.write_text(f"---\n{header}---\n{body}\n", encoding="utf-8")
    return path


def write_post(content_dir: Path, name: str, title: str, date: str, draft=None, **extra) -> Path:
    """Write a blog post; `draft=None` leaves the flag out of the front matter."""
    front = {
        "title": title,
        "description": f"About {title}",
        "date": date,
        "cover": f"/images/{name}.png",
    }
    if draft is not None:
        front["draft"] = draft
    front.update(extra)
    return write_entry(content_dir, "blog", f"{name}.md", **front)


@pytest.fixture
def content_dir(tmp_path):
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def site_home(tmp_path, monkeypatch):
    """Point the project root (logs, default config) at a temporary directory."""
    monkeypatch.setenv("SITE_FEED_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def config_file(tmp_path, content_dir):
    """Config file whose content and output dirs live in tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "site": {"url": "https://example.com"},
        "content_dir": "content",
        "output_dir": "dist",
        "log_level": "DEBUG",
    }), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_root_logging():
    """The application replaces root handlers; restore them after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
