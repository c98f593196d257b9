"""Path utilities for site-feed."""

import os
import re
from pathlib import Path
from typing import Optional


def slugify(name: str) -> str:
    """
    Normalize an entry name to slug format.

    Rules:
    - Convert to lowercase
    - Replace underscores and whitespace with hyphens
    - Replace any sequence of other non-alphanumeric characters with a single hyphen
    - Trim leading/trailing hyphens

    Args:
        name: The name to slugify

    Returns:
        The slugified name
    """
    slug = name.lower()

    slug = re.sub(r'[\s_]+', '-', slug)

    slug = re.sub(r'[^a-z0-9-]+', '-', slug)

    # Collapse runs produced by the substitutions above
    slug = re.sub(r'-{2,}', '-', slug)

    return slug.strip('-')


def get_project_root() -> Path:
    """
    Get the project root directory.

    The SITE_FEED_HOME environment variable takes precedence over the
    source checkout location.

    Returns:
        Path to the project root directory
    """
    override = os.environ.get("SITE_FEED_HOME")
    if override:
        return Path(override).expanduser()
    return Path(__file__).parent.parent.parent.parent


def get_config_file_path() -> Path:
    """Get the path to the configuration file."""
    return get_project_root() / "config.yaml"


def get_log_dir() -> Path:
    """Get the log directory path."""
    log_dir = get_project_root() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def resolve_path(path: str, base: Optional[Path] = None) -> Path:
    """
    Resolve a configured path against a base directory.

    Args:
        path: Path from configuration, may be relative or use ~
        base: Directory relative paths are resolved against (default: project root)

    Returns:
        Absolute path
    """
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return (base or get_project_root()) / candidate
