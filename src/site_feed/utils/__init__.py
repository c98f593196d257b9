"""Utility functions for site-feed."""

from .paths import (
    get_project_root,
    slugify,
    get_config_file_path,
    get_log_dir,
    resolve_path
)

__all__ = [
    "get_project_root",
    "slugify",
    "get_config_file_path",
    "get_log_dir",
    "resolve_path"
]
