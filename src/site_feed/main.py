"""Main site-feed application."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import feedparser

from .config import Config, create_example_config, load_config
from .core.feeds import FeedItem, FeedMetadata, assemble_feed
from .core.listing import homepage_sections, published
from .core.render import render_feed
from .core.store import ContentStore, Entry
from .services.writer import OutputWriter
from .utils.paths import get_log_dir, get_project_root, resolve_path


class SiteFeedApp:
    """Builds the site feed from content collections."""

    def __init__(self, config_file: Optional[Path] = None, *, setup_logging: bool = True):
        """
        Initialize the application.

        Args:
            config_file: Optional path to configuration file
            setup_logging: Configure root logging handlers (disabled in tests)
        """
        self.config_file = config_file
        self.config: Config = load_config(config_file)

        if setup_logging:
            self._setup_logging()

        # Relative paths in a config file are relative to that file
        base_dir = config_file.parent if config_file is not None else get_project_root()
        self.content_dir = resolve_path(self.config.content_dir, base_dir)
        self.output_dir = resolve_path(self.config.output_dir, base_dir)

        self.store = ContentStore(self.content_dir)
        self.writer = OutputWriter(self.output_dir)

        logging.info("site-feed initialized")

    def _setup_logging(self) -> None:
        """Setup logging configuration."""
        log_file = get_log_dir() / "site-feed.log"

        # Convert string log level to logging constant
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        root_logger.handlers = []  # Clear existing handlers
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

    def assemble(self, site_url: Optional[str] = None) -> Tuple[FeedMetadata, List[FeedItem]]:
        """Assemble feed metadata and items for the configured collections."""
        metadata = self.config.feed_metadata(site_url)
        return asyncio.run(assemble_feed(self.store, self.config.feed.collections, metadata))

    def build(self, dry_run: bool = False, site_url: Optional[str] = None, verbose: bool = False) -> Optional[Path]:
        """
        Build the RSS feed.

        Args:
            dry_run: If True, assemble and render but do not write the file
            site_url: Optional base URL overriding the configured one
            verbose: If True, log at DEBUG level

        Returns:
            Path of the written feed, or None on a dry run
        """
        if verbose:
            logging.getLogger().setLevel(logging.DEBUG)
            for handler in logging.getLogger().handlers:
                handler.setLevel(logging.DEBUG)

        feed = self.config.feed
        logging.info(f"Building feed from {', '.join(feed.collections)} (dry_run={dry_run})")

        metadata, items = self.assemble(site_url)
        document = render_feed(metadata, items, language=feed.language, feed_path=feed.output)

        for item in items:
            logging.debug(f"Feed item: {item}")

        if dry_run:
            logging.info(f"[DRY RUN MODE] Would write {len(items)} items to {self.writer.target(feed.output)}")
            return None

        return self.writer.write_bytes(feed.output, document)

    def run(self, dry_run: bool = False, site_url: Optional[str] = None, verbose: bool = False) -> int:
        """
        Build the feed and report failures as an exit code.

        Returns:
            Exit code (0 for success)
        """
        try:
            self.build(dry_run=dry_run, site_url=site_url, verbose=verbose)
            return 0
        except Exception as e:
            logging.error(f"Build failed: {e}")
            if verbose:
                logging.exception("Full traceback:")
            return 1

    def check(self, path: Optional[Path] = None) -> Dict[str, Any]:
        """
        Parse a built feed and summarize it.

        Args:
            path: Feed file; defaults to the configured output

        Returns:
            Dictionary with title, item count and parse status
        """
        path = path or self.writer.target(self.config.feed.output)
        if not path.exists():
            raise FileNotFoundError(f"Feed not found: {path}")

        parsed = feedparser.parse(path.read_bytes())

        if parsed.bozo and parsed.bozo_exception:
            logging.warning(f"Feed parsing warning for {path}: {parsed.bozo_exception}")

        return {
            "path": str(path),
            "title": parsed.feed.get("title", ""),
            "link": parsed.feed.get("link", ""),
            "items": len(parsed.entries),
            "valid": not parsed.bozo,
            "latest": parsed.entries[0].get("title", "") if parsed.entries else None,
        }

    def list_entries(self, collection: str, include_drafts: bool = False) -> List[Entry]:
        """Entries of one collection, drafts optionally included."""
        entries = asyncio.run(self.store.get_collection(collection))
        return entries if include_drafts else published(entries)

    def homepage(self) -> Dict[str, List[Entry]]:
        """Entries featured on the homepage."""
        site = self.config.site
        return asyncio.run(homepage_sections(
            self.store,
            site.num_posts_on_homepage,
            site.num_talks_on_homepage,
        ))

    def get_info(self) -> Dict[str, Any]:
        """
        Get application information.

        Returns:
            Dictionary with application info
        """
        from . import __version__

        counts = {}
        for name in self.store.names:
            definition = self.store.definition(name)
            entries = self.store.load_collection(definition)
            counts[name] = {
                "entries": len(entries),
                "published": len(published(entries)),
                "in_feed": name in self.config.feed.collections,
            }

        return {
            "version": __version__,
            "config_file": str(self.config_file or "default"),
            "log_level": self.config.log_level,
            "site_url": self.config.site.url,
            "content_dir": str(self.content_dir),
            "output_dir": str(self.output_dir),
            "feed_collections": list(self.config.feed.collections),
            "collections": counts,
            "artifacts": [str(path) for path in self.writer.list_artifacts()],
        }

    def create_example_config(self) -> str:
        """Create example configuration."""
        return create_example_config()
