"""Content store: loads collection entries from Markdown files."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import frontmatter
import yaml

from .errors import CollectionNotFound, SchemaViolation
from .schemas import CollectionDefinition, ContentModel, default_collections, validate_entry
from ..utils.paths import slugify


logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = (".md", ".mdx")


@dataclass(frozen=True)
class Entry:
    """A validated content entry, read-only for the rest of the build."""

    collection: str
    slug: str
    data: ContentModel
    body: str = ""
    source: Optional[Path] = None

    def __str__(self) -> str:
        return f"Entry({self.collection}/{self.slug}, {self.data.title!r})"


class ContentStore:
    """Reads and validates entries stored as <content_dir>/<collection>/<slug>.md."""

    def __init__(
        self,
        content_dir: Path,
        definitions: Optional[Mapping[str, CollectionDefinition]] = None,
    ):
        """
        Initialize the content store.

        Args:
            content_dir: Directory holding one sub-directory per collection
            definitions: Known collections; defaults to the site collections
        """
        self.content_dir = Path(content_dir)
        self.definitions: Dict[str, CollectionDefinition] = (
            dict(definitions) if definitions is not None else default_collections()
        )

    @property
    def names(self) -> List[str]:
        return list(self.definitions)

    def definition(self, name: str) -> CollectionDefinition:
        """Look up a collection definition or raise CollectionNotFound."""
        try:
            return self.definitions[name]
        except KeyError:
            raise CollectionNotFound(name) from None

    async def get_collection(self, name: str) -> List[Entry]:
        """
        Load every entry of a collection.

        Args:
            name: Collection name

        Returns:
            Validated entries in file name order

        Raises:
            CollectionNotFound: If the collection is not defined
            SchemaViolation: If any entry fails validation
        """
        definition = self.definition(name)
        return await asyncio.to_thread(self.load_collection, definition)

    def load_collection(self, definition: CollectionDefinition) -> List[Entry]:
        """Synchronously read and validate all files of a collection."""
        directory = self.content_dir / definition.name
        if not directory.is_dir():
            logger.warning(f"No content directory for collection '{definition.name}': {directory}")
            return []

        paths = sorted(
            path for path in directory.iterdir()
            if path.is_file() and path.suffix in CONTENT_SUFFIXES
        )

        entries: List[Entry] = []
        seen: Dict[str, Path] = {}

        for path in paths:
            entry = self._load_entry(definition, path)

            if entry.slug in seen:
                raise SchemaViolation(definition.name, entry.slug, [{
                    "loc": ("slug",),
                    "msg": f"duplicate slug, also used by {seen[entry.slug].name}",
                    "type": "duplicate_slug",
                }])

            seen[entry.slug] = path
            entries.append(entry)

        logger.info(f"Loaded {len(entries)} entries from collection '{definition.name}'")
        return entries

    def _load_entry(self, definition: CollectionDefinition, path: Path) -> Entry:
        """Parse one content file into an Entry."""
        try:
            post = frontmatter.load(str(path), encoding="utf-8")
        except (yaml.YAMLError, UnicodeDecodeError, TypeError) as e:
            raise SchemaViolation(definition.name, slugify(path.stem), [{
                "loc": (),
                "msg": f"unreadable front matter in {path.name}: {e}",
                "type": "front_matter",
            }]) from e

        raw = dict(post.metadata)
        # An explicit slug is used as written, file names are normalized
        explicit = raw.get("slug")
        slug = str(explicit).strip().strip("/") if explicit else slugify(path.stem)
        if not slug:
            raise SchemaViolation(definition.name, path.stem, [{
                "loc": ("slug",),
                "msg": "slug is empty",
                "type": "empty_slug",
            }])

        data = validate_entry(definition, slug, raw).unwrap()
        logger.debug(f"Validated {definition.name}/{slug} from {path.name}")

        return Entry(definition.name, slug, data, post.content, path)
