"""Typed content schemas for the site collections."""

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import SchemaViolation


BLOG = "blog"
TALKS = "talks"
ACTIVITIES = "activitiesAndAppearances"


class ContentModel(BaseModel):
    """Fields shared by every collection."""

    # Unknown front matter keys are dropped rather than rejected
    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str = Field(min_length=1)


class DatedContent(ContentModel):
    """
    Content that carries a publication date and draft flag.

    Only collections whose schema derives from this class can be merged
    into a date-sorted feed.
    """

    description: str = Field(min_length=1)
    date: dt.date
    draft: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str):
            text = value.strip()
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            try:
                return dt.datetime.fromisoformat(text).date()
            except ValueError:
                # Left for the date field to report
                return value
        return value

    @field_validator("draft", mode="before")
    @classmethod
    def none_is_not_draft(cls, value: Any) -> Any:
        return False if value is None else value


class BlogPost(DatedContent):
    """A blog post."""

    cover: str


class Talk(ContentModel):
    """A conference talk or presentation."""

    slides: Optional[str] = None
    repository: Optional[str] = None
    recording: Optional[str] = None


class Activity(DatedContent):
    """An activity or public appearance (meetups, podcasts, panels)."""

    event: Optional[str] = None
    link: Optional[str] = Field(default=None, description="External page for the appearance")


@dataclass(frozen=True)
class CollectionDefinition:
    """Binds a collection name to the schema its entries must satisfy."""

    name: str
    schema: Type[ContentModel]

    @property
    def sortable_by_date(self) -> bool:
        return issubclass(self.schema, DatedContent)


@dataclass
class ValidationResult:
    """Outcome of validating one entry's front matter."""

    collection: str
    slug: str
    value: Optional[ContentModel] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    def unwrap(self) -> ContentModel:
        """Return the parsed value or raise SchemaViolation."""
        if not self.ok:
            raise SchemaViolation(self.collection, self.slug, self.errors)
        return self.value


def validate_entry(definition: CollectionDefinition, slug: str, raw: Dict[str, Any]) -> ValidationResult:
    """
    Validate raw front matter against a collection schema.

    Args:
        definition: Collection the entry belongs to
        slug: Entry slug, used for error reporting
        raw: Front matter mapping

    Returns:
        ValidationResult holding either the parsed model or structured errors
    """
    try:
        value = definition.schema.model_validate(raw)
    except ValidationError as e:
        errors = [
            {"loc": tuple(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in e.errors()
        ]
        return ValidationResult(definition.name, slug, errors=errors)

    return ValidationResult(definition.name, slug, value=value)


def default_collections() -> Dict[str, CollectionDefinition]:
    """Collections of the personal site, keyed by name."""
    return {
        BLOG: CollectionDefinition(BLOG, BlogPost),
        TALKS: CollectionDefinition(TALKS, Talk),
        ACTIVITIES: CollectionDefinition(ACTIVITIES, Activity),
    }
