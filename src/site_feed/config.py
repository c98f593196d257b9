"""Configuration management for site-feed."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .core.feeds import FeedMetadata
from .core.schemas import BLOG
from .utils.paths import get_config_file_path


def _lowercase_keys(data: Any) -> Any:
    """Accept legacy upper-case keys such as NAME/HREF/DESCRIPTION."""
    if not isinstance(data, dict):
        return data
    return {key.lower() if isinstance(key, str) else key: value for key, value in data.items()}


class SiteConfig(BaseModel):
    """Site-wide metadata."""

    model_config = ConfigDict(extra="ignore")

    name: str = "Kasia Biernat-Kluba"
    email: str = "k.biernat0@gmail.com"
    url: str = Field(default="https://kasiabiernat.github.io", description="Base URL the site is served from")
    num_posts_on_homepage: int = Field(default=3, ge=0)
    num_talks_on_homepage: int = Field(default=3, ge=0)

    @model_validator(mode="before")
    @classmethod
    def apply_legacy_keys(cls, data: Any) -> Any:
        return _lowercase_keys(data)

    @field_validator('url')
    @classmethod
    def validate_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("Site URL must start with http:// or https://")
        return value.rstrip("/")


class PageConfig(BaseModel):
    """Title, location and description of a top-level page."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    href: str
    description: str = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def apply_legacy_keys(cls, data: Any) -> Any:
        return _lowercase_keys(data)


class SocialLink(BaseModel):
    """A social profile linked from the site."""

    model_config = ConfigDict(extra="ignore")

    name: str
    href: str

    @model_validator(mode="before")
    @classmethod
    def apply_legacy_keys(cls, data: Any) -> Any:
        return _lowercase_keys(data)


class FeedSettings(BaseModel):
    """What goes into the RSS feed and where it is written."""

    model_config = ConfigDict(extra="ignore")

    collections: List[str] = Field(default_factory=lambda: [BLOG])
    page: str = Field(default="home", description="Page whose title and description describe the feed")
    output: str = Field(default="rss.xml", description="Feed file name relative to the output directory")
    language: str = "en"

    @field_validator('collections')
    @classmethod
    def validate_collections(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("Feed needs at least one collection")
        return value

    @field_validator('output')
    @classmethod
    def validate_output(cls, value: str) -> str:
        path = Path(value)
        if path.is_absolute() or ".." in path.parts or not path.name:
            raise ValueError("Feed output must be a relative path inside the output directory")
        return value


def default_pages() -> Dict[str, PageConfig]:
    return {
        "home": PageConfig(title="Home", href="/", description="Personal homepage"),
        "blog": PageConfig(
            title="Blog",
            href="/blog",
            description="A collection of articles on topics I am passionate about",
        ),
        "talks": PageConfig(title="Talks", href="/talks", description="My talks and presentations."),
    }


def default_socials() -> List[SocialLink]:
    return [
        SocialLink(name="twitter-x", href="https://x.com/kathrine000"),
        SocialLink(name="github", href="https://github.com/kathrine0"),
        SocialLink(name="linkedin", href="https://www.linkedin.com/in/kbiernat/"),
    ]


class Config(BaseModel):
    """Main configuration for site-feed."""

    model_config = ConfigDict(extra="ignore")

    site: SiteConfig = Field(default_factory=SiteConfig)
    pages: Dict[str, PageConfig] = Field(default_factory=default_pages)
    socials: List[SocialLink] = Field(default_factory=default_socials)
    feed: FeedSettings = Field(default_factory=FeedSettings)
    content_dir: str = Field(default="content", description="Directory with one folder per collection")
    output_dir: str = Field(default="dist", description="Directory build artifacts are written to")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('pages', mode="before")
    @classmethod
    def lowercase_page_keys(cls, value: Any) -> Any:
        return _lowercase_keys(value)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.upper()

    @model_validator(mode="after")
    def check_feed_page(self) -> "Config":
        if self.feed.page not in self.pages:
            raise ValueError(f"Feed page '{self.feed.page}' is not one of the configured pages {sorted(self.pages)}")
        return self

    def feed_metadata(self, site_url: Optional[str] = None) -> FeedMetadata:
        """
        Channel metadata for the feed.

        Args:
            site_url: Optional base URL overriding site.url

        Returns:
            FeedMetadata built from the configured feed page
        """
        page = self.pages[self.feed.page]
        return FeedMetadata(
            title=page.title,
            description=page.description,
            site_url=(site_url or self.site.url).rstrip("/"),
        )


def load_config(config_file: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_file: Optional path to config file. If None, uses default path.

    Returns:
        Config object
    """
    if config_file is None:
        config_file = get_config_file_path()

    if not config_file.exists():
        # Create default config
        config = Config()
        save_config(config, config_file)
        logging.info(f"Created default config at {config_file}")
        return config

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        config = Config(**data)
        logging.debug(f"Loaded config from {config_file}")
        return config

    except (yaml.YAMLError, ValueError, TypeError) as e:
        logging.error(f"Error loading config from {config_file}: {e}")
        raise


def save_config(config: Config, config_file: Optional[Path] = None) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Config object to save
        config_file: Optional path to config file. If None, uses default path.
    """
    if config_file is None:
        config_file = get_config_file_path()

    config_file.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config.model_dump(), f, default_flow_style=False, indent=2, sort_keys=False)

        logging.debug(f"Saved config to {config_file}")

    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Error saving config to {config_file}: {e}")
        raise


def create_example_config() -> str:
    """Create an example configuration YAML string."""
    example_config = Config(
        feed=FeedSettings(collections=[BLOG, "activitiesAndAppearances"]),
        output_dir="dist",
        log_level="INFO",
    )

    return yaml.safe_dump(example_config.model_dump(), default_flow_style=False, indent=2, sort_keys=False)
