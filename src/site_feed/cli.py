"""CLI interface for site-feed using Typer."""

from pathlib import Path
from typing import Optional

import typer
import yaml
from typing_extensions import Annotated

from . import __version__
from .main import SiteFeedApp


app = typer.Typer(
    name="site-feed",
    help="Build the RSS feed of a personal site from its content collections",
    add_completion=False,
)

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")]


@app.command()
def build(
    config_file: ConfigOption = None,
    site: Annotated[Optional[str], typer.Option("--site", help="Override the site base URL")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Assemble the feed without writing it")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show detailed output")] = False,
) -> None:
    """Build the RSS feed."""
    try:
        app_instance = SiteFeedApp(config_file)
        path = app_instance.build(dry_run=dry_run, site_url=site, verbose=verbose)
    except Exception as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    if path is None:
        typer.echo("✓ Dry run complete, nothing written")
    else:
        typer.echo(f"✓ Feed written to {path}")


@app.command()
def check(
    path: Annotated[Optional[Path], typer.Argument(help="Feed file (default: configured output)")] = None,
    config_file: ConfigOption = None,
) -> None:
    """Parse a built feed and show a summary."""
    try:
        app_instance = SiteFeedApp(config_file)
        summary = app_instance.check(path)
    except Exception as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Feed: {summary['path']}")
    typer.echo(f"  Title: {summary['title']}")
    typer.echo(f"  Link: {summary['link']}")
    typer.echo(f"  Items: {summary['items']}")
    if summary["latest"]:
        typer.echo(f"  Latest: {summary['latest']}")
    typer.echo(f"  Valid: {'yes' if summary['valid'] else 'no'}")

    if not summary["valid"]:
        raise typer.Exit(1)


@app.command("list")
def list_collection(
    collection: Annotated[str, typer.Argument(help="Collection name, e.g. blog")],
    drafts: Annotated[bool, typer.Option("--drafts", help="Include draft entries")] = False,
    config_file: ConfigOption = None,
) -> None:
    """List the entries of a collection."""
    try:
        app_instance = SiteFeedApp(config_file)
        entries = app_instance.list_entries(collection, include_drafts=drafts)
    except Exception as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    if not entries:
        typer.echo(f"No entries in {collection}")
        return

    for entry in entries:
        date = getattr(entry.data, "date", None)
        marker = " [draft]" if getattr(entry.data, "draft", False) else ""
        prefix = f"{date.isoformat()}  " if date else ""
        typer.echo(f"{prefix}/{entry.collection}/{entry.slug}/  {entry.data.title}{marker}")


@app.command()
def homepage(
    config_file: ConfigOption = None,
) -> None:
    """Show the entries featured on the homepage."""
    try:
        app_instance = SiteFeedApp(config_file)
        sections = app_instance.homepage()
    except Exception as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    for name, entries in sections.items():
        typer.echo(f"{name}:")
        for entry in entries:
            typer.echo(f"  /{entry.collection}/{entry.slug}/  {entry.data.title}")


@app.command()
def config(
    show: Annotated[bool, typer.Option("--show", help="Show current config")] = False,
    example: Annotated[bool, typer.Option("--example", help="Generate example config")] = False,
    config_file: ConfigOption = None,
) -> None:
    """Manage site-feed configuration."""
    if example:
        from .config import create_example_config
        typer.echo(create_example_config())
    elif show:
        try:
            from .config import load_config
            config_obj = load_config(config_file)
            typer.echo(yaml.safe_dump(config_obj.model_dump(), default_flow_style=False, indent=2, sort_keys=False))
        except Exception as e:
            typer.echo(f"✗ Error loading config: {e}", err=True)
            raise typer.Exit(1)
    else:
        typer.echo("Use --show to view config or --example to generate example")


@app.command()
def info(
    config_file: ConfigOption = None,
) -> None:
    """Show version and project information."""
    typer.echo(f"site-feed v{__version__}")

    try:
        app_instance = SiteFeedApp(config_file)
        info_data = app_instance.get_info()
    except Exception as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Config file: {info_data['config_file']}")
    typer.echo(f"Log level: {info_data['log_level']}")
    typer.echo(f"Site URL: {info_data['site_url']}")
    typer.echo(f"Content directory: {info_data['content_dir']}")
    typer.echo(f"Output directory: {info_data['output_dir']}")
    typer.echo(f"Feed collections: {', '.join(info_data['feed_collections'])}")

    typer.echo("\nCollections:")
    for name, counts in info_data["collections"].items():
        in_feed = " (in feed)" if counts["in_feed"] else ""
        typer.echo(f"  {name}: {counts['published']} published / {counts['entries']} total{in_feed}")

    artifacts = info_data["artifacts"]
    if artifacts:
        typer.echo("\nArtifacts:")
        for artifact in artifacts:
            typer.echo(f"  {artifact}")


if __name__ == "__main__":
    app()
