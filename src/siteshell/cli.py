"""CLI interface for SiteShell.

Command-line tool for serving the layout shell API and inspecting the
navigation configuration.
"""

import json
import logging
import sys
from pathlib import Path

import click

from siteshell.assets import get_default_navigation_path
from siteshell.config import Config
from siteshell.core.breadcrumbs import build_breadcrumbs
from siteshell.core.filter import filter_navigation
from siteshell.core.loader import NavigationConfigError, NavigationLoader
from siteshell.core.navigation import build_navigation
from siteshell.core.tree import NavigationTree
from siteshell.core.types import POSITIONS

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover siteshell.toml)",
)
navigation_option = click.option(
    "--navigation-file",
    "-n",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Navigation TOML file (overrides config)",
)
authenticated_option = click.option(
    "--authenticated/--anonymous",
    default=False,
    help="Show navigation as a signed-in visitor (default: anonymous)",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """SiteShell - navigation and layout shell for marketing sites."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@config_option
@navigation_option
@click.option("--host", default=None, help="Host to bind to (overrides config)")
@click.option("--port", "-p", type=int, default=None, help="Port to bind to (overrides config)")
@click.option("--base-url", default=None, help="Site origin for structured data (overrides config)")
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    navigation_file: Path | None,
    host: str | None,
    port: int | None,
    base_url: str | None,
    live_reload: bool | None,
) -> None:
    """Start the layout shell API server."""
    from siteshell.server import run_server

    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        base_url=base_url,
        navigation_file=navigation_file,
        live_reload_enabled=live_reload,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    if config.site.navigation_file is not None:
        click.echo(f"Navigation file: {config.site.navigation_file}")
    else:
        click.echo("Navigation file: bundled default")
    if config.live_reload.enabled and config.site.navigation_file is not None:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config)


@cli.command()
@config_option
@navigation_option
def validate(config_path: Path | None, navigation_file: Path | None) -> None:
    """Validate the navigation configuration."""
    loader = _create_loader(config_path, navigation_file)
    try:
        problems = loader.problems
    except NavigationConfigError as e:
        raise click.ClickException(str(e)) from e

    if not problems:
        click.echo(f"{loader.path}: OK")
        return

    click.echo(f"{loader.path}: {len(problems)} problem(s)", err=True)
    for problem in problems:
        click.echo(f"  - {problem}", err=True)
    sys.exit(1)


@cli.command()
@config_option
@navigation_option
@authenticated_option
@click.option("--path", "current_path", default="/", help="Current page path for active state")
@click.option(
    "--position",
    type=click.Choice(POSITIONS),
    default=None,
    help="Only show one navigation area",
)
def navigation(
    config_path: Path | None,
    navigation_file: Path | None,
    authenticated: bool,
    current_path: str,
    position: str | None,
) -> None:
    """Print the visible navigation tree as JSON."""
    loader = _create_loader(config_path, navigation_file)
    tree = filter_navigation(_load_tree(loader), authenticated)
    items = build_navigation(tree, current_path, position)  # type: ignore[arg-type]
    click.echo(json.dumps({"items": [item.to_dict() for item in items]}, indent=2))


@cli.command()
@click.argument("path")
@config_option
@navigation_option
@authenticated_option
@click.option("--json-ld", is_flag=True, help="Print only the ld+json structured data")
def breadcrumbs(
    path: str,
    config_path: Path | None,
    navigation_file: Path | None,
    authenticated: bool,
    json_ld: bool,
) -> None:
    """Print the breadcrumb trail for PATH as JSON."""
    config = _load_config(config_path)
    loader = _create_loader(config_path, navigation_file, config)
    tree = filter_navigation(_load_tree(loader), authenticated)
    result = build_breadcrumbs(path, tree, base_url=config.site.base_url)

    if json_ld:
        payload = result.json_ld()
        if payload is None:
            click.echo("No breadcrumbs on the home page", err=True)
            return
        click.echo(payload)
        return

    click.echo(json.dumps(result.to_dict(), indent=2))


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


def _create_loader(
    config_path: Path | None,
    navigation_file: Path | None,
    config: Config | None = None,
) -> NavigationLoader:
    if navigation_file is None:
        config = config or _load_config(config_path)
        navigation_file = config.site.navigation_file or get_default_navigation_path()
    return NavigationLoader(navigation_file)


def _load_tree(loader: NavigationLoader) -> NavigationTree:
    try:
        return loader.load()
    except NavigationConfigError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    cli()
