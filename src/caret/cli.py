"""caret command line."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from caret import __version__
from caret.config import CaretConfig, find_config, load_config, scaffold
from caret.errors import ReportError
from caret.loader import load_diagnostic
from caret.reporter import ReportRenderer, render_fallback

_log = logging.getLogger("caret")


def _configure_logging(level: str | int) -> None:
    """Attach a single stderr handler to the ``caret`` logger."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s", datefmt="%H:%M:%S")
    )
    _log.handlers.clear()
    _log.addHandler(handler)
    _log.setLevel(level)


def _load_settings(config_path: str | None, near: Path) -> CaretConfig:
    if config_path is not None:
        return load_config(Path(config_path))
    try:
        return load_config(find_config(near))
    except FileNotFoundError:
        return CaretConfig()


@click.group()
@click.version_option(__version__, prog_name="caret")
def main() -> None:
    """Render structured diagnostics as compiler-style reports."""


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--color/--no-color", default=None, help="Force ANSI colors on or off.")
@click.option("--debug", is_flag=True, help="Dump the diagnostic structure instead of a report.")
@click.option(
    "--format", "fmt", type=click.Choice(["text", "lsp"]), default="text",
    help="Human report or LSP diagnostics as JSON.",
)
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def render(
    file: str, color: bool | None, debug: bool, fmt: str, config_path: str | None, verbose: bool,
) -> None:
    """Render the JSON diagnostic document FILE."""
    path = Path(file)
    try:
        config = _load_settings(config_path, path)
    except ValueError as e:
        click.echo(f"error: invalid config: {e}", err=True)
        raise SystemExit(1)
    _configure_logging(logging.DEBUG if verbose else config.log.level)

    try:
        diagnostic = load_diagnostic(path)
    except (OSError, ValueError) as e:
        click.echo(f"error: invalid diagnostic file {file}: {e}", err=True)
        raise SystemExit(1)
    _log.debug("loaded %s[%s] from %s", diagnostic.severity().title, diagnostic.code(), path)

    try:
        if fmt == "lsp":
            from lsprotocol.converters import get_converter

            from caret.lsp import to_lsp

            items = get_converter().unstructure(to_lsp(diagnostic))
            click.echo(json.dumps(items, indent=2, ensure_ascii=False))
            return

        use_color = config.render.color if color is None else color
        renderer = ReportRenderer(
            color=use_color,
            highlight=config.render.highlight,
            debug=debug or config.render.debug,
        )
        click.echo(renderer.render(diagnostic), color=use_color and not renderer.debug)
    except ReportError as e:
        click.echo(render_fallback(diagnostic), err=True)
        click.echo(f"error: could not render diagnostic: {e}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False))
def init(path: str) -> None:
    """Write a default caret.toml."""
    try:
        created = scaffold(Path(path))
    except FileExistsError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"created {created}")
