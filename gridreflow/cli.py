"""
Command-line interface for gridreflow.

This module provides the CLI using Typer for inspecting breakpoints,
compacting and synthesizing layouts from JSON files, and starting the
playground server.

Usage:
    gridreflow resolve 800
    gridreflow compact layout.json --cols 12 --mode vertical
    gridreflow synthesize layouts.json --width 800
    gridreflow serve --port 8050 --panels 6
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from gridreflow import __version__
from gridreflow.exceptions import GridReflowError

app = typer.Typer(
    name="gridreflow",
    help="Responsive grid layout compaction and breakpoint synthesis.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"gridreflow version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging from the layout engine.",
    ),
):
    """gridreflow - responsive grid layout engine."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _fail(message: str, error: Exception) -> None:
    console.print(f"[red]{message}:[/red] {error}")
    raise typer.Exit(1)


def _layout_table(title: str, layout) -> Table:
    table = Table(title=title, show_lines=False)
    for column in ("i", "x", "y", "w", "h", "static"):
        table.add_column(column, justify="right" if column in "xywh" else "left")
    for item in layout:
        table.add_row(
            item.id,
            str(item.x),
            str(item.y),
            str(item.w),
            str(item.h),
            "yes" if item.static else "",
        )
    return table


def _print_layout(title: str, layout, as_json: bool) -> None:
    from gridreflow.layouts.serializer import serialize_layout

    if as_json:
        console.print_json(json.dumps(serialize_layout(layout)))
    else:
        console.print(_layout_table(title, layout))


@app.command()
def resolve(
    width: int = typer.Argument(..., min=0, help="Container width in pixels."),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="JSON file with breakpoints/cols overrides.",
    ),
):
    """
    Show which breakpoint and column count a container width resolves to.
    """
    from gridreflow.config import load_config
    from gridreflow.layouts.responsive import get_breakpoint_from_width, get_cols_from_breakpoint

    try:
        config = load_config(config_path)
        breakpoint = get_breakpoint_from_width(config.breakpoints, width)
        cols = get_cols_from_breakpoint(breakpoint, config.cols)
    except GridReflowError as e:
        _fail("Configuration error", e)

    console.print(f"[bold]{breakpoint}[/bold] ({cols} cols)")


@app.command()
def compact(
    layout_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON file containing a list of layout items.",
    ),
    cols: int = typer.Option(12, "--cols", "-n", min=1, help="Column count."),
    mode: str = typer.Option(
        "vertical",
        "--mode",
        "-m",
        help="Compaction mode: vertical, horizontal or none.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
):
    """
    Compact a single layout and print the result.
    """
    from gridreflow.layouts.compaction import compact as compact_layout
    from gridreflow.layouts.serializer import load_layout_from_file

    try:
        layout = load_layout_from_file(layout_path)
        result = compact_layout(layout, cols, mode)
    except json.JSONDecodeError as e:
        _fail("Invalid JSON", e)
    except GridReflowError as e:
        _fail("Layout error", e)

    _print_layout(f"{layout_path.name} ({mode}, {cols} cols)", result, as_json)


@app.command()
def synthesize(
    layouts_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON file mapping breakpoints to layouts.",
    ),
    width: int = typer.Option(..., "--width", "-w", min=0, help="Container width in pixels."),
    from_breakpoint: Optional[str] = typer.Option(
        None,
        "--from",
        help="Breakpoint being left; preferred as the scaling source.",
    ),
    items: Optional[List[str]] = typer.Option(
        None,
        "--item",
        "-i",
        help="Live item id (repeatable). Defaults to the source layout's items.",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="JSON file with grid config overrides.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
):
    """
    Find or generate the layout for the breakpoint a width resolves to.
    """
    from gridreflow.config import load_config
    from gridreflow.layouts.responsive import (
        find_or_generate_responsive_layout,
        get_breakpoint_from_width,
        get_cols_from_breakpoint,
    )
    from gridreflow.layouts.serializer import load_layouts_from_file
    from gridreflow.layouts.sync import synchronize_layout_with_items

    try:
        config = load_config(config_path)
        layouts = load_layouts_from_file(layouts_path)
        breakpoint = get_breakpoint_from_width(config.breakpoints, width)
        cols = get_cols_from_breakpoint(breakpoint, config.cols)
        layout, generated = find_or_generate_responsive_layout(
            layouts,
            config.breakpoints,
            config.cols,
            breakpoint,
            from_breakpoint or breakpoint,
            config.compact_type,
        )
        if items:
            layout = synchronize_layout_with_items(
                layout,
                items,
                cols,
                config.compact_type,
                default_w=config.default_item_w,
                default_h=config.default_item_h,
            )
    except (json.JSONDecodeError, ValueError) as e:
        _fail("Layout error", e)

    source = "generated" if generated else "cached"
    _print_layout(f"{breakpoint} ({cols} cols, {source})", layout, as_json)


@app.command()
def serve(
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        "-h",
        help="Host address to bind the server.",
    ),
    port: int = typer.Option(
        8050,
        "--port",
        "-p",
        min=1024,
        max=65535,
        help="Port number for the server.",
    ),
    panels: int = typer.Option(4, "--panels", min=0, help="Number of initial panels."),
    layouts_path: Optional[Path] = typer.Option(
        None,
        "--layouts",
        "-l",
        exists=True,
        dir_okay=False,
        help="JSON file with authored per-breakpoint layouts.",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="JSON file with grid config overrides.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with hot reloading.",
    ),
):
    """
    Start the responsive grid playground.
    """
    from gridreflow.app import create_app
    from gridreflow.config import load_config
    from gridreflow.layouts.serializer import load_layouts_from_file

    console.print(Panel.fit(
        f"[bold blue]gridreflow[/bold blue] v{__version__}\n"
        f"Responsive grid playground",
        border_style="blue",
    ))

    try:
        config = load_config(config_path)
        layouts = load_layouts_from_file(layouts_path) if layouts_path else None
        dash_app = create_app(config, n_panels=panels, layouts=layouts)
    except (json.JSONDecodeError, ValueError) as e:
        _fail("Error", e)

    url = f"http://{host}:{port}" if host != "0.0.0.0" else f"http://127.0.0.1:{port}"
    console.print(f"\n[bold green]Starting server at {url}[/bold green]")
    console.print("[dim]Press Ctrl+C to stop.[/dim]\n")

    try:
        dash_app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped.[/yellow]")
        raise typer.Exit(0)


if __name__ == "__main__":
    app()
