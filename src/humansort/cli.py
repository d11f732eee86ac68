"""Command-line interface for humansort."""

import itertools
import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import Config, get_config
from .ingest import load_item_list
from .models import RankingState
from .ranking import (
    RankingError,
    add_item,
    drain_ranked,
    from_items,
    merge,
    remove_item,
    rename_item,
    set_batch_size,
)
from .session import run_rounds
from .storage import StateFile, StateFileError, default_state_path

console = Console()


def setup_logging(verbose: bool, config: Config):
    """Configure logging based on verbosity."""
    logging.basicConfig(level=logging.WARNING, format=config.log_format)
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(config.log_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.getLogger("humansort").setLevel(level)


def fail(ctx: click.Context, message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(message)}")
    ctx.exit(1)


def load_state(ctx: click.Context, hs_file: Path) -> tuple[StateFile, RankingState]:
    """Load a humansort file or exit with an error."""
    state_file = StateFile(hs_file)
    try:
        return state_file, state_file.load()
    except StateFileError as e:
        fail(ctx, str(e))


def read_items(ctx: click.Context, list_file: Path) -> list[str]:
    """Read a list file or exit with an error."""
    try:
        return load_item_list(list_file)
    except (OSError, UnicodeDecodeError) as e:
        fail(ctx, f"Cannot read {list_file}: {e}")


def display_batch(batch: list[str]):
    """Show a batch as a numbered table."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan", justify="right")
    table.add_column("Item")

    for i, value in enumerate(batch, start=1):
        table.add_row(str(i), escape(value))

    console.print()
    console.print(table)


def terminal_prompt(batch: list[str]) -> Optional[str]:
    """Show a batch and read the user's choice. Returns None on EOF."""
    display_batch(batch)
    try:
        return click.prompt("Best", prompt_suffix=": ")
    except click.Abort:
        return None


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.version_option(package_name="humansort")
@click.pass_context
def main(ctx, verbose):
    """humansort - rank a list by repeatedly picking the best of a few items."""
    ctx.ensure_object(dict)
    config = get_config()
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose
    setup_logging(verbose, config)


@main.command()
@click.argument(
    "input_file",
    metavar="INFILE",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument(
    "hs_file",
    metavar="[OUTFILE]",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option("--batch-size", "-b", type=int, help="Items per round (2-9)")
@click.option("--force", is_flag=True, help="Overwrite an existing humansort file")
@click.pass_context
def start(
    ctx,
    input_file: Path,
    hs_file: Optional[Path],
    batch_size: Optional[int],
    force: bool,
):
    """Read a line-delimited list of items and create a humansort file.

    OUTFILE defaults to INFILE with .humansort appended.
    """
    config = ctx.obj["config"]
    if hs_file is None:
        hs_file = default_state_path(input_file, config.state_suffix)
    if batch_size is None:
        batch_size = config.default_batch_size

    state_file = StateFile(hs_file)
    if state_file.exists() and not force:
        fail(ctx, f"{hs_file} already exists (use merge to update it, or --force)")

    names = read_items(ctx, input_file)
    try:
        state = from_items(names, batch_size=batch_size)
    except RankingError as e:
        fail(ctx, str(e))

    state_file.save(state)
    console.print(f"[green]Created[/green] {escape(str(hs_file))} with {len(state.items)} items")


@main.command(name="merge")
@click.argument("hs_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument(
    "input_file",
    metavar="LISTFILE",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_context
def merge_command(ctx, hs_file: Path, input_file: Path):
    """Merge an updated list file into an existing humansort file.

    Ratings of items still in the list are kept.
    """
    state_file, state = load_state(ctx, hs_file)
    result = merge(state, read_items(ctx, input_file))
    state_file.save(state)

    console.print(
        f"Kept {len(result.kept)}, "
        f"[green]added {len(result.added)}[/green], "
        f"[red]dropped {len(result.dropped)}[/red]"
    )


@main.command()
@click.argument("hs_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--rounds", "-n", type=int, help="Stop after this many rounds")
@click.option("--batch-size", "-b", type=int, help="Change items per round (2-9)")
@click.pass_context
def sort(ctx, hs_file: Path, rounds: Optional[int], batch_size: Optional[int]):
    """Interactively sort a humansort file."""
    config = ctx.obj["config"]
    state_file, state = load_state(ctx, hs_file)

    if batch_size is not None:
        try:
            set_batch_size(state, batch_size)
        except RankingError as e:
            fail(ctx, str(e))
        state_file.save(state)

    console.print(
        "Type the number of the best item. "
        "Type several numbers to order the rest too, q to quit."
    )

    try:
        completed = run_rounds(
            state,
            prompt=terminal_prompt,
            store=state_file.save,
            rounds=rounds,
            bias=config.selection_bias,
            on_invalid=lambda message: console.print(f"[yellow]{escape(message)}[/yellow]"),
        )
    except RankingError as e:
        fail(ctx, str(e))

    console.print(f"\nRecorded {completed} rounds in {escape(str(hs_file))}")


@main.command()
@click.argument("hs_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--limit", "-n", type=click.IntRange(min=1), help="Only print the top N items")
@click.option("--ratings", is_flag=True, help="Include ratings")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def output(ctx, hs_file: Path, limit: Optional[int], ratings: bool, json_output: bool):
    """Print the items of a humansort file, best first."""
    _, state = load_state(ctx, hs_file)

    items = drain_ranked(state)
    if limit is not None:
        items = itertools.islice(items, limit)

    if json_output:
        click.echo(json.dumps([item.model_dump() for item in items], indent=2))
        return

    for item in items:
        if ratings:
            click.echo(f"{item.rating:9.3f}  {item.value}")
        else:
            click.echo(item.value)


@main.command()
@click.argument("hs_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("name")
@click.pass_context
def add(ctx, hs_file: Path, name: str):
    """Add an item."""
    state_file, state = load_state(ctx, hs_file)
    try:
        add_item(state, name)
    except RankingError as e:
        fail(ctx, str(e))
    state_file.save(state)
    console.print(f"[green]Added[/green] {escape(name)}")


@main.command()
@click.argument("hs_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("old")
@click.argument("new")
@click.pass_context
def rename(ctx, hs_file: Path, old: str, new: str):
    """Rename an item, keeping its rating."""
    state_file, state = load_state(ctx, hs_file)
    try:
        rename_item(state, old, new)
    except RankingError as e:
        fail(ctx, str(e))
    state_file.save(state)
    console.print(f"Renamed {escape(old)} to {escape(new)}")


@main.command()
@click.argument("hs_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("name")
@click.pass_context
def remove(ctx, hs_file: Path, name: str):
    """Remove an item."""
    state_file, state = load_state(ctx, hs_file)
    try:
        remove_item(state, name)
    except RankingError as e:
        fail(ctx, str(e))
    state_file.save(state)
    console.print(f"[red]Removed[/red] {escape(name)}")


@main.command(name="batch-size")
@click.argument("hs_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("size", type=int)
@click.pass_context
def batch_size_command(ctx, hs_file: Path, size: int):
    """Set how many items are shown per round."""
    state_file, state = load_state(ctx, hs_file)
    try:
        set_batch_size(state, size)
    except RankingError as e:
        fail(ctx, str(e))
    state_file.save(state)
    console.print(f"Batch size set to {size}")


@main.command()
@click.option("--host", help="Host to bind to")
@click.option("--port", "-p", type=int, help="Port to serve on")
@click.option(
    "--state",
    "state_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="App state file",
)
@click.option("--no-browser", is_flag=True, help="Don't open a browser")
@click.pass_context
def serve(
    ctx,
    host: Optional[str],
    port: Optional[int],
    state_path: Optional[Path],
    no_browser: bool,
):
    """Run the browser front-end."""
    from .web.server import serve as run_server

    config = ctx.obj["config"]
    host = host or config.web_host
    port = port if port is not None else config.web_port
    state_path = state_path or config.web_state_path

    console.print(
        Panel(
            f"Server URL: http://{host}:{port}\n"
            f"State file: {escape(str(state_path))}\n\n"
            "Press Ctrl+C to stop the server",
            title="humansort",
            border_style="blue",
        )
    )

    run_server(
        host,
        port,
        state_path,
        bias=config.selection_bias,
        output_limit=config.output_limit,
        open_browser=not no_browser,
    )


if __name__ == "__main__":
    main()
