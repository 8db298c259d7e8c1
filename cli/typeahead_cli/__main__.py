"""Typeahead CLI - Entry Point."""

import asyncio
import sys

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from typeahead_cli.api import ApiClient, ApiError
from typeahead_cli.config import get_settings
from typeahead_cli.core import SearchController, SuggestionItem
from typeahead_cli.logging import configure_logging

console = Console()


def _suggestion_table(items: list[SuggestionItem], title: str) -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Secondary", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Match", justify="right")

    for i, item in enumerate(items, 1):
        name = Text(item.name, style=item.color or "")
        match = f"{item.match:g}" if item.match is not None else "-"
        table.add_row(str(i), name, item.secondary_term or "-", item.type or "-", match)

    return table


@click.group(invoke_without_command=True)
@click.option("--log-level", default=None, help="Override the configured log level")
@click.pass_context
def main(ctx, log_level):
    """Typeahead - search-as-you-type interest suggestions.

    Run without arguments to launch the interactive TUI.
    """
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level

    if ctx.invoked_subcommand is None:
        # Launch TUI by default
        from typeahead_cli.app import run_app
        run_app()


@main.command()
def tui():
    """Launch interactive TUI."""
    from typeahead_cli.app import run_app
    run_app()


@main.command()
@click.argument("term")
@click.option("-n", "--limit", default=None, type=int, help="Suggestions per page")
@click.option("-p", "--page", default=0, show_default=True, help="Page to fetch")
@click.pass_context
def lookup(ctx, term: str, limit: int | None, page: int):
    """Query the autocomplete service directly.

    Example: typeahead lookup music
    """
    settings = get_settings()
    configure_logging(ctx.obj.get("log_level") or settings.log_level)

    async def _lookup():
        async with ApiClient.from_settings(settings) as api:
            try:
                response = await api.query(term, limit or settings.page_size, page)
            except ApiError as e:
                console.print(f"[red]Error:[/] {e}")
                sys.exit(1)

        items = [SuggestionItem.from_raw(raw) for raw in response.items]
        if not items:
            console.print(f"[yellow]No suggestions for:[/] {term}")
            return

        console.print(_suggestion_table(items, f'Suggestions for "{term}" (page {page})'))
        console.print(f"[dim]{response.pages_left} pages left[/]")

    asyncio.run(_lookup())


@main.command()
@click.argument("term")
@click.option(
    "-i",
    "--interval",
    default=0.15,
    show_default=True,
    help="Seconds between simulated keystrokes",
)
@click.pass_context
def replay(ctx, term: str, interval: float):
    """Type TERM one character at a time through the search controller.

    Shows which keystrokes were served from cache and how many requests
    were actually sent.

    Example: typeahead replay "music" --interval 0.4
    """
    settings = get_settings()
    configure_logging(ctx.obj.get("log_level") or settings.log_level)

    async def _replay():
        async with ApiClient.from_settings(settings) as api:
            requests: list[tuple[str, int]] = []

            async def counted_query(q: str, limit: int, page: int):
                requests.append((q, page))
                return await api.query(q, limit, page)

            controller = SearchController.from_settings(counted_query, settings)
            try:
                for end in range(1, len(term) + 1):
                    typed = term[:end]
                    sent = len(requests)
                    controller.on_query_changed(typed)
                    await asyncio.sleep(interval)

                    if len(requests) > sent:
                        console.print(f"[yellow]→[/] {typed!r}: request sent")
                    else:
                        console.print(f"[dim]·[/] {typed!r}")

                await controller.wait_idle()
            finally:
                controller.close()

        console.print()
        console.print(_suggestion_table(controller.display_items, f'Suggestions for "{term}"'))
        console.print(
            f"[bold]{len(requests)}[/] requests for [bold]{len(term)}[/] keystrokes: "
            + ", ".join(f"{q!r}" for q, _ in requests)
        )

    asyncio.run(_replay())


if __name__ == "__main__":
    main()
