"""Main CLI application using Typer."""
import asyncio
import time

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..conversation import (
    EXAMPLE_THEMES,
    PREMADE_STORIES,
    ConversationEngine,
    ConversationEvent,
    EventKind,
    resolve_theme,
)
from ..errors import TaleweaverError
from .config import LOG_TIMESTAMP_FORMAT, QUIT_COMMANDS, RETRY_COMMAND, LogLevel
from .providers import get_image_provider, require_llm

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="taleweaver",
    help="Interactive illustrated stories driven by a text-completion model",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def themes():
    """List example themes and premade stories."""
    table = Table(title="Premade stories", show_header=True)
    table.add_column("Key", style="bold cyan")
    table.add_column("Summary")
    for key, summary in PREMADE_STORIES.items():
        table.add_row(key, summary)
    console.print(table)

    console.print("\n[bold]Example themes:[/bold]")
    for theme in EXAMPLE_THEMES:
        console.print(f"  - {theme}")


@app.command()
def play(
    theme: str | None = typer.Argument(
        None,
        help="Story theme (prompted for when omitted)"
    ),
    premade: str | None = typer.Option(
        None,
        "--premade",
        "-p",
        help=f"Use a premade story instead of a theme ({', '.join(PREMADE_STORIES)})"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show engine diagnostics"
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Lowest diagnostic level shown with --verbose (debug, info, warning, error)"
    ),
):
    """Play an interactive story in the terminal."""
    if premade is not None:
        if premade.lower() not in PREMADE_STORIES:
            console.print(f"[red]Error: Unknown premade story: {premade}[/red]")
            raise typer.Exit(code=1)
        theme = premade
    if theme is None:
        theme = console.input(
            f"[bold]Enter a theme[/bold] [dim](e.g. {EXAMPLE_THEMES[0]})[/dim]: "
        )

    try:
        story_theme = resolve_theme(theme)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    async def _play():
        llm = require_llm(console)
        images = get_image_provider(console)
        engine = ConversationEngine(theme=story_theme, llm=llm, images=images)

        if verbose:
            engine.set_debug_callback(_debug_printer(LogLevel.from_string(log_level)))

        shown_url: str | None = None

        def _on_event(event: ConversationEvent) -> None:
            nonlocal shown_url
            if event.kind == EventKind.TURN_FAILED:
                console.print(f"[yellow]The story got stuck: {escape(event.error or '')}[/yellow]")
                console.print(
                    f"[dim]Your last answer stays in the story. Type {RETRY_COMMAND} to try again.[/dim]"
                )
                return
            url = event.snapshot.illustration_url
            if url and url != shown_url:
                shown_url = url
                console.print(f"[magenta]Illustration:[/magenta] {url}")

        engine.subscribe(_on_event)

        async def _run_beat(task: asyncio.Task | None) -> None:
            """Wait for a story beat and its illustration."""
            if task is None:
                return
            with console.status("[dim]...[/dim]"):
                message = await task
            if message is None:
                return
            console.print(
                f"[bold green]Story[/bold green] [dim]({engine.elapsed()})[/dim]: {escape(message.content)}"
            )
            await engine.wait_idle()

        console.print(Panel(story_theme, title="AI Story Mode", border_style="red"))
        console.print(f"[dim]Type {QUIT_COMMANDS[0]} to end the story[/dim]\n")

        try:
            await _run_beat(engine.start())

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print()
                    break

                command = user_input.strip().lower()
                if not command:
                    continue
                if command in QUIT_COMMANDS:
                    break

                try:
                    if command == RETRY_COMMAND:
                        task = engine.retry()
                        if task is None:
                            console.print("[dim]Nothing to retry.[/dim]")
                        await _run_beat(task)
                        continue

                    await _run_beat(engine.submit(user_input))
                except TaleweaverError as e:
                    console.print(f"[red]Error: {escape(str(e))}[/red]")

            console.print(
                f"\n[bold]The End.[/bold] [dim]{engine.turn} beats in {engine.elapsed()}[/dim]"
            )
        finally:
            await engine.close()
            await llm.close()
            if images is not None:
                await images.close()

    asyncio.run(_play())


def _debug_printer(min_level: int):
    """Build an engine debug callback that prints to the console."""
    def _print(level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(level)
        if numeric < min_level:
            return
        stamp = time.strftime(LOG_TIMESTAMP_FORMAT)
        style = LogLevel.style(numeric)
        console.print(
            f"[dim]{stamp}[/dim] [{style}]{LogLevel.name(numeric):<7}[/{style}] "
            f"[bold]{component}[/bold]: {escape(message)}",
            markup=True,
            highlight=False,
        )
    return _print


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
