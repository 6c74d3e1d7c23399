"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..chat import Sender, TranscriptStore
from ..errors import MentorError, PersistenceError
from ..prompts import build_prompt, format_list
from ..ui.formatting import format_marks_markup, format_time_of_day
from .providers import build_controller, get_generator, get_profile, get_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="studymentor",
    help="Personalized study mentor chat grounded in a student profile",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

_profile_option = typer.Option(
    None,
    "--profile",
    "-p",
    help="JSON profile file (default: MENTOR_PROFILE or the built-in profile)"
)


def _load_profile_or_exit(profile_path: Path | None):
    try:
        return get_profile(profile_path)
    except MentorError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _get_store_or_exit():
    try:
        return get_store()
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _report_persistence_error(e: PersistenceError) -> None:
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    console.print("[dim]Reset the stored chat with: studymentor clear --yes[/dim]")


def _console_debug(level: str, component: str, message: str) -> None:
    colors = {"debug": "dim", "info": "cyan", "warning": "yellow", "error": "red"}
    color = colors.get(level, "white")
    console.print(f"[{color}]{level.upper():<7}[/{color}] [dim]\\[{component}][/dim] {message}")


@app.command(name="tui")
def tui_command(
    profile_path: Path | None = _profile_option,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level (debug, info, warning, error)"
    ),
):
    """Start the interactive chat TUI."""
    from ..ui import run_textual_tui

    profile = _load_profile_or_exit(profile_path)
    store = _get_store_or_exit()

    async def _tui():
        generator = get_generator(console)
        await store.connect()
        try:
            controller = build_controller(store, generator, profile)
            await controller.load()
            await run_textual_tui(controller, log_level=log_level)
        finally:
            await store.disconnect()

    try:
        asyncio.run(_tui())
    except PersistenceError as e:
        _report_persistence_error(e)
        raise typer.Exit(code=1)


@app.command()
def ask(
    query: str = typer.Argument(..., help="Question for the mentor"),
    profile_path: Path | None = _profile_option,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the prompt that would be sent, without calling the API"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show chat events"
    ),
):
    """Ask one question; the exchange is added to the saved chat."""
    profile = _load_profile_or_exit(profile_path)

    if not query.strip():
        console.print("[dim]Nothing to ask.[/dim]")
        return

    if dry_run:
        console.print(build_prompt(profile, query.strip()), markup=False)
        return

    store = _get_store_or_exit()

    async def _ask():
        generator = get_generator(console)
        await store.connect()
        try:
            controller = build_controller(store, generator, profile)
            if verbose:
                controller.set_debug_callback(_console_debug)
            await controller.load()
            reply = await controller.send(query)
        finally:
            await generator.close()
            await store.disconnect()

        if reply is not None:
            console.print(Panel(reply.content, title=f"Mentor for {profile.name}", border_style="blue"))

    try:
        asyncio.run(_ask())
    except PersistenceError as e:
        _report_persistence_error(e)
        raise typer.Exit(code=1)


@app.command()
def history(
    limit: int = typer.Option(
        0,
        "--limit",
        "-n",
        min=0,
        help="Show only the last N messages (0 shows all)"
    ),
):
    """Show the saved chat transcript."""
    store = _get_store_or_exit()

    async def _history():
        await store.connect()
        try:
            return await TranscriptStore(store).load()
        finally:
            await store.disconnect()

    try:
        messages = asyncio.run(_history())
    except PersistenceError as e:
        _report_persistence_error(e)
        raise typer.Exit(code=1)

    if not messages:
        console.print("[dim]No saved messages.[/dim]")
        return

    if limit:
        messages = messages[-limit:]

    table = Table(title="Chat History")
    table.add_column("Time", style="dim", no_wrap=True)
    table.add_column("From", style="bold")
    table.add_column("Message")
    for message in messages:
        sender = "[blue]You[/blue]" if message.sender == Sender.USER else "[green]Mentor[/green]"
        table.add_row(format_time_of_day(message.timestamp), sender, escape(message.content))
    console.print(table)


@app.command()
def clear(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation"
    ),
):
    """Clear the saved chat transcript."""
    if not yes:
        confirm = typer.confirm("Delete the saved chat?")
        if not confirm:
            console.print("[dim]Aborted.[/dim]")
            return

    store = _get_store_or_exit()

    async def _clear():
        # A corrupt store file cannot be loaded, so it is replaced outright
        try:
            await store.connect()
        except PersistenceError:
            _reset_store_file(store)
            await store.connect()
        try:
            await TranscriptStore(store).clear()
        finally:
            await store.disconnect()

    asyncio.run(_clear())
    console.print("[green]Chat cleared.[/green]")


def _reset_store_file(store) -> None:
    path = getattr(store, "path", None)
    if path is None:
        raise typer.Exit(code=1)
    console.print(f"[yellow]Store file {path} is unreadable; starting a new one.[/yellow]")
    Path(path).unlink(missing_ok=True)


@app.command(name="profile")
def profile_command(
    profile_path: Path | None = _profile_option,
):
    """Show the student profile."""
    profile = _load_profile_or_exit(profile_path)

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Schedule", escape(profile.schedule))
    table.add_row("Academic Performance", format_marks_markup(profile))
    table.add_row("Interests", escape(format_list(profile.interests)))
    table.add_row("Learning Preferences", escape(format_list(profile.likes)))
    table.add_row("Learning Challenges", escape(format_list(profile.dislikes)))
    table.add_row("About", escape(profile.description))
    console.print(Panel(table, title=f"{profile.name}'s Profile", border_style="magenta"))


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
