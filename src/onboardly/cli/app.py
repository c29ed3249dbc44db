"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..chat import ChatClient, ChatError
from ..plans import TOTAL_DAYS, get_day_plan
from ..relay import DEFAULT_PROFILES
from .providers import (
    configure_logging,
    get_relay_url,
    get_user_session,
)

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="onboardly",
    help="Onboarding assistant: completion relay, streaming chat and day plans",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()

PRIORITY_STYLES = {"high": "red", "medium": "yellow", "low": "green"}


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(54321, "--port", "-p", help="Port to listen on"),
    backend: str = typer.Option(
        "http",
        "--backend",
        "-b",
        help="Gateway backend: http (verbatim passthrough) or provider (OpenAI SDK)"
    ),
    log_level: str = typer.Option("info", "--log-level", help="Log level"),
):
    """Run the completion relay."""
    import uvicorn

    from ..relay import create_app
    from .providers import get_gateway, get_relay_settings, get_verifier

    configure_logging(log_level, console)
    settings = get_relay_settings()

    try:
        gateway = get_gateway(settings, backend)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    if not settings.gateway_api_key:
        console.print("[yellow]Warning: GATEWAY_API_KEY not set, chat requests will fail[/yellow]")

    relay_app = create_app(settings, get_verifier(settings, console), gateway)
    console.print(f"[green]Relay listening on http://{host}:{port}/functions/v1/{{profile}}[/green]")
    console.print(f"[dim]Profiles: {', '.join(DEFAULT_PROFILES)}[/dim]")
    uvicorn.run(relay_app, host=host, port=port, log_level=log_level.lower())


@app.command()
def chat(
    profile: str = typer.Option(
        "onboarding-chat",
        "--profile",
        "-P",
        help="Relay profile: onboarding-chat or safe-mode-chat"
    ),
    endpoint: str | None = typer.Option(
        None,
        "--endpoint",
        "-e",
        help="Relay base URL (default: $ONBOARDLY_RELAY_URL)"
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        "-t",
        help="Access token (default: $ONBOARDLY_ACCESS_TOKEN)"
    ),
    role: str | None = typer.Option(None, "--role", help="Your job title"),
    department: str | None = typer.Option(None, "--department", "-d", help="Your department"),
    day: int | None = typer.Option(
        None,
        "--day",
        min=1,
        max=TOTAL_DAYS,
        help="Current onboarding day"
    ),
):
    """Chat with the onboarding assistant, streaming replies as they arrive."""
    if profile not in DEFAULT_PROFILES:
        console.print(f"[red]Error: Unknown profile: {profile}[/red]")
        raise typer.Exit(code=1)

    configure_logging("warning", console)
    session = get_user_session(token, role, department, day)
    url = f"{get_relay_url(endpoint)}/{profile}"

    async def _chat():
        printed = 0

        def render(message_id: str, content: str) -> None:
            nonlocal printed
            console.print(content[printed:], end="", markup=False, highlight=False)
            printed = len(content)

        async with ChatClient(session, url, on_update=render) as client:
            console.print("[dim]Type /reset to start over, /quit to exit.[/dim]")
            while True:
                try:
                    text = await asyncio.to_thread(console.input, "[bold cyan]you>[/bold cyan] ")
                except (EOFError, KeyboardInterrupt):
                    break

                command = text.strip().lower()
                if command in ("/quit", "/exit"):
                    break
                if command == "/reset":
                    client.reset()
                    console.print("[dim]Conversation cleared.[/dim]")
                    continue

                printed = 0
                console.print("[bold green]assistant>[/bold green] ", end="")
                try:
                    reply = await client.send(text)
                except ChatError as e:
                    console.print(f"\n[red]{e.message}[/red]")
                    continue

                if reply is None:
                    console.print("[dim](no response)[/dim]")
                else:
                    console.print()

    asyncio.run(_chat())


@app.command()
def plan(
    department: str = typer.Argument(..., help="Department, e.g. Engineering"),
    day: int | None = typer.Option(
        None,
        "--day",
        "-d",
        min=1,
        max=TOTAL_DAYS,
        help="Show a single day (default: whole week)"
    ),
):
    """Show the built-in onboarding plan for a department."""
    days = [day] if day is not None else list(range(1, TOTAL_DAYS + 1))

    table = Table(show_header=True, header_style="bold cyan", title=f"{department} onboarding")
    table.add_column("Day", style="dim", width=4)
    table.add_column("Task")
    table.add_column("Duration", width=10)
    table.add_column("Priority", width=8)

    for d in days:
        for task in get_day_plan(department, d):
            style = PRIORITY_STYLES.get(task.priority, "white")
            table.add_row(str(d), task.title, task.duration, f"[{style}]{task.priority}[/{style}]")

    console.print(table)


if __name__ == "__main__":
    app()
