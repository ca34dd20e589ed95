"""Command line entry point: ``admin-client``."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, List, Optional

import typer
from rich.console import Console

from .api import auth, vendors
from .api.client import AdminClient
from .api.errors import ApiError
from .log import configure_logging
from .storage.config import Settings

app = typer.Typer(help="Talk to the admin dashboard API from the terminal.")
console = Console()


def _session_expired() -> None:
    console.print(
        "[bold red]Session expired.[/bold red] "
        "Run [cyan]admin-client login[/cyan] to sign in again."
    )


def _build_client() -> AdminClient:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return AdminClient(settings, on_session_expired=_session_expired)


def _run(action: Callable[[AdminClient], Awaitable[Any]]) -> Any:
    """Run *action* with a fresh client, turning :class:`ApiError` into exit code 1."""

    async def runner() -> Any:
        async with _build_client() as client:
            return await action(client)

    try:
        return asyncio.run(runner())
    except ApiError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc.message} (status {exc.status})")
        raise typer.Exit(code=1)


def _print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Account password"
    ),
    remember: bool = typer.Option(
        True, "--remember/--no-remember", help="Keep the session on disk between runs"
    ),
):
    """Log in and store the session tokens."""
    _run(lambda client: auth.login(client, email, password, remember=remember))
    console.print(f"[bold green]Logged in[/bold green] as {email}")


@app.command()
def logout():
    """Forget the stored session."""

    async def action(client: AdminClient) -> None:
        auth.logout(client)

    _run(action)
    console.print("Logged out.")


@app.command()
def status():
    """Show whether a session is stored (tokens are never printed)."""

    async def action(client: AdminClient) -> None:
        record = client.store.get()
        if not record.is_authenticated:
            console.print("[yellow]Not logged in.[/yellow]")
            return
        console.print(f"[bold green]Logged in[/bold green] ({record.storage_type} storage)")
        console.print(f"Refresh token: {'yes' if record.refresh_token else 'no'}")
        if record.user is not None:
            _print_json(record.user)

    _run(action)


@app.command()
def me():
    """Print the logged-in user's profile."""
    _print_json(_run(auth.me))


@app.command()
def get(
    path: str = typer.Argument(..., help="API path, e.g. /general/platforms"),
    param: Optional[List[str]] = typer.Option(
        None, "--param", "-q", help="Query parameter as key=value (repeatable)"
    ),
):
    """Send an authenticated GET request and print the JSON response."""
    params: dict[str, str] = {}
    for item in param or []:
        key, sep, value = item.partition("=")
        if not sep:
            raise typer.BadParameter(f"Expected key=value, got {item!r}", param_hint="--param")
        params[key] = value
    _print_json(_run(lambda client: client.get(path, params=params or None)))


@app.command("vendors")
def list_vendors(
    page: int = typer.Option(1, help="Page number"),
    limit: int = typer.Option(10, help="Vendors per page"),
    search: str = typer.Option("", help="Free-text search"),
):
    """List vendors, optionally filtered by a search string."""
    if search:
        data = _run(lambda client: vendors.search_vendors(client, search, page=page, limit=limit))
    else:
        data = _run(lambda client: vendors.get_vendors(client, page=page, limit=limit))
    _print_json(data)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
