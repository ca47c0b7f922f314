#!/usr/bin/env python3
"""
Command-line interface for accounts and saved searches.

Accounts and saved searches are kept in a local JSON store
(PROFMATCH_STORAGE_FILE). The login session persists between commands.

Commands:
    register - Create an account and log in
    login    - Log in to an existing account
    logout   - End the current session
    whoami   - Show the logged-in user
    save     - Save a match results file as a named search
    list     - List your saved searches
    show     - Show the matches in a saved search
    delete   - Delete a saved search
    export   - Export a saved search's matches
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from profmatch.contexts.accounts import (
    AuthenticationError,
    AuthService,
    JSONFileStore,
    SavedSearchStore,
    StorageError,
    default_search_name,
    format_saved_date,
    match_count_label,
    university_display_name,
)
from profmatch.contexts.accounts.logger import setup_accounts_logger
from profmatch.contexts.exporting import (
    ExportFormat,
    SavedDocument,
    TemplateRenderError,
    export_results,
)
from profmatch.contexts.matching import InvalidMatchDataError, load_matches
from profmatch.utils.timestamp import format_timestamp, now

load_dotenv()
STORAGE_FILE = Path(os.getenv("PROFMATCH_STORAGE_FILE", "outs/profmatch_storage.json"))
OUTPUT_PATH = Path(os.getenv("PROFMATCH_OUTPUT_PATH", "outs/exports"))
LOGS_PATH = Path(os.getenv("PROFMATCH_LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Manage ProfMatch accounts and saved searches",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _auth() -> AuthService:
    try:
        return AuthService(JSONFileStore(STORAGE_FILE))
    except StorageError as e:
        _fail(str(e))


def _searches() -> SavedSearchStore:
    auth = _auth()
    if not auth.is_authenticated:
        _fail("Not logged in. Run 'manage_searches.py login' first.")
    return SavedSearchStore(auth.store, auth)


@app.command("register")
def register_command(
    name: Annotated[str, typer.Argument(help="Display name")],
    email: Annotated[str, typer.Argument(help="Login email")],
    password: Annotated[
        str,
        typer.Option(prompt=True, confirmation_prompt=True, hide_input=True, help="Password"),
    ],
):
    """
    Create an account and log in.

    Examples:\n

        $ manage_searches.py register "Ada Lovelace" ada@example.com
    """
    auth = _auth()
    try:
        user = auth.register(name, email, password)
    except (AuthenticationError, StorageError) as e:
        _fail(str(e))

    typer.secho(f"✓ Registered and logged in as {user.name} ({user.email})", fg=typer.colors.GREEN)


@app.command("login")
def login_command(
    email: Annotated[str, typer.Argument(help="Login email")],
    password: Annotated[str, typer.Option(prompt=True, hide_input=True, help="Password")],
):
    """Log in to an existing account."""
    auth = _auth()
    try:
        user = auth.login(email, password)
    except (AuthenticationError, StorageError) as e:
        _fail(str(e))

    typer.secho(f"✓ Logged in as {user.name}", fg=typer.colors.GREEN)


@app.command("logout")
def logout_command():
    """End the current session."""
    auth = _auth()
    was_logged_in = auth.is_authenticated
    auth.logout()
    if was_logged_in:
        typer.secho("✓ Logged out", fg=typer.colors.GREEN)
    else:
        typer.echo("Not logged in.")


@app.command("whoami")
def whoami_command():
    """Show the logged-in user."""
    auth = _auth()
    if not auth.is_authenticated:
        typer.echo("Not logged in.")
        raise typer.Exit(code=1)

    user = auth.current_user
    typer.echo(f"{user.name} <{user.email}>")
    typer.echo(f"  ID:      {user.id}")
    typer.echo(f"  Joined:  {format_saved_date(user.created_at)}")


@app.command("save")
def save_command(
    matches_file: Annotated[Path, typer.Argument(help="YAML or JSON file holding match results")],
    university: Annotated[
        str, typer.Option("--university", "-u", help="University URL the search targeted")
    ] = "",
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Search name (default: '<university> - <date>')"),
    ] = None,
    interests: Annotated[
        Optional[List[str]],
        typer.Option("--interest", "-i", help="Research interest (repeatable)"),
    ] = None,
    resume_file_name: Annotated[
        str, typer.Option("--resume", help="Resume file name to record with the search")
    ] = "",
):
    """
    Save a match results file as a named search.

    Examples:\n

        $ manage_searches.py save matches.yaml -u https://www.mit.edu -i "machine learning"

        $ manage_searches.py save matches.yaml --name "Fall applications"
    """
    setup_accounts_logger(LOGS_PATH / f"accounts_{now()}", STORAGE_FILE)
    store = _searches()

    try:
        matches = load_matches(matches_file)
    except (FileNotFoundError, InvalidMatchDataError) as e:
        _fail(str(e))

    if name is None:
        name = default_search_name(university)

    try:
        search = store.save(
            name=name,
            university=university,
            results=matches,
            research_interests=interests or [],
            resume_file_name=resume_file_name,
        )
    except ValueError as e:
        _fail(str(e))

    if search is None:
        _fail("Failed to save search. Please try again.")

    typer.secho(
        f"✓ Saved '{search.name}' ({match_count_label(len(search.results))}) as {search.id}",
        fg=typer.colors.GREEN,
    )


@app.command("list")
def list_command():
    """List your saved searches, oldest first."""
    searches = _searches().list()

    if not searches:
        typer.echo("No saved searches.")
        return

    typer.secho(f"\n{len(searches)} saved search(es)", fg=typer.colors.BLUE, bold=True)
    for search in searches:
        university = university_display_name(search.university) if search.university else "-"
        typer.echo(
            f"  {search.id}  {search.name}  [{university}]  "
            f"{match_count_label(len(search.results))}  "
            f"{format_timestamp(search.created_at, relative=True)}"
        )


@app.command("show")
def show_command(
    search_id: Annotated[str, typer.Argument(help="Saved search ID (search_...)")],
):
    """Show the matches in a saved search."""
    search = _searches().get(search_id)
    if search is None:
        _fail(f"Saved search not found: {search_id}")

    typer.secho(f"\n{search.name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Saved:      {format_saved_date(search.created_at)}")
    if search.university:
        typer.echo(f"  University: {university_display_name(search.university)}")
    if search.research_interests:
        typer.echo(f"  Interests:  {', '.join(search.research_interests)}")
    if search.resume_file_name:
        typer.echo(f"  Resume:     {search.resume_file_name}")
    typer.echo(f"  Results:    {match_count_label(len(search.results))}\n")

    for rank, match in enumerate(search.results, start=1):
        typer.echo(f"  {rank}. {match.professor.name} ({match.match_score}%)")


@app.command("delete")
def delete_command(
    search_id: Annotated[str, typer.Argument(help="Saved search ID (search_...)")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Delete a saved search."""
    setup_accounts_logger(LOGS_PATH / f"accounts_{now()}", STORAGE_FILE)
    store = _searches()
    search = store.get(search_id)
    if search is None:
        _fail(f"Saved search not found: {search_id}")

    if not yes and not typer.confirm(f"Delete '{search.name}'?"):
        raise typer.Exit()

    store.delete(search_id)
    typer.secho(f"✓ Deleted '{search.name}'", fg=typer.colors.GREEN)


@app.command("export")
def export_command(
    search_id: Annotated[str, typer.Argument(help="Saved search ID (search_...)")],
    export_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: markdown, latex or pdf")
    ] = ExportFormat.MARKDOWN.value,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for exported files"),
    ] = None,
):
    """
    Export a saved search's matches.

    Examples:\n

        $ manage_searches.py export search_1736937600000 --format pdf
    """
    search = _searches().get(search_id)
    if search is None:
        _fail(f"Saved search not found: {search_id}")

    try:
        artifact = export_results(search.results, export_format, output_dir=output_dir or OUTPUT_PATH)
    except (TemplateRenderError, OSError, ValueError) as e:
        _fail(str(e))

    if isinstance(artifact, SavedDocument):
        typer.secho(f"✓ Exported {artifact.path}", fg=typer.colors.GREEN)
    else:
        typer.secho(
            f"✓ Exported {(output_dir or OUTPUT_PATH) / artifact.filename}", fg=typer.colors.GREEN
        )


if __name__ == "__main__":
    app()
