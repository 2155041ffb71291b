#!/usr/bin/env python3
"""
Command-line interface for updating the stored profile.

The stored profile (data/profile.json by default) is only ever added to:
existing entries are never overwritten, and every write is preceded by a
timestamped backup.

Commands:
    sync     - Extract the resume document and merge it into the profile
    preview  - Show extracted text and fields without touching the profile
    stats    - Merge aggregated repository statistics into the profile
    backups  - List profile backups
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from autorriculum.contexts.intake.exceptions import (
    InvalidVocabularyError,
    SourceDocumentNotFoundError,
    SourceDocumentReadError,
)
from autorriculum.contexts.intake.logger import setup_intake_logger
from autorriculum.contexts.intake.vocabulary import load_vocabulary
from autorriculum.contexts.profile.exceptions import (
    InvalidProfileStructureError,
    ProfilePersistenceError,
)
from autorriculum.contexts.profile.logger import _log_error, setup_profile_logger
from autorriculum.contexts.profile.profile_store import PROFILE_PATH, list_backups
from autorriculum.contexts.profile.profile_sync import (
    SOURCE_DOCUMENT_PATH,
    SyncResult,
    apply_stats_file,
    preview_extraction,
    summarize_record,
    sync_profile,
)
from autorriculum.utils.timestamp import backup_stamp, format_timestamp

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

PREVIEW_CHARS = 2000

app = typer.Typer(
    add_completion=False,
    help="Update the stored profile from a resume document or repository statistics",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _run_log_dir(command: str) -> Path:
    log_dir = LOGS_PATH / f"{command}_{backup_stamp()}"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _fail(message: str) -> None:
    _log_error(message)
    typer.secho(f"✗ {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _print_result(result: SyncResult) -> None:
    if result.changed:
        typer.secho("\nAdded:", fg=typer.colors.BLUE, bold=True)
        for section, count in result.added.items():
            typer.echo(f"  {section:25} +{count}")
    else:
        typer.echo("\nNo new data; profile content unchanged")

    typer.secho("\nProfile:", fg=typer.colors.BLUE, bold=True)
    for row in summarize_record(result.record):
        typer.echo(f"  {row['section']:25} {row['count']}")

    if result.written:
        typer.secho(f"\n✓ Profile saved: {result.profile_path}", fg=typer.colors.GREEN)
        if result.backup_path:
            typer.echo(f"  Backup: {result.backup_path}")
    else:
        typer.echo("\nDry run complete. Run without --dry-run to save.")


@app.command("sync")
def sync_command(
    document: Annotated[
        Optional[Path],
        typer.Option("--document", "-d", help="Resume document (.pdf or text)"),
    ] = None,
    profile: Annotated[
        Optional[Path], typer.Option("--profile", "-p", help="Stored profile JSON")
    ] = None,
    vocabulary: Annotated[
        Optional[Path],
        typer.Option("--vocabulary", "-v", help="YAML file overriding extraction word lists"),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", help="Merge and report without saving")
    ] = False,
):
    """
    Extract the resume document and merge it into the stored profile.

    Examples:\n

        $ update_profile.py sync                          # Default document and profile

        $ update_profile.py sync -d resume.pdf --dry-run  # Report what would be added
    """
    document = document or SOURCE_DOCUMENT_PATH
    profile = profile or PROFILE_PATH
    log_file = setup_profile_logger(_run_log_dir("sync"), run_name="sync", profile_path=profile)

    try:
        result = sync_profile(
            document_path=document,
            profile_path=profile,
            dry_run=dry_run,
            vocabulary=load_vocabulary(vocabulary),
        )
    except SourceDocumentNotFoundError as e:
        _fail(f"{e}. Export the resume to {document} or pass --document.")
    except SourceDocumentReadError as e:
        _fail(str(e))
    except InvalidVocabularyError as e:
        _fail(f"Invalid vocabulary: {e}")
    except ProfilePersistenceError as e:
        _fail(str(e))

    _print_result(result)
    typer.echo(f"  Log: {log_file}")


@app.command("preview")
def preview_command(
    document: Annotated[
        Optional[Path],
        typer.Option("--document", "-d", help="Resume document (.pdf or text)"),
    ] = None,
    vocabulary: Annotated[
        Optional[Path],
        typer.Option("--vocabulary", "-v", help="YAML file overriding extraction word lists"),
    ] = None,
    full: Annotated[bool, typer.Option("--full", help="Print the whole extracted text")] = False,
):
    """
    Show what would be extracted from the resume document.

    The stored profile is not read or written.

    Examples:\n

        $ update_profile.py preview

        $ update_profile.py preview -d resume.txt --full
    """
    document = document or SOURCE_DOCUMENT_PATH
    setup_intake_logger(_run_log_dir("preview"), document=document)

    try:
        preview = preview_extraction(document, load_vocabulary(vocabulary))
    except (SourceDocumentNotFoundError, SourceDocumentReadError) as e:
        _fail(str(e))
    except InvalidVocabularyError as e:
        _fail(f"Invalid vocabulary: {e}")

    text = preview.text if full else preview.text[:PREVIEW_CHARS]
    typer.secho(
        f"\nExtracted text ({preview.line_count} lines):", fg=typer.colors.BLUE, bold=True
    )
    typer.echo("=" * 80)
    typer.echo(text)
    if not full and len(preview.text) > PREVIEW_CHARS:
        typer.echo(f"... ({len(preview.text) - PREVIEW_CHARS} more characters, use --full)")
    typer.echo("=" * 80)

    typer.secho("\nExtracted fields:", fg=typer.colors.BLUE, bold=True)
    if preview.fragment.is_empty():
        typer.echo("  (none)")
    else:
        typer.echo(json.dumps(preview.fragment.to_dict(), indent=2, ensure_ascii=False))


@app.command("stats")
def stats_command(
    stats_file: Annotated[Path, typer.Argument(help="Aggregated repository statistics JSON")],
    profile: Annotated[
        Optional[Path], typer.Option("--profile", "-p", help="Stored profile JSON")
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", help="Merge and report without saving")
    ] = False,
):
    """
    Merge aggregated repository statistics into the stored profile.

    Examples:\n

        $ update_profile.py stats outs/github_stats.json
    """
    profile = profile or PROFILE_PATH
    setup_profile_logger(_run_log_dir("stats"), run_name="stats", profile_path=profile)

    try:
        result = apply_stats_file(stats_file, profile_path=profile, dry_run=dry_run)
    except FileNotFoundError:
        _fail(f"Stats file not found: {stats_file}")
    except InvalidProfileStructureError as e:
        _fail(f"Invalid stats file: {e}")
    except ProfilePersistenceError as e:
        _fail(str(e))

    _print_result(result)


@app.command("backups")
def backups_command(
    profile: Annotated[
        Optional[Path], typer.Option("--profile", "-p", help="Stored profile JSON")
    ] = None,
    relative: Annotated[
        bool, typer.Option("--relative", "-r", help="Show ages instead of dates")
    ] = False,
):
    """
    List backups of the stored profile, oldest first.

    Examples:\n

        $ update_profile.py backups -r
    """
    profile = profile or PROFILE_PATH
    backups = list_backups(profile)

    typer.secho(f"\nBackups of {profile}:", fg=typer.colors.BLUE, bold=True)
    if not backups:
        typer.echo("  (none)")
        return

    for backup in backups:
        created = format_timestamp(backup.created, relative=relative) if backup.created else "?"
        typer.echo(f"  {created:20} {backup.path.name}")

    typer.echo(f"\nTotal: {len(backups)}")


if __name__ == "__main__":
    app()
