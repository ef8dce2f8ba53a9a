"""
Command line interface for the commit_analyzer tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``commit-analyze`` command. It reads the staged
diff (or a diff file), runs the analysis and shows the classified files
together with the recommended commit type and scope.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, List, Optional

import click

from commit_analyzer import __version__
from commit_analyzer.config.loader import ConfigError, load_config
from commit_analyzer.diff.models import DiffParseError, DiffResult, FileCategory
from commit_analyzer.diff.parser import analyze_diff
from commit_analyzer.vcs.git_client import GitClient, GitError

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_NO_CHANGES = 4
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6
EXIT_PARSE_ERROR = 9


CATEGORY_COLORS = {
    FileCategory.SOURCE: "cyan",
    FileCategory.TEST: "yellow",
    FileCategory.DOC: "green",
    FileCategory.CONFIG: "magenta",
}

STATUS_MARKERS = {
    "added": "A",
    "deleted": "D",
    "modified": "M",
}


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def format_scope(result: DiffResult) -> str:
    """Render the recommendation as a Conventional Commit prefix."""
    if result.scopes:
        return f"{result.commit_type}({','.join(result.scopes)})"
    return result.commit_type


def display_result(result: DiffResult, max_files: int) -> None:
    """Print the file classifications and the recommendation."""
    count = len(result.files)
    print_success(f"Analyzed {count} file{'s' if count != 1 else ''}")
    for record in result.files[:max_files]:
        marker = STATUS_MARKERS[record.status]
        category = click.style(
            record.category.value.ljust(6), fg=CATEGORY_COLORS[record.category]
        )
        click.echo(f"   {marker} [{category}] {record.path or '(unknown path)'}")
        summary = record.summarize()
        if summary:
            click.echo(click.style(f"       {summary}", dim=True))
    if count > max_files:
        print_info(f"... and {count - max_files} more", indent=1)

    click.echo("")
    click.echo(
        f"🏷️  Recommended type: {click.style(result.commit_type, fg='cyan', bold=True)}"
    )
    if result.scopes:
        click.echo(f"📁 Recommended scope: {', '.join(result.scopes)}")
    click.echo(f"💬 Suggested prefix: {format_scope(result)}: ...")


def read_staged_diff(cwd: Path, quiet: bool = False) -> str:
    """Read the staged diff of the repository containing ``cwd``.

    Raises
    ------
    click.exceptions.Exit
        With EXIT_NO_REPO, EXIT_NO_CHANGES or EXIT_VCS_FAILURE.
    """
    repo_root = GitClient.find_repo_root(cwd)
    if repo_root is None:
        print_error("No Git repository found in current directory or parent directories.")
        raise click.exceptions.Exit(EXIT_NO_REPO)
    logger.debug("Detected Git repository at %s", repo_root)

    client = GitClient(repo_root)
    try:
        staged: List[str] = client.get_staged_files()
        if not staged:
            print_error("No staged files. Stage files using git add and try again.")
            raise click.exceptions.Exit(EXIT_NO_CHANGES)
        if not quiet:
            print_success(f"{len(staged)} file{'s' if len(staged) != 1 else ''} staged")
        return client.get_staged_diff()
    except GitError as exc:
        print_error(f"VCS error: {exc}")
        raise click.exceptions.Exit(EXIT_VCS_FAILURE)


@click.command()
@click.option(
    "--diff-file",
    type=click.File("r", encoding="utf-8", errors="replace"),
    help="Analyze a diff file instead of the staged changes ('-' for stdin).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a JSON configuration file.",
)
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="commit-analyze")
def main(
    diff_file: Optional[IO[str]],
    as_json: bool,
    config_path: Optional[Path],
    verbose: bool,
) -> None:
    """Recommend a Conventional Commit type and scope for staged changes.

    The staged diff is split per file, every file is classified as
    source, test, doc or config, and the commit type and scope are
    inferred from the result.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    try:
        try:
            config = load_config(config_path)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        if diff_file is not None:
            raw_diff = diff_file.read()
        else:
            raw_diff = read_staged_diff(Path.cwd(), quiet=as_json)

        try:
            result = analyze_diff(
                raw_diff,
                parallel_threshold=config["parallel_threshold"],
                max_workers=config["max_workers"],
            )
        except DiffParseError as exc:
            print_error(f"Failed to parse diff: {exc}")
            raise click.exceptions.Exit(EXIT_PARSE_ERROR)

        if result.is_empty:
            print_warning("The diff contains no file changes.")
            raise click.exceptions.Exit(EXIT_NO_CHANGES)

        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2))
        else:
            display_result(result, config["max_files_displayed"])

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
