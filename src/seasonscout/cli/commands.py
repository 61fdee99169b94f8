"""CLI commands for seasonscout.

This module implements all user-facing CLI commands:
- ``detect``: run the heuristic detection chain over one or more paths.
- ``legacy``: run the legacy single-pass parser over bare names.
- ``roman``: decode a roman numeral.
- ``badwords list|add``: inspect and extend the configured noise words.
- ``version``: print the package version.

Design:
- Typer app is instantiated at module level; Annotated aliases hold the
  option definitions shared between commands.
- Settings are resolved through :mod:`seasonscout.utils.config` and passed into
  the engine as plain values, the engine never reads config itself.
- Paths rejected by the input length guard are reported and skipped; the
  command exits with ``ExitCode.SKIPPED`` when that happened.
"""

import os
import sys
from enum import Enum
from typing import Annotated, Callable, List, Optional, Tuple

import typer

from seasonscout.cli.console import NO_RICH_ENV_VAR, ConsoleManager
from seasonscout.cli.renderer import render_results
from seasonscout.core import (
    InputTooLongError,
    decode_roman,
    detect,
    detect_alternative,
    parse_legacy,
)
from seasonscout.models.core import MatchResult
from seasonscout.utils.config import add_bad_word, get_bad_words, get_max_input_length
from seasonscout.utils.debug import warn
from seasonscout.utils.json import dumps_result

app = typer.Typer(
    name="seasonscout",
    help="Detect season, episode and air date information from video filenames.",
    add_completion=False,
)
badwords_app = typer.Typer(help="Manage release noise words stripped before detection.")
app.add_typer(badwords_app, name="badwords")


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    SKIPPED = 1


PATHS = Annotated[
    List[str],
    typer.Argument(help="Relative paths or file names to analyse"),
]

SHOW_NAME = Annotated[
    str,
    typer.Option("--show-name", "-s", help="Series name to strip before matching"),
]

ALTERNATIVE = Annotated[
    bool,
    typer.Option(
        "--alternative",
        "-a",
        help="Check the file name first and fall back to the full path",
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option("--json", help="Print one JSON object per input instead of a table"),
]

MAX_LENGTH = Annotated[
    Optional[int],
    typer.Option(
        "--max-length",
        min=1,
        help="Longest accepted input (default from parser.max_input_length)",
    ),
]


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. "
            "Can also be set with the SEASONSCOUT_NO_RICH environment variable."
        ),
    ),
) -> None:
    """Global options shared by every command."""
    if no_rich:
        os.environ[NO_RICH_ENV_VAR] = "1"


def _run_all(
    sources: List[str], run: Callable[[str], MatchResult]
) -> Tuple[List[Tuple[str, MatchResult]], List[str]]:
    """Apply *run* to every source, collecting results and skipped inputs."""
    rows: List[Tuple[str, MatchResult]] = []
    skipped: List[str] = []
    for source in sources:
        try:
            rows.append((source, run(source)))
        except InputTooLongError as e:
            warn(f"Skipping input: {e}")
            skipped.append(source)
    return rows, skipped


def _emit(
    rows: List[Tuple[str, MatchResult]],
    skipped: List[str],
    json_output: bool,
    title: str,
) -> None:
    if json_output:
        for source, result in rows:
            sys.stdout.write(dumps_result(source, result.model_dump()) + "\n")
    else:
        with ConsoleManager() as console:
            render_results(rows, console=console, title=title)
            for source in skipped:
                console.print(f"[yellow]Skipped (input too long): {source[:60]}...[/yellow]")
    if skipped:
        raise typer.Exit(ExitCode.SKIPPED)


@app.command("detect")
def detect_command(
    paths: PATHS,
    show_name: SHOW_NAME = "",
    alternative: ALTERNATIVE = False,
    json_output: JSON_OUTPUT = False,
    max_length: MAX_LENGTH = None,
) -> None:
    """Detect season, episodes and date for each PATH."""
    bad_words = get_bad_words()
    limit = get_max_input_length(max_length)
    strategy = detect_alternative if alternative else detect

    rows, skipped = _run_all(
        paths,
        lambda source: strategy(source, show_name, bad_words=bad_words, max_length=limit),
    )
    _emit(rows, skipped, json_output, title="Detected Episodes")


@app.command("legacy")
def legacy_command(
    names: PATHS,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Parse each bare file or directory NAME with the legacy parser."""
    rows, skipped = _run_all(names, parse_legacy)
    _emit(rows, skipped, json_output, title="Legacy Parser")


@app.command("roman")
def roman_command(
    token: Annotated[str, typer.Argument(help="Roman numeral, e.g. XIV")],
) -> None:
    """Decode a roman numeral TOKEN."""
    with ConsoleManager() as console:
        console.print(decode_roman(token))


@badwords_app.command("list")
def badwords_list() -> None:
    """Show the configured bad words."""
    words = get_bad_words()
    with ConsoleManager() as console:
        if not words:
            console.print("[yellow]No bad words configured.[/yellow]")
        for word in words:
            console.print(word)


@badwords_app.command("add")
def badwords_add(
    word: Annotated[str, typer.Argument(help="Noise word to strip, e.g. a release group")],
) -> None:
    """Add WORD to the configured bad words."""
    try:
        words = add_bad_word(word)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="WORD")
    with ConsoleManager() as console:
        console.print(f"Stored {len(words)} bad word(s).")


@app.command()
def version() -> None:
    """Show the version of seasonscout."""
    from seasonscout.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"SeasonScout version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
