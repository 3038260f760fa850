from __future__ import annotations

"""
Typer CLI entry point for scanning PROC COMPARE listings.

The `analyze` command:
- Scans every report file in a directory (by extension, case-insensitive)
  block by block with the diagnostic rules from config.py
- Optionally appends verdicts to a JSON Lines store (--out)
- Prints the blocks with differences using the Rich reporter
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from cmpscan.config import DEFAULT_EXTENSION, Config
from cmpscan.orchestrator import scan_directory
from cmpscan.reporting.console import print_verdicts
from cmpscan.sink import JsonLinesSink, MemorySink, ResultSink

app = typer.Typer(help="cmpscan - find PROC COMPARE report sections that show differences.")

EXIT_DIFFERENCES = 1
EXIT_FATAL = 2


@app.command()
def analyze(
    directory: Path = typer.Argument(
        ...,
        help="Directory containing the comparison listings.",
    ),
    ext: str = typer.Option(DEFAULT_EXTENSION, "--ext", help="Report file extension."),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Descend into subdirectories."),
    debug: bool = typer.Option(
        False, "--debug", help="Report every block and keep per-line rule traces."
    ),
    out: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Append verdicts to this JSON Lines file."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show rule traces; implies --debug."),
    fail_on_diff: bool = typer.Option(
        False, "--fail-on-diff", help="Exit with code 1 if any block has differences."
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
) -> None:
    """
    Scan every report file in DIRECTORY and list the comparisons that differ.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config(extension=ext, recursive=recursive, debug=debug or verbose)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--ext")

    sink: ResultSink = JsonLinesSink(out) if out is not None else MemorySink()
    try:
        summary = scan_directory(directory, config=config, sink=sink)
    except OSError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_FATAL)

    print_verdicts(summary, analyzed_files=summary.files, verbose=verbose)

    if fail_on_diff and summary.differing:
        raise typer.Exit(code=EXIT_DIFFERENCES)


def main() -> None:
    """Entry point for `python -m cmpscan.main` and the `cmpscan` script."""
    app()


if __name__ == "__main__":
    main()
