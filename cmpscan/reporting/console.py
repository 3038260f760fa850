# Rich console output: format comparison verdicts for terminal display.

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from cmpscan.findings.models import ScanSummary, Verdict


def _status_text(verdict: Verdict) -> Text:
    if verdict.has_differences:
        return Text("DIFFERS", style="bold red")
    return Text("EQUAL", style="bold green")


def _line_range(verdict: Verdict) -> str:
    if verdict.start_line is None:
        return "-"
    return f"{verdict.start_line}-{verdict.end_line}"


def print_verdicts(
    summary: ScanSummary,
    analyzed_files: Sequence[Path] | None = None,
    verbose: bool = False,
    console: Console | None = None,
) -> None:
    """
    Print verdicts using Rich, grouped by report file.

    If verbose, rule traces are shown under each block (only present when the
    scan ran in debug mode). If analyzed_files is provided, a file-by-file
    summary table (differences vs clean) is shown.
    """
    if console is None:
        console = Console()

    verdicts = summary.verdicts

    if not verdicts and not analyzed_files:
        console.print(
            Panel(
                "[green]No differences found.[/green]",
                title="Compare Scan",
                border_style="green",
                box=box.ROUNDED,
            )
        )
        return

    by_file: dict[str, list[Verdict]] = {}
    for v in verdicts:
        by_file.setdefault(str(v.path), []).append(v)

    for path in sorted(by_file):
        console.print()
        console.print(Panel(
            f"[bold cyan]{escape(path)}[/bold cyan]",
            box=box.SIMPLE_HEAD,
            border_style="blue",
            padding=(0, 1),
        ))

        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.SIMPLE,
            padding=(0, 1),
            expand=False,
        )
        table.add_column("Lines", justify="right", style="dim", width=11)
        table.add_column("Status", width=9)
        table.add_column("Datasets", style="white")

        for v in by_file[path]:
            table.add_row(_line_range(v), _status_text(v), Text(v.dataset_pair))
        console.print(table)

        if verbose:
            for v in by_file[path]:
                for step in v.trace or []:
                    console.print(
                        f"  [dim]{step.line}:[/dim] {escape(f'[{step.rule_id}]')} "
                        f"value={step.value} flag={step.flag}"
                    )

    if analyzed_files:
        _print_file_summary_table(verdicts, analyzed_files, console)

    _print_summary(summary, console)


def _print_file_summary_table(
    verdicts: Sequence[Verdict],
    analyzed_files: Sequence[Path],
    console: Console,
) -> None:
    """Print a table of clean vs differing report files."""
    by_path: dict[str, int] = {}
    for v in verdicts:
        if v.has_differences:
            key = str(v.path)
            by_path[key] = by_path.get(key, 0) + 1

    table = Table(
        title="Files Summary",
        show_header=True,
        header_style="bold cyan",
        box=box.ROUNDED,
        padding=(0, 1),
    )
    table.add_column("File", style="white")
    table.add_column("Status", width=10)
    table.add_column("Blocks", justify="right", width=8)

    for p in sorted(analyzed_files, key=lambda p: (str(p) not in by_path, str(p))):
        count = by_path.get(str(p), 0)
        status = Text("DIFFERS", style="bold red") if count else Text("OK", style="bold green")
        table.add_row(Text(str(p)), status, str(count))

    console.print()
    console.print(Panel(table, border_style="cyan", box=box.ROUNDED))


def _print_summary(summary: ScanSummary, console: Console) -> None:
    """Print a compact summary of the run."""
    differing = len(summary.differing)
    parts = [
        f"[bold]{differing} block{'s' if differing != 1 else ''} with differences[/bold]",
        f"{summary.blocks_seen} compared",
        f"{summary.files_scanned} file{'s' if summary.files_scanned != 1 else ''} scanned",
    ]
    if summary.files_failed:
        parts.append(f"[bold red]{summary.files_failed} unreadable[/]")

    console.print()
    console.print(
        Panel(
            " | ".join(parts),
            title="Summary",
            border_style="yellow" if differing > 0 else "green",
            box=box.ROUNDED,
        )
    )
