"""
TempPurge - Console output using Rich, confirmation prompt using InquirerPy.
"""

from __future__ import annotations

from typing import List, Tuple

from InquirerPy import inquirer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from disk import free_space
from models import CleanupRun, RuleOutcome, TargetReport, format_duration, format_size

console = Console()


def show_targets(targets: List[Tuple[str, str]], empty_recycle_bin: bool) -> None:
    """Table of the folders that will be emptied, with current free space."""
    table = Table(
        box=box.ROUNDED,
        title="[bold]Cleanup Targets[/]",
        title_style="bold cyan",
    )
    table.add_column("Target", min_width=14)
    table.add_column("Path", max_width=60)
    table.add_column("Volume free", justify="right", width=14)

    for label, path in targets:
        table.add_row(label, escape(path), format_size(free_space(path)))
    if empty_recycle_bin:
        table.add_row("Recycle Bin", "[dim]all drives[/]", "")

    console.print()
    console.print(table)
    console.print()


def confirm_cleanup(targets: List[Tuple[str, str]]) -> bool:
    """Ask before deleting. Returns True if the user confirms."""
    console.print(Panel(
        f"[bold red]WARNING: The contents of {len(targets)} folder(s) will be "
        f"permanently deleted.\n"
        f"Deleted files are NOT sent to the Recycle Bin and CANNOT be recovered.[/]",
        border_style="red",
    ))

    try:
        answer = inquirer.confirm(
            message="Proceed with cleanup?",
            default=False,
        ).execute()
    except KeyboardInterrupt:
        return False

    if not answer:
        console.print("[yellow]Aborted.[/]")
    return bool(answer)


def show_target_report(report: TargetReport) -> None:
    """Summary lines for one purged folder."""
    result = report.result
    console.print(f"[bold cyan]> {report.label}[/] [dim]{escape(report.path)}[/]")
    console.print(
        f"  Removed [bold]{result.files_deleted:,}[/] files and "
        f"[bold]{result.dirs_deleted:,}[/] folders ({result.bytes_removed_human})"
    )
    if result.errors > 0:
        console.print(f"  [yellow]skipped {result.errors:,} items (in use or access denied)[/]")
    console.print(f"  Freed: [bold green]{format_size(report.freed)}[/]")


def show_rule_outcome(outcome: RuleOutcome) -> None:
    """Print the outcome of one rule."""
    if outcome.skipped:
        console.print(f"[dim]- {outcome.display_name}: skipped ({outcome.skipped})[/]")
        return
    if outcome.error:
        console.print(f"[red]X {outcome.display_name}: FAILED[/]")
        console.print(f"  [dim]{outcome.error.strip().splitlines()[-1][:200]}[/]")
        return

    if outcome.targets:
        for report in outcome.targets:
            show_target_report(report)
    else:
        console.print(f"[bold cyan]> {outcome.display_name}[/]")
        console.print(f"  Freed: [bold green]{format_size(outcome.freed_bytes)}[/]")


def show_cleanup_report(run: CleanupRun, log_path: str = "") -> None:
    """Display the final cleanup report."""
    total = run.result
    log_line = f"\n\n  Log file: [cyan]{log_path}[/]" if log_path else ""

    console.print()
    console.print(Panel.fit(
        f"[bold green]Cleanup Complete![/]\n\n"
        f"  Files:    [bold green]{total.files_deleted:,}[/] deleted\n"
        f"  Folders:  [bold green]{total.dirs_deleted:,}[/] deleted\n"
        f"  Skipped:  [bold {'yellow' if total.errors else 'dim'}]{total.errors:,}[/] items\n"
        f"  Removed:  [bold]{total.bytes_removed_human}[/]\n"
        f"  Freed:    [bold green]{format_size(run.freed_bytes)}[/]\n"
        f"  Duration: [bold cyan]{format_duration(run.total_duration_s)}[/]"
        f"{log_line}",
        border_style="green",
        title="[bold]TempPurge Report[/]",
    ))
    console.print()
