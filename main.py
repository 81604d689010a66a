r"""
TempPurge - Windows temporary files and Recycle Bin cleanup

Entry point: resolves targets -> confirmation -> cleanup -> report.

Usage:
    python main.py                      Interactive cleanup
    python main.py --yes                Clean without asking
    python main.py --verbose            Trace every deleted or skipped item
    python main.py --no-recycle-bin     Leave the Recycle Bin alone
    python main.py --target D:\Scratch  Also empty another folder
    python main.py --list-targets       Show what would be cleaned and exit
"""

from __future__ import annotations

import argparse
import ctypes
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from config import AppConfig, default_targets, load_config, save_config
from models import format_duration
from runner import run_all, write_log
from ui import (
    confirm_cleanup,
    console,
    show_cleanup_report,
    show_rule_outcome,
    show_targets,
)

BANNER = r"""
  _____                    ____
 |_   _|__ _ __ ___  _ __ |  _ \ _   _ _ __ __ _  ___
   | |/ _ \ '_ ` _ \| '_ \| |_) | | | | '__/ _` |/ _ \
   | |  __/ | | | | | |_) |  __/| |_| | | | (_| |  __/
   |_|\___|_| |_| |_| .__/|_|    \__,_|_|  \__, |\___|
                    |_|                    |___/
  Temporary Files & Recycle Bin Cleanup v1.0
"""


def is_admin() -> bool:
    """Check if the script is running with administrator privileges."""
    try:
        return ctypes.windll.shell32.IsUserAnAdmin() != 0
    except Exception:
        return False


def request_elevation() -> None:
    """Show message about needing admin rights."""
    console.print(Panel(
        "[bold red](!!) Administrator privileges required![/]\n\n"
        "TempPurge needs admin rights to empty system folders like:\n"
        "  - C:\\Windows\\Temp\n"
        "  - the Recycle Bin of other users\n\n"
        "Please right-click your terminal and select\n"
        "[bold]'Run as administrator'[/], then try again.",
        border_style="red",
        title="[bold]Elevation Required[/]",
    ))


def setup_logging(verbose: bool) -> None:
    """Route log records through Rich on the shared console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="TempPurge - Windows temporary files and Recycle Bin cleanup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Do not ask for confirmation",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every deleted or skipped file and folder",
    )
    parser.add_argument(
        "--no-recycle-bin",
        action="store_true",
        help="Do not empty the Recycle Bin",
    )
    parser.add_argument(
        "--no-system-temp",
        action="store_true",
        help="Do not clean the system-wide temp folder",
    )
    parser.add_argument(
        "--target",
        type=str,
        nargs="*",
        default=[],
        metavar="PATH",
        help="Additional folders whose contents should be deleted",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Directory to save the cleanup log CSV",
    )
    parser.add_argument(
        "--list-targets",
        action="store_true",
        help="List the folders that would be cleaned and exit",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Save --target, --log-dir and the --no-* flags as new defaults "
             "(--yes is never saved)",
    )
    return parser.parse_args(argv)


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Apply command-line flags on top of the loaded config."""
    if args.no_recycle_bin:
        config.empty_recycle_bin = False
    if args.no_system_temp:
        config.include_system_temp = False
    for path in args.target:
        if path not in config.extra_targets:
            config.extra_targets.append(path)
    if args.log_dir is not None:
        config.log_dir = args.log_dir
    if args.yes:
        config.confirm = False
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    # Print banner
    console.print(f"[bold cyan]{BANNER}[/]")

    config = load_config()
    saved_confirm = config.confirm
    config = apply_overrides(config, args)
    targets = default_targets(config)

    if args.save_config:
        # --yes only applies to this run
        if save_config(replace(config, confirm=saved_confirm)):
            console.print("[green]Configuration saved.[/]")

    # -- LIST TARGETS --
    if args.list_targets:
        show_targets(targets, config.empty_recycle_bin)
        return 0

    # Check admin
    if not is_admin():
        request_elevation()
        console.print("\n[dim]Running in limited mode -- some folders may be inaccessible.[/]\n")
        if not args.yes:
            proceed = console.input("[yellow]Continue anyway? (y/n): [/]").strip().lower()
            if proceed not in ("y", "yes"):
                return 1

    show_targets(targets, config.empty_recycle_bin)

    if config.confirm and not confirm_cleanup(targets):
        return 1

    # -- CLEAN --
    with Progress(
        SpinnerColumn("dots"),
        TextColumn("[bold blue]Cleaning: {task.description}"),
        TextColumn("[dim]{task.fields[timing]}[/]"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Starting...", total=None, timing="")

        def on_progress(label: str, current: int, total: int, elapsed: float) -> None:
            progress.update(task, description=label,
                            timing=f"elapsed {format_duration(elapsed)}")

        run = run_all(config, progress_cb=on_progress)

    for outcome in run.outcomes:
        show_rule_outcome(outcome)

    log_path = write_log(config.log_dir, run) if config.log_dir else ""
    show_cleanup_report(run, log_path)

    if run.result.errors > 0:
        console.print(
            f"[yellow]Note: {run.result.errors} items could not be deleted "
            f"(likely locked by the OS or another process).[/]"
        )
    return 0


def cli() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/]")
        sys.exit(130)


if __name__ == "__main__":
    cli()
