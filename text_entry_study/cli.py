"""
cli.py - command line launcher for the text entry study
Commands:
- run: open the study front end (Textual)
- summary: per-method overview of an exported log (Rich table)
- config: show the effective configuration
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich import box

from text_entry_study.analytics import read_log, summarize
from text_entry_study.corpus import load_phrases
from text_entry_study.utils.config_manager import Config

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="text-entry-study",
        description="QWERTY-only vs predictive text entry study",
    )
    parser.add_argument("--config", type=str, default=None, help="JSON config file")
    # also accepted after the subcommand; SUPPRESS keeps a top-level value
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=str, default=argparse.SUPPRESS, help="JSON config file")
    sub = parser.add_subparsers(dest="command")
    # bare `text-entry-study` runs the study
    parser.set_defaults(command="run", phrases=None, out=None, no_delay=False)

    run = sub.add_parser("run", parents=[common], help="start a study session")
    run.add_argument("--phrases", type=str, default=None, help="phrase file, one per line")
    run.add_argument("--out", type=str, default=None, help="folder for consent form and log")
    run.add_argument("--no-delay", action="store_true", help="skip pacing delays between blocks")

    summary = sub.add_parser("summary", parents=[common], help="summarize an exported log CSV")
    summary.add_argument("log", type=str, help="path to log_data_<name>.csv")

    sub.add_parser("config", parents=[common], help="show effective configuration")
    return parser


def show_summary(path: Path, practice_trials: int = 5) -> int:
    if not path.exists():
        console.print(f"[red]No such file:[/red] {path}")
        return 1
    stats = summarize(read_log(path), practice_trials)
    if not stats:
        console.print("[dim](no submissions in log)[/dim]")
        return 0

    table = Table(title=path.name, box=box.SIMPLE_HEAVY)
    table.add_column("method", style="cyan")
    table.add_column("trials", justify="right")
    table.add_column("practice", justify="right")
    table.add_column("mean ms", justify="right")
    table.add_column("median ms", justify="right")
    table.add_column("predictions", justify="right", style="green")
    for method, s in stats.items():
        table.add_row(
            method,
            str(s["trials"]),
            str(s["practice"]),
            f"{s['mean_ms']:.0f}",
            f"{s['median_ms']:.0f}",
            str(s["predictions"]),
        )
    console.print(table)
    return 0


def apply_run_options(cfg: Config, args: argparse.Namespace) -> Config:
    """Fold `run` flags into the config for this launch only."""
    if args.out:
        cfg.set("export_dir", args.out, persist=False)
    if args.phrases:
        cfg.set("phrases_file", args.phrases, persist=False)
    if args.no_delay:
        cfg.set("intro_delay", 0.0, persist=False)
        cfg.set("transition_delay", 0.0, persist=False)
    return cfg


def run_study(cfg: Config, args: argparse.Namespace) -> int:
    # imported here so `summary` works without a terminal UI
    from text_entry_study.tui_app import main as tui_main

    apply_run_options(cfg, args)
    phrases = load_phrases(cfg["phrases_file"])
    needed = cfg["phrases_per_block"]
    if len(phrases) < needed:
        console.print(f"[red]Phrase file has {len(phrases)} phrases, a block needs {needed}.[/red]")
        return 1
    tui_main(cfg, phrases)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)

    if args.command == "summary":
        return show_summary(Path(args.log), cfg["practice_trials"])
    if args.command == "config":
        cfg.show()
        return 0
    return run_study(cfg, args)


if __name__ == "__main__":
    sys.exit(main())
