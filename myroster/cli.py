"""
CLI (Command Line Interface).

This module provides quick terminal commands for power users and for testing, e.g.:

    myroster run add-event Tutorial/T01 -date 2024-05-01
    myroster run delete Tutorial/1
    myroster show --kind lab
    myroster interactive

Note:
- The interactive UI lives in myroster/interactive.py
- This CLI is intentionally simple and prints plain text (no rich formatting)
- Every `run` starts from the stored roster, so filters from find-event
  only last for that one invocation; use `interactive` to keep them
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from myroster.logic import run_command
from myroster.model import EventKind
from myroster.roster import Roster
from myroster.storage import load_roster, save_roster


def _cmd_run(args: argparse.Namespace, roster: Roster) -> int:
    """
    Execute one roster command and save the roster if it succeeded.
    """
    text = " ".join(args.words).strip()
    if not text:
        print("Please provide a command.")
        return 1

    outcome = run_command(roster, text)
    print(outcome.text)
    if not outcome.ok:
        return 1

    save_roster(roster, args.data)
    return 0


def format_view(roster: Roster, kind: EventKind) -> list[str]:
    """
    Lines for one kind's filtered view, numbered the way commands address them.
    """
    events = roster.filtered_events(kind)
    lines = [f"{kind.value}s ({len(events)}):"]
    if not events:
        lines.append("  (none)")
    for i, ev in enumerate(events, start=1):
        lines.append(f"  {i}. {ev}")
    return lines


def _cmd_show(args: argparse.Namespace, roster: Roster) -> int:
    """
    Print the events (and students) with their display indices.
    """
    if args.kind:
        try:
            kinds = [EventKind.from_word(args.kind)]
        except ValueError as exc:
            print(exc)
            return 1
    else:
        kinds = list(EventKind)

    for kind in kinds:
        for line in format_view(roster, kind):
            print(line)

    if not args.kind:
        students = roster.filtered_students()
        print(f"Students ({len(students)}):")
        for i, s in enumerate(students, start=1):
            print(f"  {i}. {s.name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="myroster", description="MyRoster CLI")
    parser.add_argument("--data", type=Path, default=None, help="Roster JSON file (default: package data dir)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", help="Execute one roster command")
    p_run.add_argument("words", nargs=argparse.REMAINDER, help="Command text (e.g. delete Tutorial/1)")

    p_show = sub.add_parser("show", help="Show events with their indices")
    p_show.add_argument("--kind", type=str, default=None, help="tutorial, lab or consultation")

    sub.add_parser("interactive", help="Interactive command prompt")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    roster = load_roster(args.data)

    if args.command == "run":
        raise SystemExit(_cmd_run(args, roster))
    if args.command == "show":
        raise SystemExit(_cmd_show(args, roster))

    if args.command == "interactive":
        from myroster.interactive import run_interactive

        run_interactive(roster, save_fn=lambda r: save_roster(r, args.data))
        raise SystemExit(0)

    raise SystemExit(2)
