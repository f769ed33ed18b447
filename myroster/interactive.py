from __future__ import annotations

from typing import Callable, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from myroster.logic import run_command
from myroster.model import EventKind
from myroster.roster import Roster


console = Console()

BUILTINS_HELP = (
    "Type a command (e.g. [bold]help[/], [bold]add-event Tutorial/T01[/], [bold]delete Lab/2[/]).\n"
    "[bold]show[/] lists the current views, [bold]exit[/] leaves."
)


def _event_table(roster: Roster, kind: EventKind) -> Table:
    table = Table(title=f"{kind.value}s", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Name", style="bold cyan")
    table.add_column("Date")
    table.add_column("File")
    table.add_column("Students", style="magenta")
    table.add_column("Notes")

    for i, ev in enumerate(roster.filtered_events(kind), start=1):
        table.add_row(
            str(i),
            ev.name,
            ev.date.isoformat() if ev.date is not None else "",
            Text(getattr(ev, "file_path", None) or ""),
            ", ".join(ev.students),
            Text("\n".join(f"{n}. {note}" for n, note in enumerate(ev.notes, start=1))),
        )
    return table


def _student_table(roster: Roster) -> Table:
    table = Table(title="Students", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Email")
    for i, s in enumerate(roster.filtered_students(), start=1):
        table.add_row(str(i), s.name, s.email or "")
    return table


def show_roster(roster: Roster, out: Optional[Console] = None) -> None:
    out = out or console
    for kind in EventKind:
        out.print(_event_table(roster, kind))
    out.print(_student_table(roster))


def run_interactive(
    roster: Roster,
    save_fn: Callable[[Roster], None],
    out: Optional[Console] = None,
) -> None:
    """
    Read-eval-print loop over roster commands.

    The roster is saved after every successful command. Errors are printed
    and the loop continues.
    """
    out = out or console
    out.print("\n=== MyRoster (interactive) ===")
    out.print(BUILTINS_HELP)

    while True:
        try:
            line = out.input("[bold green]> [/]").strip()
        except EOFError:
            out.print("Bye.")
            return

        if not line:
            continue
        if line in ("exit", "quit"):
            out.print("Bye.")
            return
        if line == "show":
            show_roster(roster, out)
            continue

        outcome = run_command(roster, line)
        if not outcome.ok:
            out.print(Text(outcome.text, style="red"))
            continue

        out.print(Text(outcome.text))
        try:
            save_fn(roster)
        except OSError as exc:
            out.print(Text(f"Could not save roster: {exc}", style="red"))
