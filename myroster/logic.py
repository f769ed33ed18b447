"""
Command-invocation boundary.

Everything a user types goes through here:

    text -> parse_command() -> Command.execute(roster) -> CommandResult

User-facing errors (CommandError) are recovered here and turned into plain
text. Programming errors (ContractViolation and anything else) propagate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from myroster.commands import CommandResult
from myroster.errors import CommandError
from myroster.parser import parse_command
from myroster.roster import Roster


logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    """Rendered result of one command: the text to show and whether it succeeded."""

    ok: bool
    text: str


def execute_command(roster: Roster, text: str) -> CommandResult:
    """
    Parse and execute one command against roster.

    Raises CommandError for invalid input.
    """
    command = parse_command(text)
    result = command.execute(roster)
    logger.info("executed %r", text.strip())
    return result


def run_command(roster: Roster, text: str) -> Outcome:
    """
    Like execute_command(), but user-facing errors come back as text.
    """
    try:
        result = execute_command(roster, text)
    except CommandError as exc:
        logger.info("rejected %r: %s", text.strip(), exc.message.splitlines()[0])
        return Outcome(ok=False, text=str(exc))
    return Outcome(ok=True, text=result.feedback)
