"""
Error types returned through the result/error channel.

User-facing errors all derive from CommandError and are recovered at the
command-invocation boundary (see myroster.logic), where they are rendered as
plain text. ContractViolation marks programming errors and is deliberately
NOT a CommandError, so the boundary never converts it into user output.
"""

from __future__ import annotations

from myroster.messages import MESSAGE_INVALID_COMMAND_FORMAT


class CommandError(Exception):
    """
    Base class of every error a user can trigger by typing a command.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidFormat(CommandError):
    """
    Structural grammar violation: wrong/missing/extra markers or a preamble
    where none is allowed. Carries the usage text of the offending command.
    """

    def __init__(self, usage: str) -> None:
        super().__init__(MESSAGE_INVALID_COMMAND_FORMAT.format(usage=usage))
        self.usage = usage


class InvalidIndex(CommandError):
    """A marker value that should be a positive integer is not one."""


class OutOfRange(CommandError):
    """A valid index that does not point into the current filtered view."""


class UnsupportedForKind(CommandError):
    """A well-formed command that makes no sense for the resolved event kind."""


class InvalidValue(CommandError):
    """A date, name or path value that fails its own constraints."""


class DuplicateEntity(CommandError):
    """The mutation would create a second copy of an existing entity."""


class UnknownCommand(CommandError):
    """The command word is not known."""


class ContractViolation(RuntimeError):
    """
    Raised when code calls the core incorrectly (missing model, executing a
    command whose event kind was never resolved, ...).
    """
