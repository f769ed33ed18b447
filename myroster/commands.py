"""
Command objects.

A command is a unit of work produced by the parser and consumed exactly once
by execute(roster). Event commands that address an existing event carry a
1-based display index plus the event kind that index belongs to; the kind is
resolved once by the parser (mark_tutorial / mark_lab / mark_consultation)
and execute() refuses to run without it.

All three kinds share one code path: the roster is asked for the filtered
view of the resolved kind, the index is checked against that view, and the
kind-specific work happens in apply().
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ClassVar, List, Optional

from myroster.errors import (
    CommandError,
    ContractViolation,
    DuplicateEntity,
    OutOfRange,
    UnsupportedForKind,
)
from myroster.launcher import open_path
from myroster.messages import (
    MESSAGE_CONSULTATION_NO_FILES,
    MESSAGE_DUPLICATE_EVENT,
    MESSAGE_DUPLICATE_STUDENT_IN_EVENT,
    MESSAGE_EVENTS_LISTED_OVERVIEW,
    MESSAGE_FILE_NOT_FOUND,
    MESSAGE_FILE_NOT_OPENED,
    MESSAGE_INVALID_EVENT_DISPLAYED_INDEX,
    MESSAGE_INVALID_NOTE_DISPLAYED_INDEX,
    MESSAGE_INVALID_STUDENT_DISPLAYED_INDEX,
    MESSAGE_NO_FILE_ATTACHED,
    MESSAGE_STUDENT_NOT_IN_EVENT,
)
from myroster.model import EVENT_TYPES, Event, EventKind, Index, Student, make_event
from myroster.roster import Roster


logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Feedback shown to the user after a successful command."""

    feedback: str


def _optional_file(kind: EventKind) -> str:
    return " [-file PATH]" if EVENT_TYPES[kind].has_files else ""


def _summary(cmd: "type[Command]") -> str:
    # first usage line reads "word: Summary sentence."
    return cmd.USAGE.splitlines()[0].split(": ", 1)[1]


# ---------------------------------------------------------------------------
# Base classes
# ---------------------------------------------------------------------------


class Command:
    COMMAND_WORD: ClassVar[str] = ""
    USAGE: ClassVar[str] = ""

    def execute(self, roster: Roster) -> CommandResult:
        raise NotImplementedError

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        """One-line usage of this command for the given kind (used by help)."""
        return ""

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and vars(other) == vars(self)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({fields})"


def _require_roster(roster: Optional[Roster]) -> Roster:
    if roster is None:
        raise ContractViolation("execute() needs a roster")
    return roster


def select_event(roster: Roster, kind: EventKind, index: Index) -> Event:
    """
    Return the event shown at index in the filtered view of kind.

    Raises OutOfRange if the index points past the end of that view.
    """
    view = roster.filtered_events(kind)
    if not 0 <= index.zero_based < len(view):
        raise OutOfRange(MESSAGE_INVALID_EVENT_DISPLAYED_INDEX)
    return view[index.zero_based]


def select_student(roster: Roster, index: Index) -> Student:
    view = roster.filtered_students()
    if not 0 <= index.zero_based < len(view):
        raise OutOfRange(MESSAGE_INVALID_STUDENT_DISPLAYED_INDEX)
    return view[index.zero_based]


class EventCommand(Command):
    """
    A command addressing one existing event by display index.

    Built unresolved (index only); the parser then marks the event kind.
    Marking again replaces the earlier kind.
    """

    def __init__(self, target_index: Index) -> None:
        self.target_index = target_index
        self._kind: Optional[EventKind] = None

    @property
    def kind(self) -> Optional[EventKind]:
        return self._kind

    @property
    def is_resolved(self) -> bool:
        return self._kind is not None

    def mark(self, kind: EventKind) -> None:
        self._kind = kind

    def mark_tutorial(self) -> None:
        self.mark(EventKind.TUTORIAL)

    def mark_lab(self) -> None:
        self.mark(EventKind.LAB)

    def mark_consultation(self) -> None:
        self.mark(EventKind.CONSULTATION)

    def execute(self, roster: Roster) -> CommandResult:
        roster = _require_roster(roster)
        if self._kind is None:
            raise ContractViolation(f"{type(self).__name__} executed before its event kind was resolved")

        target = select_event(roster, self._kind, self.target_index)
        logger.debug("%s -> %s", self.COMMAND_WORD, target)
        return self.apply(roster, self._kind, target)

    def apply(self, roster: Roster, kind: EventKind, target: Event) -> CommandResult:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Event commands
# ---------------------------------------------------------------------------


class DeleteEventCommand(EventCommand):
    COMMAND_WORD = "delete"
    USAGE = (
        COMMAND_WORD
        + ": Deletes the event identified by the index number used in the displayed event list.\n"
        "Parameters: Tutorial/INDEX | Lab/INDEX | Consultation/INDEX (INDEX must be a positive integer)\n"
        "Example: " + COMMAND_WORD + " Tutorial/1"
    )
    MESSAGE_SUCCESS = "Deleted Event: {event}"

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        return f"{cls.COMMAND_WORD} {kind.value}/INDEX"

    def apply(self, roster: Roster, kind: EventKind, target: Event) -> CommandResult:
        roster.delete_event(kind, target)
        return CommandResult(self.MESSAGE_SUCCESS.format(event=target))


class OpenFileCommand(EventCommand):
    COMMAND_WORD = "open-file"
    USAGE = (
        COMMAND_WORD
        + ": Opens the file attached to the event identified by the index number "
        "used in the displayed event list.\n"
        "Parameters: Tutorial/INDEX | Lab/INDEX (INDEX must be a positive integer)\n"
        "Example: " + COMMAND_WORD + " Lab/2"
    )
    MESSAGE_SUCCESS = "Opened File of Event: {event}"

    def __init__(self, target_index: Index, opener: Optional[Callable[[str], None]] = None) -> None:
        super().__init__(target_index)
        self._opener = opener

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        if not EVENT_TYPES[kind].has_files:
            return ""
        return f"{cls.COMMAND_WORD} {kind.value}/INDEX"

    def apply(self, roster: Roster, kind: EventKind, target: Event) -> CommandResult:
        if not target.has_files:
            raise UnsupportedForKind(MESSAGE_CONSULTATION_NO_FILES)

        file_path = getattr(target, "file_path", None)
        if not file_path:
            raise CommandError(MESSAGE_NO_FILE_ATTACHED)
        if not Path(file_path).exists():
            raise CommandError(MESSAGE_FILE_NOT_FOUND.format(path=file_path))

        opener = self._opener or open_path
        try:
            opener(file_path)
        except OSError as exc:
            raise CommandError(MESSAGE_FILE_NOT_OPENED.format(path=file_path)) from exc

        return CommandResult(self.MESSAGE_SUCCESS.format(event=target))


@dataclass
class EventEdit:
    """Fields to change on an event; None means "keep"."""

    name: Optional[str] = None
    date: Optional[datetime.date] = None
    file_path: Optional[str] = None

    def is_empty(self) -> bool:
        return self.name is None and self.date is None and self.file_path is None


class EditEventCommand(EventCommand):
    COMMAND_WORD = "edit-event"
    USAGE = (
        COMMAND_WORD
        + ": Edits the event identified by the index number used in the displayed event list. "
        "Existing values are overwritten by the given ones.\n"
        "Parameters: INDEX Tutorial/[NEW_NAME] | Lab/[NEW_NAME] | Consultation/[NEW_NAME] "
        "[-date NEW_DATE] [-file NEW_PATH]\n"
        "Example: " + COMMAND_WORD + " 1 Lab/L02 -date 2024-05-01"
    )
    MESSAGE_SUCCESS = "Edited Event: {event}"

    def __init__(self, target_index: Index, edit: EventEdit) -> None:
        super().__init__(target_index)
        self.edit = edit

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        return f"{cls.COMMAND_WORD} INDEX {kind.value}/[NEW_NAME] [-date NEW_DATE]{_optional_file(kind)}"

    def apply(self, roster: Roster, kind: EventKind, target: Event) -> CommandResult:
        if self.edit.file_path is not None and not target.has_files:
            raise UnsupportedForKind(MESSAGE_CONSULTATION_NO_FILES)

        edited = make_event(
            kind,
            name=self.edit.name if self.edit.name is not None else target.name,
            date=self.edit.date if self.edit.date is not None else target.date,
            file_path=self.edit.file_path if self.edit.file_path is not None else getattr(target, "file_path", None),
            students=target.students,
            notes=target.notes,
        )

        if not edited.is_same_event(target) and roster.has_event(edited):
            raise DuplicateEntity(MESSAGE_DUPLICATE_EVENT)

        roster.set_event(kind, target, edited)
        return CommandResult(self.MESSAGE_SUCCESS.format(event=edited))


class AddStudentCommand(EventCommand):
    COMMAND_WORD = "add-student"
    USAGE = (
        COMMAND_WORD
        + ": Adds the student at STUDENT_INDEX of the displayed student list to the event "
        "at EVENT_INDEX of the displayed event list.\n"
        "Parameters: STUDENT_INDEX Tutorial/EVENT_INDEX | Lab/EVENT_INDEX | Consultation/EVENT_INDEX\n"
        "Example: " + COMMAND_WORD + " 2 Tutorial/1"
    )
    MESSAGE_SUCCESS = "Added Student {student} to Event: {event}"

    def __init__(self, target_index: Index, student_index: Index) -> None:
        super().__init__(target_index)
        self.student_index = student_index

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        return f"{cls.COMMAND_WORD} STUDENT_INDEX {kind.value}/EVENT_INDEX"

    def apply(self, roster: Roster, kind: EventKind, target: Event) -> CommandResult:
        student = select_student(roster, self.student_index)
        if student.name in target.students:
            raise DuplicateEntity(MESSAGE_DUPLICATE_STUDENT_IN_EVENT)

        roster.add_student_to_event(kind, target, student)
        return CommandResult(self.MESSAGE_SUCCESS.format(student=student.name, event=target))


class DeleteStudentCommand(EventCommand):
    COMMAND_WORD = "delete-student"
    USAGE = (
        COMMAND_WORD
        + ": Removes the student at STUDENT_INDEX of the displayed student list from the event "
        "at EVENT_INDEX of the displayed event list.\n"
        "Parameters: STUDENT_INDEX Tutorial/EVENT_INDEX | Lab/EVENT_INDEX | Consultation/EVENT_INDEX\n"
        "Example: " + COMMAND_WORD + " 2 Tutorial/1"
    )
    MESSAGE_SUCCESS = "Removed Student {student} from Event: {event}"

    def __init__(self, target_index: Index, student_index: Index) -> None:
        super().__init__(target_index)
        self.student_index = student_index

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        return f"{cls.COMMAND_WORD} STUDENT_INDEX {kind.value}/EVENT_INDEX"

    def apply(self, roster: Roster, kind: EventKind, target: Event) -> CommandResult:
        student = select_student(roster, self.student_index)
        if student.name not in target.students:
            raise CommandError(MESSAGE_STUDENT_NOT_IN_EVENT)

        roster.remove_student_from_event(kind, target, student)
        return CommandResult(self.MESSAGE_SUCCESS.format(student=student.name, event=target))


def select_note(target: Event, index: Index) -> str:
    if not 0 <= index.zero_based < len(target.notes):
        raise OutOfRange(MESSAGE_INVALID_NOTE_DISPLAYED_INDEX)
    return target.notes[index.zero_based]


class AddNoteCommand(EventCommand):
    COMMAND_WORD = "add-note"
    USAGE = (
        COMMAND_WORD
        + ": Adds a note to the event at EVENT_INDEX of the displayed event list. "
        "Everything after -content is the note.\n"
        "Parameters: Tutorial/EVENT_INDEX | Lab/EVENT_INDEX | Consultation/EVENT_INDEX -content NOTE\n"
        "Example: " + COMMAND_WORD + " Lab/1 -content Bring laptops"
    )
    MESSAGE_SUCCESS = "Added Note to Event: {event}"

    def __init__(self, target_index: Index, content: str) -> None:
        super().__init__(target_index)
        self.content = content

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        return f"{cls.COMMAND_WORD} {kind.value}/EVENT_INDEX -content NOTE"

    def apply(self, roster: Roster, kind: EventKind, target: Event) -> CommandResult:
        roster.add_note_to_event(kind, target, self.content)
        return CommandResult(self.MESSAGE_SUCCESS.format(event=target))


class EditNoteCommand(EventCommand):
    COMMAND_WORD = "edit-note"
    USAGE = (
        COMMAND_WORD
        + ": Replaces note NOTE_INDEX of the event at EVENT_INDEX of the displayed event list.\n"
        "Parameters: NOTE_INDEX Tutorial/EVENT_INDEX | Lab/EVENT_INDEX | Consultation/EVENT_INDEX "
        "-content NOTE\n"
        "Example: " + COMMAND_WORD + " 1 Lab/1 -content Room B2"
    )
    MESSAGE_SUCCESS = "Edited Note {note_index} of Event: {event}"

    def __init__(self, target_index: Index, note_index: Index, content: str) -> None:
        super().__init__(target_index)
        self.note_index = note_index
        self.content = content

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        return f"{cls.COMMAND_WORD} NOTE_INDEX {kind.value}/EVENT_INDEX -content NOTE"

    def apply(self, roster: Roster, kind: EventKind, target: Event) -> CommandResult:
        select_note(target, self.note_index)
        roster.set_note(kind, target, self.note_index.zero_based, self.content)
        return CommandResult(self.MESSAGE_SUCCESS.format(note_index=self.note_index.one_based, event=target))


class DeleteNoteCommand(EventCommand):
    COMMAND_WORD = "rm-note"
    USAGE = (
        COMMAND_WORD
        + ": Deletes note NOTE_INDEX of the event at EVENT_INDEX of the displayed event list.\n"
        "Parameters: NOTE_INDEX Tutorial/EVENT_INDEX | Lab/EVENT_INDEX | Consultation/EVENT_INDEX\n"
        "Example: " + COMMAND_WORD + " 2 Consultation/1"
    )
    MESSAGE_SUCCESS = "Deleted Note \"{note}\" from Event: {event}"

    def __init__(self, target_index: Index, note_index: Index) -> None:
        super().__init__(target_index)
        self.note_index = note_index

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        return f"{cls.COMMAND_WORD} NOTE_INDEX {kind.value}/EVENT_INDEX"

    def apply(self, roster: Roster, kind: EventKind, target: Event) -> CommandResult:
        select_note(target, self.note_index)
        note = roster.remove_note(kind, target, self.note_index.zero_based)
        return CommandResult(self.MESSAGE_SUCCESS.format(note=note, event=target))


# ---------------------------------------------------------------------------
# Commands that do not address an existing event
# ---------------------------------------------------------------------------


class AddEventCommand(Command):
    COMMAND_WORD = "add-event"
    USAGE = (
        COMMAND_WORD
        + ": Adds an event to the roster.\n"
        "Parameters: Tutorial/NAME | Lab/NAME | Consultation/NAME [-date DATE] [-file PATH]\n"
        "Example: " + COMMAND_WORD + " Tutorial/T01 -date 2024-05-01 -file ~/slides/t01.pdf"
    )
    MESSAGE_SUCCESS = "Added Event: {event}"

    def __init__(self, event: Event) -> None:
        self.event = event

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        return f"{cls.COMMAND_WORD} {kind.value}/NAME [-date DATE]{_optional_file(kind)}"

    def execute(self, roster: Roster) -> CommandResult:
        roster = _require_roster(roster)
        if roster.has_event(self.event):
            raise DuplicateEntity(MESSAGE_DUPLICATE_EVENT)

        roster.add_event(self.event)
        return CommandResult(self.MESSAGE_SUCCESS.format(event=self.event))


class ScheduleEventsCommand(Command):
    COMMAND_WORD = "schedule"
    USAGE = (
        COMMAND_WORD
        + ": Adds REPETITIONS numbered events of one kind, one week apart when a date is given.\n"
        "Parameters: Recur/Tutorial/NAME | Recur/Lab/NAME | Recur/Consultation/NAME -n REPETITIONS "
        "[-date FIRST_DATE] [-file PATH]\n"
        "Example: " + COMMAND_WORD + " Recur/Lab/L -n 3 -date 2024-05-01"
    )
    MESSAGE_SUCCESS = "Added {count} Events: {names}"

    def __init__(self, events: List[Event]) -> None:
        self.events = events

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        return f"{cls.COMMAND_WORD} Recur/{kind.value}/NAME -n REPETITIONS [-date FIRST_DATE]{_optional_file(kind)}"

    def execute(self, roster: Roster) -> CommandResult:
        roster = _require_roster(roster)
        # all or nothing: check every event before adding the first one
        if any(roster.has_event(ev) for ev in self.events):
            raise DuplicateEntity(MESSAGE_DUPLICATE_EVENT)

        for ev in self.events:
            roster.add_event(ev)
        names = ", ".join(ev.name for ev in self.events)
        return CommandResult(self.MESSAGE_SUCCESS.format(count=len(self.events), names=names))


class FindEventCommand(Command):
    COMMAND_WORD = "find-event"
    USAGE = (
        COMMAND_WORD
        + ": Shows only the events of one kind whose names contain any of the given keywords "
        "(case-insensitive, whole words).\n"
        "Parameters: Tutorial/KEYWORD [MORE_KEYWORDS]... | Lab/... | Consultation/...\n"
        "Example: " + COMMAND_WORD + " Lab/L01 L02"
    )

    def __init__(self, kind: EventKind, keywords: List[str]) -> None:
        self.kind = kind
        self.keywords = keywords

    @classmethod
    def synopsis(cls, kind: EventKind) -> str:
        return f"{cls.COMMAND_WORD} {kind.value}/KEYWORD [MORE_KEYWORDS]..."

    def matches(self, event: Event) -> bool:
        words = {w.lower() for w in event.name.split()}
        return any(k.lower() in words for k in self.keywords)

    def execute(self, roster: Roster) -> CommandResult:
        roster = _require_roster(roster)
        roster.update_event_filter(self.kind, self.matches)
        count = len(roster.filtered_events(self.kind))
        return CommandResult(MESSAGE_EVENTS_LISTED_OVERVIEW.format(count=count))


class ListEventsCommand(Command):
    COMMAND_WORD = "list-events"
    USAGE = COMMAND_WORD + ": Shows all events of every kind.\nExample: " + COMMAND_WORD
    MESSAGE_SUCCESS = "Listed all events"

    def execute(self, roster: Roster) -> CommandResult:
        roster = _require_roster(roster)
        roster.reset_event_filters()
        return CommandResult(self.MESSAGE_SUCCESS)


class HelpCommand(Command):
    COMMAND_WORD = "help"
    USAGE = (
        COMMAND_WORD
        + ": Shows the available commands, optionally for one event kind.\n"
        "Parameters: [tutorial | lab | consultation]\n"
        "Example: " + COMMAND_WORD + " lab"
    )

    # (label, command) in the order they are listed
    SECTIONS: ClassVar[List[tuple]] = []

    def __init__(self, kind: Optional[EventKind] = None) -> None:
        self.kind = kind

    def execute(self, roster: Roster) -> CommandResult:
        if self.kind is None:
            lines = ["----- Commands -----"]
            for _, cmd in self.SECTIONS + [("Help", HelpCommand)]:
                lines.append(f"{cmd.COMMAND_WORD:<16}{_summary(cmd)}")
            return CommandResult("\n".join(lines))

        lines = [f"----- {self.kind.plural.capitalize()} -----"]
        for label, cmd in self.SECTIONS:
            synopsis = cmd.synopsis(self.kind)
            if synopsis:
                lines.append(f"{label + ':':<16}{synopsis}")
        return CommandResult("\n".join(lines))


HelpCommand.SECTIONS = [
    ("Add", AddEventCommand),
    ("Add Multiple", ScheduleEventsCommand),
    ("Delete", DeleteEventCommand),
    ("Edit", EditEventCommand),
    ("Open File", OpenFileCommand),
    ("Find", FindEventCommand),
    ("Add Student", AddStudentCommand),
    ("Delete Student", DeleteStudentCommand),
    ("Add Note", AddNoteCommand),
    ("Edit Note", EditNoteCommand),
    ("Delete Note", DeleteNoteCommand),
    ("List", ListEventsCommand),
]
