"""
Command parsing (raw text -> Command object).

parse_command() splits off the command word and hands the rest to the
parser registered for that word. Each parser tokenizes against the full
prefix set, lets the resolver validate the markers against the command's
grammar, and builds a command for exactly one event kind.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Tuple

from myroster.commands import (
    AddEventCommand,
    AddNoteCommand,
    AddStudentCommand,
    Command,
    DeleteEventCommand,
    DeleteNoteCommand,
    DeleteStudentCommand,
    EditEventCommand,
    EditNoteCommand,
    EventEdit,
    FindEventCommand,
    HelpCommand,
    ListEventsCommand,
    OpenFileCommand,
    ScheduleEventsCommand,
)
from myroster.errors import InvalidFormat, InvalidValue, UnknownCommand, UnsupportedForKind
from myroster.messages import (
    MESSAGE_CONSULTATION_NO_FILES,
    MESSAGE_EMPTY_NOTE,
    MESSAGE_NOT_EDITED,
    MESSAGE_UNKNOWN_COMMAND,
)
from myroster.model import EVENT_TYPES, EventKind, make_event, make_series
from myroster.resolver import (
    Grammar,
    Preamble,
    parse_date,
    parse_event_name,
    parse_file_path,
    parse_index,
    parse_optional,
    parse_repetitions,
    resolve_index,
    resolve_kind,
)
from myroster.syntax import (
    ALL_PREFIXES,
    KIND_PREFIXES,
    PREFIX_CONTENT,
    PREFIX_DATE,
    PREFIX_FILE,
    PREFIX_RECUR,
    PREFIX_REPETITIONS,
)
from myroster.tokenizer import tokenize, tokenize_first_prefix


logger = logging.getLogger(__name__)

_COMMAND_FORMAT = re.compile(r"^(?P<word>\S+)(?P<args>.*)$", re.DOTALL)

_NO_FILES = {EventKind.CONSULTATION: MESSAGE_CONSULTATION_NO_FILES}

DELETE_GRAMMAR = Grammar(usage=DeleteEventCommand.USAGE)
OPEN_FILE_GRAMMAR = Grammar(usage=OpenFileCommand.USAGE, unsupported=_NO_FILES)
ADD_EVENT_GRAMMAR = Grammar(usage=AddEventCommand.USAGE, auxiliary=frozenset({PREFIX_DATE, PREFIX_FILE}))
EDIT_EVENT_GRAMMAR = Grammar(
    usage=EditEventCommand.USAGE,
    auxiliary=frozenset({PREFIX_DATE, PREFIX_FILE}),
    preamble=Preamble.REQUIRED,
)
ADD_STUDENT_GRAMMAR = Grammar(usage=AddStudentCommand.USAGE, preamble=Preamble.REQUIRED)
DELETE_STUDENT_GRAMMAR = Grammar(usage=DeleteStudentCommand.USAGE, preamble=Preamble.REQUIRED)
FIND_EVENT_GRAMMAR = Grammar(usage=FindEventCommand.USAGE)
SCHEDULE_GRAMMAR = Grammar(
    usage=ScheduleEventsCommand.USAGE,
    auxiliary=frozenset({PREFIX_REPETITIONS, PREFIX_DATE, PREFIX_FILE}),
)
ADD_NOTE_GRAMMAR = Grammar(usage=AddNoteCommand.USAGE)
EDIT_NOTE_GRAMMAR = Grammar(usage=EditNoteCommand.USAGE, preamble=Preamble.REQUIRED)
DELETE_NOTE_GRAMMAR = Grammar(usage=DeleteNoteCommand.USAGE, preamble=Preamble.REQUIRED)

# "Recur/" counts only right before a kind marker
_RECUR_MARKER = re.compile(
    r"(?<!\S)" + re.escape(PREFIX_RECUR) + "(?=" + "|".join(re.escape(p) for p in KIND_PREFIXES) + ")"
)
# everything after "-content" is note text, markers included
_CONTENT_MARKER = re.compile(r"(?<!\S)" + re.escape(PREFIX_CONTENT) + r"(?=\s|$)")


# ---------------------------------------------------------------------------
# Per-command parsers
# ---------------------------------------------------------------------------


def parse_delete(args: str) -> DeleteEventCommand:
    kind, index = resolve_index(tokenize(args, *ALL_PREFIXES), DELETE_GRAMMAR)
    command = DeleteEventCommand(index)
    command.mark(kind)
    return command


def parse_open_file(args: str) -> OpenFileCommand:
    kind, index = resolve_index(tokenize_first_prefix(args, *ALL_PREFIXES), OPEN_FILE_GRAMMAR)
    command = OpenFileCommand(index)
    command.mark(kind)
    return command


def _reject_file_for(kind: EventKind, arg_map) -> None:
    if arg_map.has(PREFIX_FILE) and not EVENT_TYPES[kind].has_files:
        raise UnsupportedForKind(MESSAGE_CONSULTATION_NO_FILES)


def parse_add_event(args: str) -> AddEventCommand:
    resolved = resolve_kind(tokenize(args, *ALL_PREFIXES), ADD_EVENT_GRAMMAR)
    _reject_file_for(resolved.kind, resolved.args)

    event = make_event(
        resolved.kind,
        name=parse_event_name(resolved.value),
        date=parse_optional(resolved.args, PREFIX_DATE, parse_date),
        file_path=parse_optional(resolved.args, PREFIX_FILE, parse_file_path),
    )
    return AddEventCommand(event)


def parse_schedule(args: str) -> ScheduleEventsCommand:
    text, found = _RECUR_MARKER.subn(" ", args, count=1)
    if not found:
        raise InvalidFormat(ScheduleEventsCommand.USAGE)

    resolved = resolve_kind(tokenize(text, *ALL_PREFIXES), SCHEDULE_GRAMMAR)
    if not resolved.args.has(PREFIX_REPETITIONS):
        raise InvalidFormat(ScheduleEventsCommand.USAGE)
    _reject_file_for(resolved.kind, resolved.args)

    events = make_series(
        resolved.kind,
        name=parse_event_name(resolved.value),
        repetitions=parse_repetitions(resolved.args.value(PREFIX_REPETITIONS)),
        first_date=parse_optional(resolved.args, PREFIX_DATE, parse_date),
        file_path=parse_optional(resolved.args, PREFIX_FILE, parse_file_path),
    )
    return ScheduleEventsCommand(events)


def _split_content(args: str, usage: str) -> Tuple[str, str]:
    parts = _CONTENT_MARKER.split(args, maxsplit=1)
    if len(parts) != 2:
        raise InvalidFormat(usage)
    return parts[0], parts[1].strip()


def _parse_note_content(content: str) -> str:
    if not content:
        raise InvalidValue(MESSAGE_EMPTY_NOTE)
    return content


def parse_add_note(args: str) -> AddNoteCommand:
    head, content = _split_content(args, AddNoteCommand.USAGE)
    kind, index = resolve_index(tokenize(head, *ALL_PREFIXES), ADD_NOTE_GRAMMAR)

    command = AddNoteCommand(index, _parse_note_content(content))
    command.mark(kind)
    return command


def parse_edit_note(args: str) -> EditNoteCommand:
    head, content = _split_content(args, EditNoteCommand.USAGE)
    resolved = resolve_kind(tokenize(head, *ALL_PREFIXES), EDIT_NOTE_GRAMMAR)
    note_index = parse_index(resolved.args.preamble)
    event_index = parse_index(resolved.value)

    command = EditNoteCommand(event_index, note_index, _parse_note_content(content))
    command.mark(resolved.kind)
    return command


def parse_delete_note(args: str) -> DeleteNoteCommand:
    resolved = resolve_kind(tokenize(args, *ALL_PREFIXES), DELETE_NOTE_GRAMMAR)
    note_index = parse_index(resolved.args.preamble)
    event_index = parse_index(resolved.value)

    command = DeleteNoteCommand(event_index, note_index)
    command.mark(resolved.kind)
    return command


def parse_edit_event(args: str) -> EditEventCommand:
    resolved = resolve_kind(tokenize(args, *ALL_PREFIXES), EDIT_EVENT_GRAMMAR)
    _reject_file_for(resolved.kind, resolved.args)
    index = parse_index(resolved.args.preamble)

    # An empty kind marker value ("Lab/") keeps the current name
    edit = EventEdit(
        name=parse_event_name(resolved.value) if resolved.value else None,
        date=parse_optional(resolved.args, PREFIX_DATE, parse_date),
        file_path=parse_optional(resolved.args, PREFIX_FILE, parse_file_path),
    )
    if edit.is_empty():
        raise InvalidValue(MESSAGE_NOT_EDITED)

    command = EditEventCommand(index, edit)
    command.mark(resolved.kind)
    return command


def _parse_student_event(args: str, grammar: Grammar, command_cls):
    resolved = resolve_kind(tokenize(args, *ALL_PREFIXES), grammar)
    student_index = parse_index(resolved.args.preamble)
    event_index = parse_index(resolved.value)

    command = command_cls(event_index, student_index)
    command.mark(resolved.kind)
    return command


def parse_add_student(args: str) -> AddStudentCommand:
    return _parse_student_event(args, ADD_STUDENT_GRAMMAR, AddStudentCommand)


def parse_delete_student(args: str) -> DeleteStudentCommand:
    return _parse_student_event(args, DELETE_STUDENT_GRAMMAR, DeleteStudentCommand)


def parse_find_event(args: str) -> FindEventCommand:
    resolved = resolve_kind(tokenize(args, *ALL_PREFIXES), FIND_EVENT_GRAMMAR)
    keywords = resolved.value.split()
    if not keywords:
        raise InvalidFormat(FindEventCommand.USAGE)
    return FindEventCommand(resolved.kind, keywords)


def parse_list_events(args: str) -> ListEventsCommand:
    if args.strip():
        raise InvalidFormat(ListEventsCommand.USAGE)
    return ListEventsCommand()


def parse_help(args: str) -> HelpCommand:
    word = args.strip()
    if not word:
        return HelpCommand()
    try:
        return HelpCommand(EventKind.from_word(word))
    except ValueError:
        raise InvalidFormat(HelpCommand.USAGE) from None


PARSERS: Dict[str, Callable[[str], Command]] = {
    AddEventCommand.COMMAND_WORD: parse_add_event,
    ScheduleEventsCommand.COMMAND_WORD: parse_schedule,
    DeleteEventCommand.COMMAND_WORD: parse_delete,
    EditEventCommand.COMMAND_WORD: parse_edit_event,
    OpenFileCommand.COMMAND_WORD: parse_open_file,
    AddStudentCommand.COMMAND_WORD: parse_add_student,
    DeleteStudentCommand.COMMAND_WORD: parse_delete_student,
    AddNoteCommand.COMMAND_WORD: parse_add_note,
    EditNoteCommand.COMMAND_WORD: parse_edit_note,
    DeleteNoteCommand.COMMAND_WORD: parse_delete_note,
    FindEventCommand.COMMAND_WORD: parse_find_event,
    ListEventsCommand.COMMAND_WORD: parse_list_events,
    HelpCommand.COMMAND_WORD: parse_help,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_command(text: str) -> Command:
    """
    Parse one line of user input into a command.

    Raises a CommandError subclass if the input is not a valid command.
    """
    match = _COMMAND_FORMAT.match(text.strip())
    if not match:
        raise InvalidFormat(HelpCommand.USAGE)

    word = match.group("word")
    parser = PARSERS.get(word)
    if parser is None:
        raise UnknownCommand(MESSAGE_UNKNOWN_COMMAND)

    logger.debug("parsing %r with %s", word, parser.__name__)
    return parser(match.group("args"))
