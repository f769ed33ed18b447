"""
Argument resolution (ArgumentMap -> validated, typed values).

Every event command declares a Grammar. Resolution is order-sensitive:

1. forbidden markers (entity markers, markers the command does not take)
2. exactly one kind marker, holding a single value; preamble shape
3. kind-specific rejections (e.g. Consultation has no files)
4. typed parsing of the values (index, date, name, path)

Structural checks (1-2) run before semantic ones (3-4), so a format error is
never hidden behind a kind-specific message.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Tuple

from myroster.errors import InvalidFormat, InvalidIndex, InvalidValue, UnsupportedForKind
from myroster.messages import (
    MESSAGE_INVALID_DATE,
    MESSAGE_INVALID_EVENT_NAME,
    MESSAGE_INVALID_FILE_PATH,
    MESSAGE_INVALID_INDEX,
    MESSAGE_INVALID_REPETITIONS,
)
from myroster.model import EventKind, Index
from myroster.syntax import ENTITY_PREFIXES, KIND_PREFIXES
from myroster.tokenizer import ArgumentMap


logger = logging.getLogger(__name__)

_INDEX_RE = re.compile(r"^\d+$")
_EVENT_NAME_RE = re.compile(r"^[\w][\w \-]*$")

# a year of weekly events
MAX_REPETITIONS = 52


class Preamble(Enum):
    EMPTY = "empty"
    REQUIRED = "required"


@dataclass(frozen=True)
class Grammar:
    """
    What a command accepts.

    usage:       shown to the user on any format error
    auxiliary:   markers the command takes besides the kind marker
                 (may include entity markers such as -date)
    unsupported: kind -> message, for kinds the command rejects
    preamble:    whether free text before the first marker is required
    """

    usage: str
    auxiliary: FrozenSet[str] = frozenset()
    unsupported: Dict[EventKind, str] = field(default_factory=dict)
    preamble: Preamble = Preamble.EMPTY


@dataclass(frozen=True)
class Resolved:
    """Result of resolving the kind marker of a command."""

    kind: EventKind
    value: str
    args: ArgumentMap


# ---------------------------------------------------------------------------
# Structural + kind resolution (steps 1-3)
# ---------------------------------------------------------------------------


def _check_markers(args: ArgumentMap, grammar: Grammar) -> None:
    # Entity markers cannot be combined with event kind markers
    forbidden_entities = ENTITY_PREFIXES - grammar.auxiliary
    if any(args.has(p) for p in forbidden_entities):
        raise InvalidFormat(grammar.usage)

    # Any other marker the command does not declare
    allowed = set(KIND_PREFIXES) | set(grammar.auxiliary)
    if any(p not in allowed for p in args.prefixes()):
        raise InvalidFormat(grammar.usage)

    # Auxiliary markers may appear at most once
    if any(len(args.values(p)) > 1 for p in grammar.auxiliary):
        raise InvalidFormat(grammar.usage)


def _select_kind(args: ArgumentMap, grammar: Grammar) -> EventKind:
    present = [kind for kind in EventKind if args.has(kind.prefix)]
    if len(present) != 1 or len(args.values(present[0].prefix)) != 1:
        raise InvalidFormat(grammar.usage)

    if grammar.preamble is Preamble.EMPTY and args.preamble:
        raise InvalidFormat(grammar.usage)
    if grammar.preamble is Preamble.REQUIRED and not args.preamble:
        raise InvalidFormat(grammar.usage)

    return present[0]


def resolve_kind(args: ArgumentMap, grammar: Grammar) -> Resolved:
    """
    Validate the markers of args against grammar and pick the event kind.

    Raises InvalidFormat or UnsupportedForKind.
    """
    _check_markers(args, grammar)
    kind = _select_kind(args, grammar)

    reason = grammar.unsupported.get(kind)
    if reason is not None:
        raise UnsupportedForKind(reason)

    logger.debug("resolved kind %s from markers %s", kind.value, args.prefixes())
    return Resolved(kind=kind, value=args.value(kind.prefix) or "", args=args)


def resolve_index(args: ArgumentMap, grammar: Grammar) -> Tuple[EventKind, Index]:
    """
    Resolve a command of the form "KIND/INDEX" into (kind, index).
    """
    resolved = resolve_kind(args, grammar)
    return resolved.kind, parse_index(resolved.value)


# ---------------------------------------------------------------------------
# Typed values (step 4)
# ---------------------------------------------------------------------------


def parse_index(text: str) -> Index:
    """
    Parse a 1-based index. Anything but a positive integer raises InvalidIndex.
    """
    raw = text.strip()
    if not _INDEX_RE.match(raw) or int(raw) == 0:
        raise InvalidIndex(MESSAGE_INVALID_INDEX)
    return Index(int(raw))


def parse_date(text: str) -> date:
    try:
        return datetime.strptime(text.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidValue(MESSAGE_INVALID_DATE) from None


def parse_event_name(text: str) -> str:
    # Collapse inner whitespace so "T 01" and "T  01" are the same name
    name = " ".join(text.split())
    if not _EVENT_NAME_RE.match(name):
        raise InvalidValue(MESSAGE_INVALID_EVENT_NAME)
    return name


def parse_file_path(text: str) -> str:
    raw = text.strip()
    if not raw:
        raise InvalidValue(MESSAGE_INVALID_FILE_PATH)
    return str(Path(raw).expanduser())


def parse_optional(args: ArgumentMap, prefix: str, parse_fn) -> Optional[object]:
    """
    Apply parse_fn to the value of prefix if the prefix is present.
    """
    raw = args.value(prefix)
    if raw is None:
        return None
    return parse_fn(raw)


def parse_repetitions(text: str) -> int:
    raw = text.strip()
    if not _INDEX_RE.match(raw) or not 1 <= int(raw) <= MAX_REPETITIONS:
        raise InvalidValue(MESSAGE_INVALID_REPETITIONS.format(limit=MAX_REPETITIONS))
    return int(raw)
