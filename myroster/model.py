"""
Central data model definitions used across the project.

This module defines the canonical structure of the roster entities so that:
- all modules share the same field names
- the three event kinds (Tutorial, Lab, Consultation) stay structurally similar
- commands can refer to an event kind by a single enum value
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Type

from myroster.errors import ContractViolation


class EventKind(Enum):
    """
    The three event collections a command can target.

    The enum value doubles as the display name and as the kind marker word
    (``Tutorial/``, ``Lab/``, ``Consultation/``).
    """

    TUTORIAL = "Tutorial"
    LAB = "Lab"
    CONSULTATION = "Consultation"

    @property
    def prefix(self) -> str:
        return f"{self.value}/"

    @property
    def plural(self) -> str:
        return f"{self.value.lower()}s"

    @classmethod
    def from_word(cls, word: str) -> "EventKind":
        """
        Look up a kind by its name, case-insensitively ("lab" -> LAB).
        Raises ValueError for unknown words.
        """
        for kind in cls:
            if kind.value.lower() == word.strip().lower():
                return kind
        raise ValueError(f"Unknown event kind: {word!r}")


@dataclass(frozen=True)
class Index:
    """
    A 1-based display index as typed by the user.

    Only positive values can be represented; callers that let a user type an
    index must validate it before building one (see resolver.parse_index).
    """

    one_based: int

    def __post_init__(self) -> None:
        if self.one_based < 1:
            raise ContractViolation(f"Index must be positive, got {self.one_based}")

    @property
    def zero_based(self) -> int:
        return self.one_based - 1


@dataclass
class Student:
    """
    A student as far as the roster cares: the name is the identity,
    everything else is informational.
    """

    name: str
    phone: Optional[str] = None
    email: Optional[str] = None

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Event:
    """
    Base class of all calendar events.

    Events compare by identity: two tutorials with the same fields are still
    two different entries in the roster.
    """

    kind: ClassVar[EventKind]
    has_files: ClassVar[bool] = False

    name: str
    date: Optional[datetime.date] = None
    students: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    def is_same_event(self, other: "Event") -> bool:
        """
        Weaker notion of equality used for duplicate detection:
        same kind and same name (case-insensitive).
        """
        return other.kind is self.kind and other.name.strip().lower() == self.name.strip().lower()

    def _bits(self) -> List[str]:
        bits = [f"{self.kind.value} {self.name}"]
        if self.date is not None:
            bits.append(f"Date: {self.date.isoformat()}")
        if self.students:
            bits.append(f"Students: {', '.join(self.students)}")
        if self.notes:
            bits.append(f"Notes: {'; '.join(self.notes)}")
        return bits

    def __str__(self) -> str:
        return " | ".join(self._bits())


@dataclass(eq=False)
class FileEvent(Event):
    """
    An event that may carry one attached file (slides, lab sheet, ...).
    """

    has_files: ClassVar[bool] = True

    file_path: Optional[str] = None

    def _bits(self) -> List[str]:
        bits = super()._bits()
        if self.file_path:
            bits.insert(2 if self.date is not None else 1, f"File: {self.file_path}")
        return bits


@dataclass(eq=False)
class Tutorial(FileEvent):
    kind: ClassVar[EventKind] = EventKind.TUTORIAL


@dataclass(eq=False)
class Lab(FileEvent):
    kind: ClassVar[EventKind] = EventKind.LAB


@dataclass(eq=False)
class Consultation(Event):
    kind: ClassVar[EventKind] = EventKind.CONSULTATION


EVENT_TYPES: Dict[EventKind, Type[Event]] = {
    EventKind.TUTORIAL: Tutorial,
    EventKind.LAB: Lab,
    EventKind.CONSULTATION: Consultation,
}


def make_event(
    kind: EventKind,
    name: str,
    date: Optional[datetime.date] = None,
    file_path: Optional[str] = None,
    students: Optional[List[str]] = None,
    notes: Optional[List[str]] = None,
) -> Event:
    """
    Build an event of the given kind.

    file_path is ignored for kinds without file support.
    """
    cls = EVENT_TYPES[kind]
    students = list(students or [])
    notes = list(notes or [])
    if cls.has_files:
        return cls(name=name, date=date, students=students, notes=notes, file_path=file_path)
    return cls(name=name, date=date, students=students, notes=notes)


def make_series(
    kind: EventKind,
    name: str,
    repetitions: int,
    first_date: Optional[datetime.date] = None,
    file_path: Optional[str] = None,
) -> List[Event]:
    """
    Build repetitions events named NAME-1 .. NAME-n.

    With a first date, each following event is one week later.
    """
    events = []
    for i in range(repetitions):
        date = first_date + datetime.timedelta(weeks=i) if first_date is not None else None
        events.append(make_event(kind, name=f"{name}-{i + 1}", date=date, file_path=file_path))
    return events
