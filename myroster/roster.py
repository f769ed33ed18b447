"""
In-memory roster: the single model every command runs against.

The roster owns all entity storage. For every EventKind it keeps
- the backing list of events, in insertion order
- a filter predicate; the *filtered view* is the backing list narrowed by it

Display indices typed by the user are always resolved against the filtered
view. Mutations, on the other hand, take the event object itself and locate
it by identity, so an index computed against one view can never hit an
unrelated event.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from myroster.errors import ContractViolation
from myroster.model import Event, EventKind, Student


logger = logging.getLogger(__name__)

EventPredicate = Callable[[Event], bool]


def _show_all(_: object) -> bool:
    return True


class Roster:
    def __init__(self, students: Optional[List[Student]] = None) -> None:
        self._students: List[Student] = list(students or [])
        self._events: Dict[EventKind, List[Event]] = {kind: [] for kind in EventKind}
        self._filters: Dict[EventKind, EventPredicate] = {kind: _show_all for kind in EventKind}

    # -----------------------------------------------------------------------
    # Views
    # -----------------------------------------------------------------------

    def all_events(self, kind: EventKind) -> List[Event]:
        """Unfiltered backing list (copy) of one kind."""
        return list(self._events[kind])

    def filtered_events(self, kind: EventKind) -> List[Event]:
        """
        Snapshot of the currently visible events of one kind, in display order.
        """
        predicate = self._filters[kind]
        return [ev for ev in self._events[kind] if predicate(ev)]

    def update_event_filter(self, kind: EventKind, predicate: EventPredicate) -> None:
        self._filters[kind] = predicate

    def reset_event_filters(self) -> None:
        for kind in EventKind:
            self._filters[kind] = _show_all

    def all_students(self) -> List[Student]:
        return list(self._students)

    def filtered_students(self) -> List[Student]:
        # students are not filtered yet; this is the list add-student indexes into
        return list(self._students)

    def find_student(self, name: str) -> Optional[Student]:
        for s in self._students:
            if s.name == name:
                return s
        return None

    # -----------------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------------

    def _position(self, kind: EventKind, event: Event) -> int:
        for i, ev in enumerate(self._events[kind]):
            if ev is event:
                return i
        raise ContractViolation(f"{event!s} is not stored in the {kind.value} list")

    def has_event(self, event: Event) -> bool:
        """True if an event with the same kind and name is already stored."""
        return any(ev.is_same_event(event) for ev in self._events[event.kind])

    def add_event(self, event: Event) -> None:
        self._events[event.kind].append(event)
        logger.debug("added %s", event)

    def delete_event(self, kind: EventKind, event: Event) -> None:
        """Remove exactly the given event object from the list of its kind."""
        del self._events[kind][self._position(kind, event)]
        logger.debug("deleted %s", event)

    def set_event(self, kind: EventKind, target: Event, edited: Event) -> None:
        """Replace the given event object with edited, keeping its position."""
        if edited.kind is not kind:
            raise ContractViolation(f"cannot store a {edited.kind.value} in the {kind.value} list")
        self._events[kind][self._position(kind, target)] = edited
        logger.debug("replaced %s with %s", target, edited)

    def add_student_to_event(self, kind: EventKind, event: Event, student: Student) -> None:
        self._position(kind, event)
        event.students.append(student.name)
        logger.debug("added student %s to %s", student.name, event.name)

    def remove_student_from_event(self, kind: EventKind, event: Event, student: Student) -> None:
        self._position(kind, event)
        event.students.remove(student.name)
        logger.debug("removed student %s from %s", student.name, event.name)

    def add_note_to_event(self, kind: EventKind, event: Event, note: str) -> None:
        self._position(kind, event)
        event.notes.append(note)
        logger.debug("added note to %s", event.name)

    def set_note(self, kind: EventKind, event: Event, position: int, note: str) -> None:
        """Replace the note at the 0-based position of the given event."""
        self._position(kind, event)
        event.notes[position] = note
        logger.debug("edited note %d of %s", position + 1, event.name)

    def remove_note(self, kind: EventKind, event: Event, position: int) -> str:
        self._position(kind, event)
        note = event.notes.pop(position)
        logger.debug("removed note %d of %s", position + 1, event.name)
        return note
