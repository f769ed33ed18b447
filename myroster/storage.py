"""
Persistent storage for the roster.

This module manages the file:

    data/roster.json

JSON schema:

    {
      "students":      [{"name": ..., "phone": ..., "email": ...}, ...],
      "tutorials":     [{"name": ..., "date": "YYYY-MM-DD", "file": ..., "students": [...], "notes": [...]}, ...],
      "labs":          [...same as tutorials...],
      "consultations": [{"name": ..., "date": ..., "students": [...], "notes": [...]}, ...]
    }

Filters are session state and are never stored.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from myroster.model import Event, EventKind, Student, make_event
from myroster.roster import Roster


logger = logging.getLogger(__name__)


def _default_roster_path() -> Path:
    """
    Return the default path of roster.json inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can override the path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "roster.json"


def _list_of(value: Any) -> list[Any]:
    # anything but a JSON array (null, number, string, object) counts as empty
    return value if isinstance(value, list) else []


def _strings(value: Any) -> list[str]:
    return [str(s) for s in _list_of(value) if isinstance(s, str) and s.strip()]


def _event_from_json(kind: EventKind, raw: dict[str, Any]) -> Optional[Event]:
    name = str(raw.get("name", "") or "").strip()
    if not name:
        return None

    date = None
    date_raw = raw.get("date")
    if isinstance(date_raw, str) and date_raw.strip():
        try:
            date = datetime.strptime(date_raw.strip(), "%Y-%m-%d").date()
        except ValueError:
            logger.warning("ignoring invalid date %r of %s %s", date_raw, kind.value, name)

    students = _strings(raw.get("students"))
    notes = _strings(raw.get("notes"))
    file_path = raw.get("file") if isinstance(raw.get("file"), str) else None
    return make_event(kind, name=name, date=date, file_path=file_path, students=students, notes=notes)


def _event_to_json(event: Event) -> dict[str, Any]:
    out: dict[str, Any] = {
        "name": event.name,
        "date": event.date.isoformat() if event.date is not None else None,
    }
    if event.has_files:
        out["file"] = getattr(event, "file_path", None)
    out["students"] = list(event.students)
    out["notes"] = list(event.notes)
    return out


def roster_from_json(data: Any) -> Roster:
    """
    Build a roster from decoded JSON. Entries that do not fit the schema are skipped.
    """
    if not isinstance(data, dict):
        return Roster()

    students: list[Student] = []
    for raw in _list_of(data.get("students")):
        if not isinstance(raw, dict):
            continue
        name = str(raw.get("name", "") or "").strip()
        if name:
            students.append(Student(name=name, phone=raw.get("phone"), email=raw.get("email")))

    roster = Roster(students)
    for kind in EventKind:
        for raw in _list_of(data.get(kind.plural)):
            if not isinstance(raw, dict):
                continue
            event = _event_from_json(kind, raw)
            if event is not None:
                roster.add_event(event)
    return roster


def roster_to_json(roster: Roster) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "students": [{"name": s.name, "phone": s.phone, "email": s.email} for s in roster.all_students()],
    }
    for kind in EventKind:
        payload[kind.plural] = [_event_to_json(ev) for ev in roster.all_events(kind)]
    return payload


def load_roster(path: str | Path | None = None) -> Roster:
    """
    Load the roster from roster.json.

    Returns an empty roster if the file does not exist or is invalid.
    """
    roster_path = Path(path) if path is not None else _default_roster_path()

    # First run: file does not exist yet -> empty roster
    if not roster_path.exists():
        return Roster()

    try:
        data = json.loads(roster_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("could not read %s (%s), starting with an empty roster", roster_path, exc)
        return Roster()

    return roster_from_json(data)


def save_roster(roster: Roster, path: str | Path | None = None) -> None:
    """
    Save the full (unfiltered) roster to roster.json.

    Creates parent directories if needed.
    """
    roster_path = Path(path) if path is not None else _default_roster_path()
    roster_path.parent.mkdir(parents=True, exist_ok=True)

    roster_path.write_text(
        json.dumps(roster_to_json(roster), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.debug("saved roster to %s", roster_path)
