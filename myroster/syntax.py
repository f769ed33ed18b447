"""
Command-line syntax: the marker prefixes that introduce typed arguments.

Example:

    add-event Tutorial/T01 -date 2024-05-01 -file ~/slides/t01.pdf
              ^^^^^^^^^    ^^^^^            ^^^^^
              kind marker  entity marker    auxiliary marker
"""

from __future__ import annotations

from typing import FrozenSet, Tuple

from myroster.model import EventKind


# ---------------------------------------------------------------------------
# Kind markers
# ---------------------------------------------------------------------------

PREFIX_TUTORIAL = EventKind.TUTORIAL.prefix
PREFIX_LAB = EventKind.LAB.prefix
PREFIX_CONSULTATION = EventKind.CONSULTATION.prefix

KIND_PREFIXES: Tuple[str, ...] = tuple(kind.prefix for kind in EventKind)


# ---------------------------------------------------------------------------
# Entity markers (contact data + date)
# ---------------------------------------------------------------------------

PREFIX_NAME = "n/"
PREFIX_PHONE = "p/"
PREFIX_EMAIL = "e/"
PREFIX_PHOTO = "ph/"
PREFIX_DATE = "-date"
PREFIX_ADDRESS = "a/"
PREFIX_REMARK = "r/"
PREFIX_PERFORMANCE = "perf/"
PREFIX_TAG = "t/"

ENTITY_PREFIXES: FrozenSet[str] = frozenset(
    {
        PREFIX_NAME,
        PREFIX_PHONE,
        PREFIX_EMAIL,
        PREFIX_PHOTO,
        PREFIX_DATE,
        PREFIX_ADDRESS,
        PREFIX_REMARK,
        PREFIX_PERFORMANCE,
        PREFIX_TAG,
    }
)


# ---------------------------------------------------------------------------
# Auxiliary markers
# ---------------------------------------------------------------------------

PREFIX_FILE = "-file"
PREFIX_REPETITIONS = "-n"
PREFIX_CONTENT = "-content"

# Written directly before a kind marker: schedule Recur/Lab/NAME
PREFIX_RECUR = "Recur/"

# Every command tokenizes against the full set, so that forbidden markers are
# visible to the resolver wherever they appear in the input.
ALL_PREFIXES: Tuple[str, ...] = (
    KIND_PREFIXES + tuple(sorted(ENTITY_PREFIXES)) + (PREFIX_FILE, PREFIX_REPETITIONS, PREFIX_CONTENT)
)
