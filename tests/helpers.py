"""
Shared fixtures for the test modules.
"""

from datetime import date

from myroster.model import Consultation, Lab, Student, Tutorial
from myroster.roster import Roster


def sample_roster() -> Roster:
    """
    3 tutorials, 2 labs, 1 consultation, 2 students.
    """
    roster = Roster([Student("Alice", email="alice@example.com"), Student("Bob")])
    roster.add_event(Tutorial("T01", date=date(2024, 5, 1), file_path="t01.pdf"))
    roster.add_event(Tutorial("T02"))
    roster.add_event(Tutorial("T03", students=["Alice"]))
    roster.add_event(Lab("L01"))
    roster.add_event(Lab("L02", file_path="l02.pdf"))
    roster.add_event(Consultation("C01", date=date(2024, 5, 3)))
    return roster


def names(events) -> list:
    return [ev.name for ev in events]
