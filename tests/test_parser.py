"""
Unit tests for command parsing (text -> command object).
"""

import unittest
from datetime import date

from myroster.commands import (
    AddEventCommand,
    AddNoteCommand,
    AddStudentCommand,
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
from myroster.errors import InvalidFormat, InvalidIndex, InvalidValue, UnknownCommand, UnsupportedForKind
from myroster.messages import MESSAGE_CONSULTATION_NO_FILES, MESSAGE_EMPTY_NOTE, MESSAGE_INVALID_REPETITIONS
from myroster.model import Consultation, EventKind, Index, Lab, Tutorial
from myroster.parser import parse_command


def _marked(cmd, kind: EventKind):
    cmd.mark(kind)
    return cmd


class TestParseDelete(unittest.TestCase):
    def test_each_kind(self) -> None:
        for kind in EventKind:
            with self.subTest(kind=kind):
                cmd = parse_command(f"delete {kind.value}/3")
                self.assertEqual(cmd, _marked(DeleteEventCommand(Index(3)), kind))

    def test_missing_or_multiple_kind_markers(self) -> None:
        for text in ("delete", "delete 1", "delete Tutorial/1 Lab/2", "delete Lab/1 Consultation/1 Tutorial/1"):
            with self.subTest(text=text):
                with self.assertRaises(InvalidFormat) as ctx:
                    parse_command(text)
                self.assertIn(DeleteEventCommand.USAGE, str(ctx.exception))

    def test_entity_markers_rejected_in_any_order(self) -> None:
        for text in (
            "delete Tutorial/1 n/Alice",
            "delete n/Alice Tutorial/1",
            "delete p/123 Lab/1",
            "delete Consultation/1 -date 2024-05-01",
            "delete t/friend Lab/2",
        ):
            with self.subTest(text=text):
                with self.assertRaises(InvalidFormat):
                    parse_command(text)

    def test_non_empty_preamble(self) -> None:
        with self.assertRaises(InvalidFormat):
            parse_command("delete now Tutorial/1")

    def test_invalid_index(self) -> None:
        for text in ("delete Tutorial/0", "delete Lab/-2", "delete Consultation/abc", "delete Lab/"):
            with self.subTest(text=text):
                with self.assertRaises(InvalidIndex):
                    parse_command(text)


class TestParseOpenFile(unittest.TestCase):
    def test_tutorial_and_lab(self) -> None:
        self.assertEqual(parse_command("open-file Tutorial/1"), _marked(OpenFileCommand(Index(1)), EventKind.TUTORIAL))
        self.assertEqual(parse_command("open-file Lab/2"), _marked(OpenFileCommand(Index(2)), EventKind.LAB))

    def test_consultation_rejected_with_fixed_message(self) -> None:
        for text in ("open-file Consultation/1", "open-file Consultation/999", "open-file Consultation/x"):
            with self.subTest(text=text):
                with self.assertRaises(UnsupportedForKind) as ctx:
                    parse_command(text)
                self.assertEqual(str(ctx.exception), MESSAGE_CONSULTATION_NO_FILES)

    def test_format_errors_come_before_consultation_message(self) -> None:
        for text in ("open-file Consultation/1 n/Bob", "open-file x Consultation/1", "open-file Consultation/1 Lab/1"):
            with self.subTest(text=text):
                with self.assertRaises(InvalidFormat):
                    parse_command(text)

    def test_repeated_marker_is_literal_text(self) -> None:
        with self.assertRaises(InvalidIndex):
            parse_command("open-file Lab/1 Lab/2")


class TestParseAddEdit(unittest.TestCase):
    def test_add_event_with_all_fields(self) -> None:
        cmd = parse_command("add-event Tutorial/T01 -date 2024-05-01 -file slides/t01.pdf")
        self.assertIsInstance(cmd, AddEventCommand)
        self.assertIsInstance(cmd.event, Tutorial)
        self.assertEqual(cmd.event.name, "T01")
        self.assertEqual(cmd.event.date, date(2024, 5, 1))
        self.assertEqual(cmd.event.file_path, "slides/t01.pdf")

    def test_add_event_minimal(self) -> None:
        cmd = parse_command("add-event Lab/Lab 2")
        self.assertIsInstance(cmd.event, Lab)
        self.assertEqual(cmd.event.name, "Lab 2")
        self.assertIsNone(cmd.event.date)

    def test_add_consultation_with_file_is_unsupported(self) -> None:
        with self.assertRaises(UnsupportedForKind):
            parse_command("add-event Consultation/C01 -file notes.pdf")
        cmd = parse_command("add-event Consultation/C01 -date 2024-05-03")
        self.assertIsInstance(cmd.event, Consultation)

    def test_add_event_rejects_contact_markers(self) -> None:
        with self.assertRaises(InvalidFormat):
            parse_command("add-event Tutorial/T01 n/Alice")

    def test_add_event_bad_values(self) -> None:
        with self.assertRaises(InvalidValue):
            parse_command("add-event Tutorial/T01 -date tomorrow")
        with self.assertRaises(InvalidValue):
            parse_command("add-event Tutorial/")

    def test_edit_event(self) -> None:
        cmd = parse_command("edit-event 2 Lab/L05 -date 2024-06-01")
        expected = _marked(EditEventCommand(Index(2), EventEdit(name="L05", date=date(2024, 6, 1))), EventKind.LAB)
        self.assertEqual(cmd, expected)

    def test_edit_event_empty_name_keeps_it(self) -> None:
        cmd = parse_command("edit-event 1 Tutorial/ -file t.pdf")
        self.assertEqual(cmd.edit, EventEdit(file_path="t.pdf"))

    def test_edit_event_needs_a_change(self) -> None:
        with self.assertRaises(InvalidValue):
            parse_command("edit-event 1 Tutorial/")

    def test_edit_event_needs_index(self) -> None:
        with self.assertRaises(InvalidFormat):
            parse_command("edit-event Tutorial/T05")
        with self.assertRaises(InvalidIndex):
            parse_command("edit-event one Tutorial/T05")


class TestParseOther(unittest.TestCase):
    def test_add_and_delete_student(self) -> None:
        self.assertEqual(
            parse_command("add-student 2 Consultation/1"),
            _marked(AddStudentCommand(Index(1), Index(2)), EventKind.CONSULTATION),
        )
        self.assertEqual(
            parse_command("delete-student 1 Lab/3"),
            _marked(DeleteStudentCommand(Index(3), Index(1)), EventKind.LAB),
        )

    def test_add_student_needs_student_index(self) -> None:
        with self.assertRaises(InvalidFormat):
            parse_command("add-student Tutorial/1")

    def test_find_event(self) -> None:
        self.assertEqual(parse_command("find-event Lab/L01 L02"), FindEventCommand(EventKind.LAB, ["L01", "L02"]))
        with self.assertRaises(InvalidFormat):
            parse_command("find-event Lab/")

    def test_list_events(self) -> None:
        self.assertEqual(parse_command("list-events"), ListEventsCommand())
        with self.assertRaises(InvalidFormat):
            parse_command("list-events now")

    def test_help(self) -> None:
        self.assertEqual(parse_command("help"), HelpCommand())
        self.assertEqual(parse_command("help LAB"), HelpCommand(EventKind.LAB))
        with self.assertRaises(InvalidFormat):
            parse_command("help lecture")

    def test_unknown_and_empty(self) -> None:
        with self.assertRaises(UnknownCommand):
            parse_command("vim Tutorial/T01")
        with self.assertRaises(InvalidFormat):
            parse_command("   ")


class TestParseSchedule(unittest.TestCase):
    def test_weekly_series(self) -> None:
        cmd = parse_command("schedule Recur/Lab/L -n 3 -date 2024-05-01 -file sheet.pdf")
        self.assertIsInstance(cmd, ScheduleEventsCommand)
        self.assertEqual([ev.name for ev in cmd.events], ["L-1", "L-2", "L-3"])
        self.assertEqual(
            [ev.date for ev in cmd.events],
            [date(2024, 5, 1), date(2024, 5, 8), date(2024, 5, 15)],
        )
        self.assertTrue(all(isinstance(ev, Lab) and ev.file_path == "sheet.pdf" for ev in cmd.events))

    def test_series_without_date(self) -> None:
        cmd = parse_command("schedule Recur/Consultation/Office hours -n 2")
        self.assertEqual([ev.name for ev in cmd.events], ["Office hours-1", "Office hours-2"])
        self.assertTrue(all(isinstance(ev, Consultation) and ev.date is None for ev in cmd.events))

    def test_recur_marker_and_repetitions_are_required(self) -> None:
        for text in (
            "schedule Lab/L -n 3",
            "schedule Recur/L -n 3",
            "schedule Recur/Lab/L",
            "schedule x Recur/Lab/L -n 3",
            "schedule Recur/Lab/L -n 3 -n 4",
            "schedule Recur/Lab/L -n 3 p/999",
        ):
            with self.subTest(text=text):
                with self.assertRaises(InvalidFormat):
                    parse_command(text)

    def test_repetitions_must_be_in_range(self) -> None:
        for value in ("0", "-1", "two", "53"):
            with self.subTest(value=value):
                with self.assertRaises(InvalidValue) as ctx:
                    parse_command(f"schedule Recur/Tutorial/T -n {value}")
                self.assertEqual(str(ctx.exception), MESSAGE_INVALID_REPETITIONS.format(limit=52))
        self.assertEqual(len(parse_command("schedule Recur/Tutorial/T -n 52").events), 52)

    def test_consultation_series_with_file_is_unsupported(self) -> None:
        with self.assertRaises(UnsupportedForKind):
            parse_command("schedule Recur/Consultation/C -n 2 -file a.pdf")

    def test_repetitions_marker_is_foreign_to_other_commands(self) -> None:
        with self.assertRaises(InvalidFormat):
            parse_command("add-event Lab/L -n 3")


class TestParseNotes(unittest.TestCase):
    def test_add_note(self) -> None:
        self.assertEqual(
            parse_command("add-note Lab/2 -content Bring laptops"),
            _marked(AddNoteCommand(Index(2), "Bring laptops"), EventKind.LAB),
        )

    def test_note_content_keeps_marker_like_text(self) -> None:
        cmd = parse_command("add-note Tutorial/1 -content compare with Lab/2 -date tbc")
        self.assertEqual(cmd.content, "compare with Lab/2 -date tbc")
        self.assertEqual(cmd.kind, EventKind.TUTORIAL)

    def test_edit_and_delete_note(self) -> None:
        self.assertEqual(
            parse_command("edit-note 3 Consultation/1 -content Room B2"),
            _marked(EditNoteCommand(Index(1), Index(3), "Room B2"), EventKind.CONSULTATION),
        )
        self.assertEqual(
            parse_command("rm-note 2 Tutorial/4"),
            _marked(DeleteNoteCommand(Index(4), Index(2)), EventKind.TUTORIAL),
        )

    def test_format_errors(self) -> None:
        for text in (
            "add-note Lab/1",
            "add-note -content hi Lab/1",
            "add-note 1 Lab/1 -content hi",
            "edit-note Lab/1 -content hi",
            "edit-note 1 Lab/1",
            "rm-note Lab/1",
            "rm-note 1 Lab/1 -content hi",
            "rm-note 1 Lab/1 Tutorial/1",
        ):
            with self.subTest(text=text):
                with self.assertRaises(InvalidFormat):
                    parse_command(text)

    def test_value_errors(self) -> None:
        with self.assertRaises(InvalidValue) as ctx:
            parse_command("add-note Lab/1 -content   ")
        self.assertEqual(str(ctx.exception), MESSAGE_EMPTY_NOTE)
        with self.assertRaises(InvalidIndex):
            parse_command("rm-note zero Lab/1")
        with self.assertRaises(InvalidIndex):
            parse_command("edit-note 1 Lab/0 -content x")


if __name__ == "__main__":
    unittest.main()
