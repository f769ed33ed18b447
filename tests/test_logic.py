"""
End-to-end tests through the command-invocation boundary (text in, text out).
"""

import unittest
from unittest import mock

from myroster.errors import ContractViolation, InvalidFormat
from myroster.logic import execute_command, run_command
from myroster.messages import MESSAGE_CONSULTATION_NO_FILES, MESSAGE_INVALID_EVENT_DISPLAYED_INDEX
from myroster.model import EventKind
from tests.helpers import names, sample_roster


def _snapshot(roster) -> dict:
    return {kind: names(roster.all_events(kind)) for kind in EventKind}


class TestRunCommand(unittest.TestCase):
    def test_success_text(self) -> None:
        roster = sample_roster()
        outcome = run_command(roster, "delete Lab/1")
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.text, "Deleted Event: Lab L01")

    def test_errors_are_rendered_and_model_untouched(self) -> None:
        for text in (
            "delete Tutorial/1 Lab/1",
            "delete Tutorial/1 n/Alice",
            "delete Tutorial/9",
            "delete Tutorial/x",
            "open-file Consultation/1",
            "frobnicate",
        ):
            with self.subTest(text=text):
                roster = sample_roster()
                before = _snapshot(roster)
                outcome = run_command(roster, text)
                self.assertFalse(outcome.ok)
                self.assertTrue(outcome.text)
                self.assertEqual(_snapshot(roster), before)

    def test_out_of_range_message_is_kind_agnostic(self) -> None:
        roster = sample_roster()
        texts = {run_command(roster, f"delete {kind.value}/50").text for kind in EventKind}
        self.assertEqual(texts, {MESSAGE_INVALID_EVENT_DISPLAYED_INDEX})

    def test_open_file_consultation_message(self) -> None:
        outcome = run_command(sample_roster(), "open-file Consultation/1")
        self.assertEqual(outcome.text, MESSAGE_CONSULTATION_NO_FILES)

    def test_execute_command_raises_user_errors(self) -> None:
        with self.assertRaises(InvalidFormat):
            execute_command(sample_roster(), "delete")

    def test_contract_violations_propagate(self) -> None:
        with mock.patch("myroster.logic.parse_command") as parse:
            parse.return_value.execute.side_effect = ContractViolation("broken")
            with self.assertRaises(ContractViolation):
                run_command(sample_roster(), "delete Lab/1")


class TestScenarios(unittest.TestCase):
    def test_find_then_delete_uses_filtered_index(self) -> None:
        roster = sample_roster()
        self.assertTrue(run_command(roster, "find-event Tutorial/T03").ok)

        outcome = run_command(roster, "delete Tutorial/1")
        self.assertEqual(outcome.text, "Deleted Event: Tutorial T03")
        self.assertEqual(names(roster.all_events(EventKind.TUTORIAL)), ["T01", "T02"])

        # view is now empty
        self.assertEqual(run_command(roster, "delete Tutorial/1").text, MESSAGE_INVALID_EVENT_DISPLAYED_INDEX)

        run_command(roster, "list-events")
        self.assertEqual(len(roster.filtered_events(EventKind.TUTORIAL)), 2)

    def test_add_edit_assign(self) -> None:
        roster = sample_roster()
        self.assertTrue(run_command(roster, "add-event Lab/L03 -date 2024-05-10").ok)
        self.assertTrue(run_command(roster, "edit-event 3 Lab/L04").ok)
        outcome = run_command(roster, "add-student 1 Lab/3")
        self.assertEqual(outcome.text, "Added Student Alice to Event: Lab L04 | Date: 2024-05-10 | Students: Alice")

    def test_duplicate_event_text(self) -> None:
        outcome = run_command(sample_roster(), "add-event Tutorial/t01")
        self.assertFalse(outcome.ok)
        self.assertEqual(outcome.text, "This event already exists in the roster")

    def test_schedule_is_all_or_nothing(self) -> None:
        roster = sample_roster()
        outcome = run_command(roster, "schedule Recur/Tutorial/W -n 2 -date 2024-05-06")
        self.assertEqual(outcome.text, "Added 2 Events: W-1, W-2")

        outcome = run_command(roster, "schedule Recur/Tutorial/W -n 4")
        self.assertFalse(outcome.ok)
        self.assertEqual(names(roster.all_events(EventKind.TUTORIAL)), ["T01", "T02", "T03", "W-1", "W-2"])

    def test_notes_follow_the_displayed_index(self) -> None:
        roster = sample_roster()
        run_command(roster, "find-event Lab/L02")
        self.assertTrue(run_command(roster, "add-note Lab/1 -content Bring laptops").ok)
        self.assertTrue(run_command(roster, "edit-note 1 Lab/1 -content Bring chargers").ok)
        self.assertEqual(roster.all_events(EventKind.LAB)[1].notes, ["Bring chargers"])

        self.assertEqual(run_command(roster, "rm-note 2 Lab/1").text, "The note index provided is invalid")
        self.assertTrue(run_command(roster, "rm-note 1 Lab/1").ok)
        self.assertEqual(roster.all_events(EventKind.LAB)[1].notes, [])


if __name__ == "__main__":
    unittest.main()
