#!/usr/bin/env python3
"""Tests for the text / confirm / select prompt primitives."""

import unittest

import readchar

from fake_terminal import FakeTerminal
from prompter import SetupAborted, ask_confirm, ask_select, ask_text

UP = readchar.key.UP
DOWN = readchar.key.DOWN
ENTER = readchar.key.ENTER
CTRL_C = readchar.key.CTRL_C

OPTIONS = {"both": "Node.js and browser", "browser": "Browser only", "node": "Node.js only"}


class TestAskText(unittest.TestCase):
    def test_empty_input_resolves_to_default(self):
        terminal = FakeTerminal(lines=[""])
        self.assertEqual(ask_text(terminal, "Library name:", "my-lib"), "my-lib")
        self.assertIn("   • Library name: \x1b[0;32mmy-lib\x1b[0m\n", terminal.text)

    def test_typed_value_wins_over_default(self):
        terminal = FakeTerminal(lines=["  other-lib  "])
        self.assertEqual(ask_text(terminal, "Library name:", "my-lib"), "other-lib")

    def test_empty_input_without_default_asks_again_as_required(self):
        terminal = FakeTerminal(lines=["", "   ", "A tiny library"])
        value = ask_text(terminal, "Library description:")
        self.assertEqual(value, "A tiny library")

        questions = [chunk for chunk in terminal.output if chunk.startswith("   • Library description")]
        self.assertEqual(len(questions), 3)
        self.assertNotIn("(required)", questions[0])
        self.assertIn("(required)", questions[1])
        self.assertIn("(required)", questions[2])
        self.assertIn("\x1b[1A\x1b[2K", terminal.output)

    def test_renders_hint_before_default(self):
        terminal = FakeTerminal(lines=["x"])
        ask_text(terminal, "Keywords", "a,b", "comma separated")
        self.assertEqual(
            terminal.output[0],
            "   • Keywords \x1b[2m(comma separated)\x1b[0m \x1b[2m(a,b)\x1b[0m: ",
        )

    def test_closed_input_aborts(self):
        terminal = FakeTerminal(lines=[])
        with self.assertRaises(SetupAborted):
            ask_text(terminal, "Library description:")


class TestAskConfirm(unittest.TestCase):
    def test_negative_tokens_answer_false(self):
        for answer in ("n", "N", "no", "NO", " No "):
            with self.subTest(answer=answer):
                self.assertFalse(ask_confirm(FakeTerminal(lines=[answer]), "Commit changes?"))

    def test_anything_else_answers_true(self):
        for answer in ("", "y", "yes", "nope", "maybe"):
            with self.subTest(answer=answer):
                self.assertTrue(ask_confirm(FakeTerminal(lines=[answer]), "Commit changes?"))

    def test_empty_input_is_true_even_with_false_default(self):
        terminal = FakeTerminal(lines=[""])
        self.assertTrue(ask_confirm(terminal, "Publish library to npm?", default=False))
        self.assertIn("[y/N]", terminal.output[0])

    def test_summary_line_shows_answer(self):
        terminal = FakeTerminal(lines=["no"])
        ask_confirm(terminal, "Commit changes?", True, "Initial commit")
        self.assertIn("(Initial commit)", terminal.output[0])
        self.assertIn("[Y/n]", terminal.output[0])
        self.assertTrue(terminal.text.endswith("   • Commit changes? \x1b[0;32mNo\x1b[0m\n"))


class TestAskSelect(unittest.TestCase):
    def test_down_down_up_selects_second_option(self):
        terminal = FakeTerminal(keys=[DOWN, DOWN, UP, ENTER])
        self.assertEqual(ask_select(terminal, "Supported environments", OPTIONS), "browser")
        self.assertIn("   • Supported environments: \x1b[0;32mBrowser only\x1b[0m\n", terminal.output)

    def test_starts_on_default_key(self):
        terminal = FakeTerminal(keys=[ENTER])
        self.assertEqual(ask_select(terminal, "Supported environments", OPTIONS, "node"), "node")

    def test_unknown_default_starts_at_first_option(self):
        terminal = FakeTerminal(keys=[ENTER])
        self.assertEqual(ask_select(terminal, "Pick", OPTIONS, "missing"), "both")

    def test_up_at_first_option_is_ignored(self):
        terminal = FakeTerminal(keys=[UP, UP, ENTER])
        self.assertEqual(ask_select(terminal, "Pick", OPTIONS), "both")
        renders = [chunk for chunk in terminal.output if chunk == "   • Pick\n"]
        self.assertEqual(len(renders), 1)

    def test_down_at_last_option_is_ignored(self):
        terminal = FakeTerminal(keys=[DOWN, DOWN, DOWN, DOWN, ENTER])
        self.assertEqual(ask_select(terminal, "Pick", OPTIONS), "node")
        renders = [chunk for chunk in terminal.output if chunk == "   • Pick\n"]
        self.assertEqual(len(renders), 3)  # initial + two real moves

    def test_other_keys_are_discarded(self):
        terminal = FakeTerminal(keys=["x", "q", DOWN, "z", ENTER])
        self.assertEqual(ask_select(terminal, "Pick", OPTIONS), "browser")

    def test_highlights_active_option(self):
        terminal = FakeTerminal(keys=[ENTER])
        ask_select(terminal, "Pick", OPTIONS)
        self.assertIn("     \x1b[1;36m> Node.js and browser\x1b[0m\n", terminal.output)
        self.assertIn("       Browser only\x1b[0m\n", terminal.output)

    def test_raw_mode_restored_after_commit(self):
        terminal = FakeTerminal(keys=[ENTER], raw=False)
        ask_select(terminal, "Pick", OPTIONS)
        self.assertFalse(terminal.raw)
        self.assertEqual(terminal.raw_changes, [True, False])
        self.assertTrue(terminal.text.endswith("\x1b[?25h"))

    def test_ctrl_c_aborts_and_restores_raw_mode(self):
        terminal = FakeTerminal(keys=[DOWN, CTRL_C, ENTER], raw=False)
        with self.assertRaises(SetupAborted):
            ask_select(terminal, "Pick", OPTIONS)
        self.assertFalse(terminal.raw)
        self.assertEqual(terminal.raw_changes, [True, False])
        self.assertEqual(list(terminal.keys), [ENTER])

    def test_keyboard_interrupt_from_reader_aborts(self):
        terminal = FakeTerminal(keys=[KeyboardInterrupt()], raw=False)
        with self.assertRaises(SetupAborted):
            ask_select(terminal, "Pick", OPTIONS)
        self.assertFalse(terminal.raw)

    def test_already_raw_terminal_stays_raw(self):
        terminal = FakeTerminal(keys=[ENTER], raw=True)
        ask_select(terminal, "Pick", OPTIONS)
        self.assertTrue(terminal.raw)
        self.assertEqual(terminal.raw_changes, [True])

    def test_closed_input_aborts(self):
        terminal = FakeTerminal(keys=[])
        with self.assertRaises(SetupAborted):
            ask_select(terminal, "Pick", OPTIONS)
        self.assertFalse(terminal.raw)

    def test_requires_options(self):
        with self.assertRaises(ValueError):
            ask_select(FakeTerminal(), "Pick", {})


if __name__ == "__main__":
    unittest.main()
