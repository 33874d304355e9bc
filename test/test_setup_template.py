#!/usr/bin/env python3
"""Tests for the command-line entry point."""

import tempfile
import unittest
from pathlib import Path
from unittest import mock

import setup_template
from prompter import SetupAborted
from setup_models import GitInfo


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        patcher = mock.patch("setup_template.get_git_info", return_value=GitInfo())
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        self._tmp.cleanup()

    def test_answers_file_and_keep_script(self):
        answers = self.root / "answers.json"
        with mock.patch("setup_template.run_setup") as run_setup:
            code = setup_template.main(
                ["--template-dir", str(self.root), "--answers", str(answers), "--keep-script"]
            )
        self.assertEqual(code, 0)
        kwargs = run_setup.call_args.kwargs
        self.assertIsNone(kwargs["script_path"])
        self.assertIs(kwargs["collect"].func, setup_template.load_answers)
        self.assertEqual(kwargs["collect"].args[0], answers)
        self.assertFalse(kwargs["run_logger"].enabled)

    def test_default_removes_entry_script_and_can_log(self):
        with mock.patch("setup_template.run_setup") as run_setup:
            setup_template.main(["--template-dir", str(self.root), "--log"])
        kwargs = run_setup.call_args.kwargs
        self.assertEqual(kwargs["script_path"], Path(setup_template.__file__).resolve())
        self.assertIs(kwargs["collect"].func, setup_template.collect_answers)
        self.assertTrue(kwargs["run_logger"].enabled)

    def test_exit_codes(self):
        cases = [(SetupAborted("cancelled"), 1), (KeyboardInterrupt(), 130)]
        for error, expected in cases:
            with self.subTest(error=type(error).__name__):
                with mock.patch("setup_template.run_setup", side_effect=error):
                    with mock.patch("builtins.print"):
                        code = setup_template.main(["--template-dir", str(self.root)])
                self.assertEqual(code, expected)

    def test_missing_template_dir(self):
        with mock.patch("builtins.print"):
            code = setup_template.main(["--template-dir", str(self.root / "absent")])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
