#!/usr/bin/env python3
"""Tests for environment-driven configuration."""

import os
import unittest
from unittest import mock

from config import DEFAULT_COMMIT_MESSAGE, SetupConfig, get_config


class TestConfig(unittest.TestCase):
    def setUp(self):
        get_config.cache_clear()
        self.addCleanup(get_config.cache_clear)

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            cfg = get_config()
        self.assertEqual(cfg.npm_bin, "npm")
        self.assertEqual(cfg.commit_message, DEFAULT_COMMIT_MESSAGE)
        self.assertTrue(cfg.clear_screen)
        self.assertFalse(cfg.run_log_enabled)
        self.assertAlmostEqual(cfg.spinner_interval, 0.08)

    def test_env_overrides(self):
        env = {
            "SETUP_NPM_BIN": "pnpm",
            "SETUP_CLEAR_SCREEN": "off",
            "SETUP_RUN_LOG": "yes",
            "SETUP_SPINNER_INTERVAL_MS": "250",
            "SETUP_DEFAULT_LICENSE": "ISC",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            cfg = get_config()
        self.assertEqual(cfg.npm_bin, "pnpm")
        self.assertFalse(cfg.clear_screen)
        self.assertTrue(cfg.run_log_enabled)
        self.assertAlmostEqual(cfg.spinner_interval, 0.25)
        self.assertEqual(cfg.default_license, "ISC")

    def test_invalid_values_fall_back(self):
        env = {"SETUP_CLEAR_SCREEN": "maybe", "SETUP_SPINNER_INTERVAL_MS": "fast"}
        with mock.patch.dict(os.environ, env, clear=True):
            cfg = get_config()
        self.assertTrue(cfg.clear_screen)
        self.assertEqual(cfg.spinner_interval_ms, 80)

    def test_spinner_interval_has_floor(self):
        self.assertAlmostEqual(SetupConfig(spinner_interval_ms=1).spinner_interval, 0.01)


if __name__ == "__main__":
    unittest.main()
