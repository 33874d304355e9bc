"""
Central Configuration Module
==============================

Loads wizard configuration from environment variables (and .env via
python-dotenv). Provides a SetupConfig dataclass and get_config() singleton.

Usage:
    from config import get_config
    cfg = get_config()
    print(cfg.npm_bin)
    print(cfg.spinner_interval)
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv(dotenv_path=Path(__file__).parent / ".env")


DEFAULT_COMMIT_MESSAGE = "feat: update project information and configuration"


def _parse_bool_env(value: str | None, default: bool) -> bool:
    """Parse boolean-like env values with sensible defaults."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int_env(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


@dataclass
class SetupConfig:
    """All wizard configuration, loaded from .env with sensible defaults."""

    # Terminal
    spinner_interval_ms: int = 80
    clear_screen: bool = True

    # External tools
    npm_bin: str = "npm"
    npx_bin: str = "npx"
    git_bin: str = "git"
    commit_message: str = DEFAULT_COMMIT_MESSAGE

    # Answer defaults
    default_license: str = "MIT"

    # Run log
    run_log_enabled: bool = False
    run_log_dir: str = ".setup-logs"

    @property
    def spinner_interval(self) -> float:
        """Spinner tick interval in seconds (never below 10ms)."""
        return max(self.spinner_interval_ms, 10) / 1000


@lru_cache(maxsize=1)
def get_config() -> SetupConfig:
    """
    Return the singleton SetupConfig loaded from environment variables.

    Call reload_config() to pick up a changed .env.
    """
    return SetupConfig(
        spinner_interval_ms=_parse_int_env(
            os.environ.get("SETUP_SPINNER_INTERVAL_MS"), 80
        ),
        clear_screen=_parse_bool_env(os.environ.get("SETUP_CLEAR_SCREEN"), True),
        npm_bin=os.environ.get("SETUP_NPM_BIN", "npm"),
        npx_bin=os.environ.get("SETUP_NPX_BIN", "npx"),
        git_bin=os.environ.get("SETUP_GIT_BIN", "git"),
        commit_message=os.environ.get("SETUP_COMMIT_MESSAGE", DEFAULT_COMMIT_MESSAGE),
        default_license=os.environ.get("SETUP_DEFAULT_LICENSE", "MIT"),
        run_log_enabled=_parse_bool_env(os.environ.get("SETUP_RUN_LOG"), False),
        run_log_dir=os.environ.get("SETUP_RUN_LOG_DIR", ".setup-logs"),
    )


def reload_config() -> SetupConfig:
    """
    Reload configuration from disk (re-reads .env, clears cache).
    """
    get_config.cache_clear()
    load_dotenv(
        dotenv_path=Path(__file__).parent / ".env",
        override=True,
    )
    return get_config()
