#!/usr/bin/env python3
"""
Library Template Setup
======================

Personalizes a freshly cloned library template: package metadata, license,
docs, playground wiring, dependencies, optional publish and commit. The
entry script removes itself when it is done.

Usage:
    python setup_template.py                          # interactive
    python setup_template.py --answers answers.json   # no prompts
    python setup_template.py --keep-script --log      # keep this file, write a run log
"""

import argparse
import sys
from functools import partial
from pathlib import Path

from collector import collect_answers, load_answers
from config import get_config
from git_info import get_git_info
from run_logging import RunLogger
from setup_flow import run_setup
from terminal import Terminal


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Library template setup wizard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--template-dir",
        type=Path,
        default=Path.cwd(),
        help="Root of the template to personalize (default: current directory)",
    )
    parser.add_argument(
        "--answers",
        type=Path,
        default=None,
        metavar="PATH",
        help="JSON file with the answers; skips the interactive questions",
    )
    parser.add_argument(
        "--keep-script",
        action="store_true",
        help="Do not delete this script after the setup",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        help="Write a JSONL run log (also enabled by SETUP_RUN_LOG=1)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = create_parser().parse_args(argv)
    cfg = get_config()
    root = args.template_dir.resolve()
    terminal = Terminal()

    if not root.is_dir():
        print(f"Error: template directory not found: {root}", file=sys.stderr)
        return 1

    git_info = get_git_info(root, cfg.git_bin)
    if args.answers:
        collect = partial(load_answers, args.answers, git_info, root, cfg.default_license)
    else:
        collect = partial(collect_answers, terminal, git_info, root, cfg.default_license)

    run_logger = RunLogger.create(
        enabled=args.log or cfg.run_log_enabled,
        base_dir=root / cfg.run_log_dir,
        template_dir=root,
    )
    script_path = None if args.keep_script else Path(__file__).resolve()

    try:
        run_setup(
            root,
            terminal=terminal,
            cfg=cfg,
            collect=collect,
            script_path=script_path,
            run_logger=run_logger,
        )
        return 0
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception:
        # run_setup already printed the failure
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
