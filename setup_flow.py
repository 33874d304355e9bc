"""
Setup Orchestrator
==================

Collects the answers, runs the fixed list of setup tasks one after the
other, then prints the next steps for the options that were chosen.

Usage (from setup_template.py):
    from setup_flow import run_setup
    run_setup(root, terminal=terminal, cfg=cfg, collect=collect)
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

import commands
import transforms
from config import SetupConfig
from run_logging import RunLogger
from setup_models import Environment, LibraryInfo
from task_runner import SetupTask, run_setup_task
from terminal import CLEAR_SCREEN, CYAN, DIM, GREEN, NC, RED, UNDERLINE, Terminal

BANNER = f"""{CYAN}
┌─────────────────────────────────────────────────────────────┐
│ TypeScript Library Template Setup                           │
└─────────────────────────────────────────────────────────────┘{NC}
"""

PAGES_GUIDE_URL = "https://shorturl.at/xuPq3"
TOKENS_GUIDE_URL = "https://shorturl.at/XvwKS"

AnswerCollector = Callable[[], LibraryInfo]


def build_tasks(
    root: Path,
    info: LibraryInfo,
    cfg: SetupConfig,
    script_path: Path | None = None,
) -> list[SetupTask]:
    """Assemble the ordered task list for *info*; optional tasks only when chosen."""
    tasks = [
        SetupTask(
            "Updating package.json",
            "Updated package.json",
            lambda: transforms.update_package_json(root, info),
        ),
        SetupTask(
            "Updating LICENSE",
            "Updated LICENSE",
            lambda: transforms.update_license(root, info),
        ),
    ]

    if info.include_docs:
        tasks.append(SetupTask(
            "Updating VitePress configuration",
            "Updated VitePress configuration",
            lambda: transforms.update_docs_config(root, info),
        ))
    else:
        tasks.append(SetupTask(
            "Removing VitePress documentation",
            "Removed VitePress documentation",
            lambda: transforms.remove_docs(root),
        ))

    tasks += [
        SetupTask(
            "Updating playground",
            "Updated playground",
            lambda: transforms.update_playground(root, info),
        ),
        SetupTask(
            "Creating README.md",
            "Created README.md",
            lambda: transforms.write_readme(root, info),
        ),
        SetupTask(
            "Updating & installing dependencies",
            "Updated & installed dependencies",
            lambda: commands.update_dependencies(root, cfg),
        ),
    ]

    # "both" keeps the template as it is
    if info.environment == Environment.NODE:
        tasks.append(SetupTask(
            "Removing browser support",
            "Removed browser support",
            lambda: transforms.remove_browser_support(root),
        ))
    elif info.environment == Environment.BROWSER:
        tasks.append(SetupTask(
            "Removing node support",
            "Removed node support",
            lambda: transforms.remove_node_support(root),
        ))

    if info.publish:
        tasks.append(SetupTask(
            "Publishing npm library",
            "Published npm library",
            lambda: commands.publish_library(root, cfg),
        ))
    if info.commit:
        tasks.append(SetupTask(
            "Committing changes",
            "Committed changes",
            lambda: commands.commit_changes(root, cfg),
        ))

    if script_path is not None:
        tasks.append(SetupTask(
            "Cleaning up setup script",
            "Cleaned up setup script",
            lambda: transforms.remove_setup_script(script_path),
        ))
    return tasks


def build_next_steps(info: LibraryInfo, commit_message: str) -> list[str]:
    """Numbered follow-up steps; numbering is contiguous whatever is skipped."""
    steps: list[str] = []
    if info.include_docs:
        steps.append(f"Configure GitHub pages → {UNDERLINE}{PAGES_GUIDE_URL}{NC}")
    steps.append(f"Configure Tokens       → {UNDERLINE}{TOKENS_GUIDE_URL}{NC}")
    if not info.publish:
        steps.append("Publish to npm         → npm publish")
    if not info.commit:
        steps.append(f'Commit changes         → git commit -m "{commit_message}"')
    steps.append("Push to GitHub         → git push origin main")
    if info.include_docs:
        steps.append(f"View online docs       → {UNDERLINE}{info.docs_url}{NC}")
    return [f"   {number}. {step}" for number, step in enumerate(steps, start=1)]


def build_daily_workflow(info: LibraryInfo) -> list[str]:
    lines = [
        "   - Start development       → npm run dev",
        "   - Test your library       → npm test",
        "   - Try the playground      → npm run playground",
    ]
    if info.include_docs:
        lines.append("   - Preview docs            → npm run docs:dev")
    return lines


def print_summary(terminal: Terminal, info: LibraryInfo, cfg: SetupConfig) -> None:
    terminal.write(f"{GREEN}\n   Setup completed successfully!{NC}\n")
    terminal.write(f"{CYAN}\n\n🚀 Next steps:{NC}\n")
    terminal.write(f"{DIM}\n   Finish setup\n{NC}\n")
    for line in build_next_steps(info, cfg.commit_message):
        terminal.write(line + "\n")
    terminal.write(f"{DIM}\n   Daily workflow\n{NC}\n")
    for line in build_daily_workflow(info):
        terminal.write(line + "\n")
    terminal.write(f"\n{CYAN}✨ Happy coding!\n{NC}\n")


async def run_tasks(
    tasks: list[SetupTask],
    *,
    terminal: Terminal,
    cfg: SetupConfig,
    run_logger: RunLogger | None = None,
) -> dict[str, bool]:
    """Await each task in order; a failed task does not stop the next one."""
    results: dict[str, bool] = {}
    for task in tasks:
        results[task.loading_label] = await run_setup_task(
            task,
            terminal=terminal,
            interval=cfg.spinner_interval,
            run_logger=run_logger,
        )
    return results


def run_setup(
    root: Path,
    *,
    terminal: Terminal,
    cfg: SetupConfig,
    collect: AnswerCollector,
    script_path: Path | None = None,
    run_logger: RunLogger | None = None,
) -> dict[str, bool]:
    """
    Run the whole setup: banner, answers, tasks, next steps.

    Prompts run before the event loop starts so Ctrl+C while typing
    interrupts immediately. Task failures are reported and the sequence
    continues. Anything that escapes (an aborted prompt, an unexpected
    error) is printed once and re-raised.

    Returns:
        Mapping of task loading label -> success flag, in execution order.
    """
    try:
        if cfg.clear_screen:
            terminal.write(CLEAR_SCREEN)
        terminal.write(BANNER)
        if run_logger is not None:
            run_logger.log_event(phase="setup", event_type="lifecycle", message="setup_started")

        info = collect()
        if run_logger is not None:
            run_logger.log_answers(info)

        terminal.write(f"{CYAN}\n\n🔧 Updating project files...\n{NC}\n")
        results = asyncio.run(run_tasks(
            build_tasks(root, info, cfg, script_path),
            terminal=terminal,
            cfg=cfg,
            run_logger=run_logger,
        ))

        print_summary(terminal, info, cfg)
        if run_logger is not None:
            run_logger.log_event(
                phase="setup",
                event_type="lifecycle",
                message="setup_finished",
                meta={"failed": [label for label, ok in results.items() if not ok]},
            )
        return results
    except Exception as exc:
        terminal.write(f"{RED}\n[!] Setup failed: {exc}{NC}\n")
        if run_logger is not None:
            run_logger.log_event(phase="setup", event_type="failed", message=str(exc))
        raise
