"""
External Commands
=================

Package-manager and git invocations used by the setup tasks. Every command
runs to completion in the template directory with its output captured; a
non-zero exit raises CommandError and the calling task wraps it in a
task-specific message.
"""

import asyncio
import subprocess
from pathlib import Path

from config import SetupConfig

PUBLISH_CONFLICT_MARKERS = ("E403", "E409", "EPUBLISHCONFLICT", "403 Forbidden", "409 Conflict")


class CommandError(RuntimeError):
    """An external command exited with a non-zero status."""

    def __init__(self, result: subprocess.CompletedProcess[str]) -> None:
        self.result = result
        detail = (result.stderr or result.stdout or "").strip()[-500:] or "(no output)"
        super().__init__(
            f"Command failed ({result.returncode}): {' '.join(result.args)}\n{detail}"
        )


async def run_command(cmd: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """
    Run *cmd* in *cwd* without blocking the event loop.

    Raises:
        CommandError: If the command exits with a non-zero status.
        FileNotFoundError: If the executable is not installed.
    """
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=str(cwd),
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await proc.communicate()
    result = subprocess.CompletedProcess(
        args=cmd,
        returncode=proc.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
    if result.returncode != 0:
        raise CommandError(result)
    return result


async def update_dependencies(root: Path, cfg: SetupConfig) -> None:
    """Bump package.json ranges to the latest versions and reinstall."""
    try:
        await run_command([cfg.npx_bin, "npm-check-updates", "-u", "-s"], root)
        await run_command(
            [cfg.npm_bin, "install", "--prefer-offline", "--no-audit", "--no-fund"],
            root,
        )
    except (CommandError, OSError) as exc:
        raise RuntimeError(f"Failed to update dependencies: {exc}") from exc


def is_name_taken_error(message: str) -> bool:
    return any(marker in message for marker in PUBLISH_CONFLICT_MARKERS)


async def publish_library(root: Path, cfg: SetupConfig) -> None:
    """Build the library and publish it to the npm registry."""
    try:
        await run_command([cfg.npm_bin, "run", "build"], root)
        await run_command([cfg.npm_bin, "publish", "--access", "public"], root)
    except (CommandError, OSError) as exc:
        if is_name_taken_error(str(exc)):
            raise RuntimeError(
                "Publishing failed: The package name is already taken on npm.\n"
                "   Please choose a different name for your library, update the "
                "configuration and relaunch this assistant."
            ) from exc
        raise RuntimeError(f"Publishing failed. Error details: {exc}") from exc


async def commit_changes(root: Path, cfg: SetupConfig) -> None:
    """Stage everything and create the initial configuration commit."""
    try:
        await run_command([cfg.git_bin, "add", "."], root)
        await run_command([cfg.git_bin, "commit", "-m", cfg.commit_message], root)
    except (CommandError, OSError) as exc:
        raise RuntimeError(
            f"Failed to commit changes: {exc}. Please commit your changes manually."
        ) from exc
