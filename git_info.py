"""Discover author and repository defaults from the local git setup."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from setup_models import GitInfo

GITHUB_REMOTE_RE = re.compile(r"github\.com[/:](.*?)(\.git)?$")


def parse_github_remote(url: str) -> tuple[str, str]:
    """
    Split a GitHub remote URL into (owner, repo).

    Handles https://github.com/owner/repo(.git) and
    git@github.com:owner/repo(.git). Returns empty strings otherwise.
    """
    match = GITHUB_REMOTE_RE.search(url.strip())
    if not match or not match.group(1):
        return "", ""
    parts = match.group(1).split("/")
    return parts[0], parts[-1]


def _git(args: list[str], cwd: Path, git_bin: str) -> str:
    result = subprocess.run(
        [git_bin, *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def get_git_info(cwd: Path, git_bin: str = "git") -> GitInfo:
    """Read user.name / user.email and the origin remote; blanks when unknown."""
    author = email = repository = user_name = repo_name = ""

    try:
        author = _git(["config", "user.name"], cwd, git_bin)
        email = _git(["config", "user.email"], cwd, git_bin)
    except (subprocess.CalledProcessError, OSError):
        # No git user configured; the prompts ask instead.
        pass

    try:
        repository = _git(["remote", "get-url", "origin"], cwd, git_bin)
        user_name, repo_name = parse_github_remote(repository)
    except (subprocess.CalledProcessError, OSError):
        pass

    return GitInfo(
        author=author,
        email=email,
        repository=repository,
        user_name=user_name,
        repo_name=repo_name,
    )
