"""
Answer Collection
=================

Asks the setup questions in a fixed order and returns a LibraryInfo.
Defaults come from the local git configuration; homepage and issue
tracker URLs are derived rather than asked.

Public functions
----------------
  collect_answers(terminal, git_info, cwd)   Interactive Q&A -> LibraryInfo
  load_answers(path, git_info, cwd)          Same record from a JSON file
  parse_keywords(raw)                        "a, b ,, c" -> ("a", "b", "c")
  parse_flag(data, key)                      yes/no answer from a JSON file
"""

import json
from datetime import datetime
from pathlib import Path

from prompter import ask_confirm, ask_select, ask_text
from setup_models import ENVIRONMENT_LABELS, Environment, GitInfo, LibraryInfo
from terminal import CYAN, DIM, NC, Terminal


def parse_keywords(raw: str) -> tuple[str, ...]:
    """Split a comma separated list, trimming and dropping empty entries."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


YES_ANSWERS = {"y", "yes", "true", "1", "on"}
NO_ANSWERS = {"n", "no", "false", "0", "off"}


def parse_flag(data: dict, key: str, default: bool = True) -> bool:
    """
    Read a yes/no answer from an answers file.

    Accepts JSON booleans or the usual yes/no words; anything else is
    rejected rather than guessed.
    """
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in YES_ANSWERS:
            return True
        if normalized in NO_ANSWERS:
            return False
    raise ValueError(f"Answers file has an invalid value for \"{key}\": {value!r}")


def github_urls(user_name: str, repo_name: str) -> tuple[str, str]:
    """Return (homepage, bugs) URLs for a GitHub repository."""
    base = f"https://github.com/{user_name}/{repo_name}"
    return f"{base}#readme", f"{base}/issues"


def _current_year() -> str:
    return str(datetime.now().year)


def _section(terminal: Terminal, title: str) -> None:
    terminal.write(f"{DIM}{title}{NC}\n\n")


def collect_answers(
    terminal: Terminal,
    git_info: GitInfo,
    cwd: Path,
    default_license: str = "MIT",
) -> LibraryInfo:
    """Run the interactive Q&A and return the complete answer record."""
    repo_name = git_info.repo_name or cwd.name

    terminal.write(f"{CYAN}\n📦 Please provide information about your library:\n{NC}\n")
    _section(terminal, "   Basic Project Information")

    name = ask_text(terminal, "Library name:", repo_name)
    description = ask_text(terminal, "Library description:")
    keywords = parse_keywords(ask_text(terminal, "Keywords", "", "comma separated"))
    while not keywords:
        keywords = parse_keywords(
            ask_text(terminal, "Keywords", "", "comma separated", required=True)
        )

    terminal.write("\n")
    _section(terminal, "   Author Details")

    author = ask_text(terminal, "Author name:", git_info.author)
    email = ask_text(terminal, "Author email:", git_info.email)

    user_name = git_info.user_name
    if not user_name:
        user_name = ask_text(terminal, "GitHub username:")

    repository = git_info.repository
    if not repository:
        repository = ask_text(terminal, "Repository URL:")

    homepage, bugs = github_urls(user_name, repo_name)

    terminal.write("\n")
    _section(terminal, "   Configuration & Features")

    environment = ask_select(
        terminal, "Supported environments", ENVIRONMENT_LABELS, Environment.BOTH.value
    )
    include_docs = ask_confirm(terminal, "Include VitePress documentation?")
    publish = ask_confirm(
        terminal,
        "Publish library to npm?",
        True,
        "Verifies name availability and prevents CI errors",
    )
    commit = ask_confirm(
        terminal,
        "Commit changes?",
        True,
        "Initial commit with updated configuration",
    )

    return LibraryInfo(
        name=name,
        description=description,
        keywords=keywords,
        author=author,
        email=email,
        user_name=user_name,
        repo_name=repo_name,
        repository=repository,
        homepage=homepage,
        bugs=bugs,
        year=_current_year(),
        license=default_license,
        environment=Environment(environment),
        include_docs=include_docs,
        publish=publish,
        commit=commit,
    )


def load_answers(
    path: Path,
    git_info: GitInfo,
    cwd: Path,
    default_license: str = "MIT",
) -> LibraryInfo:
    """
    Build the answer record from a JSON file instead of prompting.

    Keys mirror LibraryInfo fields; "keywords" may be a list or a comma
    separated string. Missing optional values fall back to the same
    defaults the interactive flow offers.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is not a JSON object or lacks required answers.
    """
    if not path.exists():
        raise FileNotFoundError(f"Answers file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Answers file must contain a JSON object: {path}")

    raw_keywords = data.get("keywords", "")
    if isinstance(raw_keywords, list):
        raw_keywords = ",".join(str(k) for k in raw_keywords)
    keywords = parse_keywords(str(raw_keywords))

    repo_name = data.get("repo_name") or git_info.repo_name or cwd.name
    values = {
        "name": data.get("name") or repo_name,
        "description": str(data.get("description", "")).strip(),
        "author": data.get("author") or git_info.author,
        "email": data.get("email") or git_info.email,
        "user_name": data.get("user_name") or git_info.user_name,
        "repository": data.get("repository") or git_info.repository,
    }

    missing = [key for key, value in values.items() if not value]
    if not keywords:
        missing.append("keywords")
    if missing:
        raise ValueError(f"Answers file is missing required keys: {sorted(missing)}")

    homepage, bugs = github_urls(values["user_name"], repo_name)
    return LibraryInfo(
        **values,
        keywords=keywords,
        repo_name=repo_name,
        homepage=homepage,
        bugs=bugs,
        year=str(data.get("year") or _current_year()),
        license=data.get("license") or default_license,
        environment=Environment(data.get("environment", Environment.BOTH.value)),
        include_docs=parse_flag(data, "include_docs"),
        publish=parse_flag(data, "publish"),
        commit=parse_flag(data, "commit"),
    )
