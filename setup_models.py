"""Shared models for the template setup wizard."""

from dataclasses import dataclass, field
from enum import Enum


class Environment(str, Enum):
    """Runtime environments the library targets."""

    BOTH = "both"
    BROWSER = "browser"
    NODE = "node"


ENVIRONMENT_LABELS: dict[str, str] = {
    Environment.BOTH.value: "Node.js and browser",
    Environment.BROWSER.value: "Browser only",
    Environment.NODE.value: "Node.js only",
}


@dataclass(frozen=True)
class GitInfo:
    """Defaults discovered from the local git configuration."""

    author: str = ""
    email: str = ""
    repository: str = ""
    user_name: str = ""
    repo_name: str = ""


@dataclass(frozen=True)
class LibraryInfo:
    """Answers collected for one setup run; read-only once collected."""

    name: str
    description: str
    author: str
    email: str
    user_name: str
    repo_name: str
    repository: str
    homepage: str
    bugs: str
    year: str
    keywords: tuple[str, ...] = field(default_factory=tuple)
    license: str = "MIT"
    environment: Environment = Environment.BOTH
    include_docs: bool = True
    publish: bool = True
    commit: bool = True

    @property
    def author_field(self) -> str:
        """package.json "author" value: `Name <email>`."""
        return self.author + (f" <{self.email}>" if self.email else "")

    @property
    def docs_url(self) -> str:
        return f"https://{self.user_name}.github.io/{self.repo_name}"
