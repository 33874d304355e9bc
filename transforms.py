"""
Template Transformations
========================

Each function applies one named edit to the checked-out library template
rooted at *root* and raises RuntimeError("Failed to <action>: <cause>")
when anything goes wrong, so the task runner can report it.

  update_package_json     name, description, keywords, author, URLs
  update_license          copyright year and holder
  update_docs_config      VitePress base path, title, description, link
  remove_docs             drop VitePress docs, deploy workflow and scripts
  update_playground       point both playgrounds at the new package name
  write_readme            minimal README generated from package.json
  remove_browser_support  keep only the Node.js playground/tests/config
  remove_node_support     keep only the browser playground/tests/config
  remove_setup_script     delete the wizard entry script
"""

from __future__ import annotations

import json
import re
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from setup_models import LibraryInfo

PACKAGE_JSON = "package.json"
LICENSE_FILE = "LICENSE"
README_FILE = "README.md"
DOCS_DIR = "docs"
DOCS_CONFIG = "docs/.vitepress/config.ts"
DEPLOY_WORKFLOW = ".github/workflows/deploy.yml"
TSCONFIG = "tsconfig.json"
ESLINT_CONFIG = "eslint.config.js"
VITEST_CONFIG = "vitest.config.ts"
TSUP_CONFIG = "tsup.config.ts"

DOCS_SCRIPTS = ("docs:dev", "docs:build", "docs:preview")
NODE_TSCONFIG_BASE = "personal-style-guide/typescript/node"
VITEST_WORKSPACE_RE = re.compile(r"workspace: \[\s*\{[\s\S]*?\}\s*\],")
REPO_PATH_RE = re.compile(r"github\.com[/:](.*?/)(.*?)(?:\.git)?$")


@contextmanager
def _failure(action: str) -> Iterator[None]:
    try:
        yield
    except (OSError, ValueError, KeyError, TypeError, IndexError, AttributeError) as exc:
        raise RuntimeError(f"Failed to {action}: {exc}") from exc


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def _edit_text(path: Path, *substitutions: tuple[str | re.Pattern[str], str, int]) -> None:
    """Apply (pattern, replacement, count) regex substitutions in place."""
    content = path.read_text(encoding="utf-8")
    for pattern, replacement, count in substitutions:
        content = re.sub(pattern, lambda _m, r=replacement: r, content, count=count)
    path.write_text(content, encoding="utf-8")


def _git_url(repository: str) -> str:
    return repository if repository.startswith("git+") else f"git+{repository}"


def update_package_json(root: Path, info: LibraryInfo) -> None:
    with _failure("update package.json"):
        path = root / PACKAGE_JSON
        package = _read_json(path)

        package["name"] = info.name
        package["description"] = info.description
        package["keywords"] = list(info.keywords)
        package["author"] = info.author_field
        package["homepage"] = info.homepage

        if isinstance(package.get("repository"), dict):
            package["repository"]["url"] = _git_url(info.repository)
        else:
            package["repository"] = {"type": "git", "url": _git_url(info.repository)}

        package["bugs"] = {"url": info.bugs}
        _write_json(path, package)


def update_license(root: Path, info: LibraryInfo) -> None:
    with _failure("update LICENSE"):
        _edit_text(
            root / LICENSE_FILE,
            (
                re.compile(r"^Copyright \(c\) \d+ .*$", re.MULTILINE),
                f"Copyright (c) {info.year} {info.author}",
                1,
            ),
        )


def docs_base_path(repository: str) -> str:
    """VitePress base path (`/<repo>/`) for a GitHub-hosted docs site."""
    match = REPO_PATH_RE.search(repository)
    if match and match.group(2):
        return f"/{match.group(2)}/"
    return "/"


def update_docs_config(root: Path, info: LibraryInfo) -> None:
    with _failure("update VitePress config"):
        substitutions = [
            (r'base: ".*?"', f'base: "{docs_base_path(info.repository)}"', 1),
            (r'title: ".*?"', f'title: "{info.name}"', 1),
            (r'description: ".*?"', f'description: "{info.description}"', 1),
        ]
        if info.homepage:
            repo_url = re.sub(r"#.*$", "", info.homepage)
            substitutions.append((r'link: "https://github\.com/.*?"', f'link: "{repo_url}"', 1))
        _edit_text(root / DOCS_CONFIG, *substitutions)


def remove_docs(root: Path) -> None:
    with _failure("remove VitePress"):
        shutil.rmtree(root / DOCS_DIR, ignore_errors=True)
        (root / DEPLOY_WORKFLOW).unlink(missing_ok=True)

        path = root / PACKAGE_JSON
        package = _read_json(path)
        scripts = package.get("scripts", {})
        for script in DOCS_SCRIPTS:
            scripts.pop(script, None)
        package.get("devDependencies", {}).pop("vitepress", None)
        _write_json(path, package)


def _retarget_package(package_path: Path, name: str) -> str:
    """Make *name* the playground's only dependency; return the old name."""
    package = _read_json(package_path)
    dependencies = package.get("dependencies") or {}
    if not dependencies:
        raise ValueError(f"{package_path} has no dependencies")
    old_name = next(iter(dependencies))
    package["dependencies"] = {name: "*"}
    _write_json(package_path, package)
    return old_name


def _replace_literal(path: Path, old: str, new: str) -> None:
    content = path.read_text(encoding="utf-8")
    path.write_text(content.replace(old, new), encoding="utf-8")


def update_playground_terminal(root: Path, info: LibraryInfo) -> None:
    with _failure("update playground"):
        playground = root / "playground" / "terminal"
        old_name = _retarget_package(playground / PACKAGE_JSON, info.name)

        _replace_literal(playground / "src" / "index.ts", f'from "{old_name}"', f'from "{info.name}"')

        tsconfig_path = playground / TSCONFIG
        tsconfig = _read_json(tsconfig_path)
        old_paths = tsconfig["compilerOptions"]["paths"][old_name]
        tsconfig["compilerOptions"]["paths"] = {info.name: old_paths}
        _write_json(tsconfig_path, tsconfig)


def update_playground_browser(root: Path, info: LibraryInfo) -> None:
    with _failure("update browser playground"):
        playground = root / "playground" / "browser"
        old_name = _retarget_package(playground / PACKAGE_JSON, info.name)
        for relative in ("vite.config.js", "src/main.js"):
            _replace_literal(playground / relative, f'"{old_name}"', f'"{info.name}"')


def update_playground(root: Path, info: LibraryInfo) -> None:
    update_playground_terminal(root, info)
    update_playground_browser(root, info)


def render_readme(info: LibraryInfo, name: str, description: str, license_name: str) -> str:
    dev_lines = [
        "- `npm run dev`: Start development mode with auto-rebuild",
        "- `npm run playground`: Start the playground",
        "- `npm test`: Run tests",
    ]
    docs_section = ""
    if info.include_docs:
        dev_lines.append("- `npm run docs:dev`: Preview documentation")
        docs_section = f"## Documentation\n\n- [VitePress Documentation]({info.docs_url})\n\n"

    return (
        f"# {name}\n\n"
        f"{description}\n\n"
        "## Installation\n\n"
        f"```bash\nnpm install {name}\n```\n\n"
        "## Usage\n\n"
        f'```typescript\nimport {{ add }} from "{name}";\n\nconsole.log(add(1, 2)); // 3\n```\n\n'
        "## Development\n\n"
        + "\n".join(dev_lines)
        + "\n\n"
        + docs_section
        + "## License\n\n"
        f"[{license_name}](./LICENSE)\n"
    )


def write_readme(root: Path, info: LibraryInfo) -> None:
    with _failure("clean README.md"):
        package = _read_json(root / PACKAGE_JSON)
        content = render_readme(
            info,
            name=package.get("name", info.name),
            description=package.get("description", info.description),
            license_name=package.get("license", info.license),
        )
        (root / README_FILE).write_text(content, encoding="utf-8")


def _promote(root: Path, parent: str, sources: list[str]) -> None:
    """Replace root/<parent> with the merged contents of its *sources* subdirs."""
    parent_dir = root / parent
    source_dirs = [parent_dir / source for source in sources]
    for source_dir in source_dirs:
        if not source_dir.is_dir():
            raise FileNotFoundError(f"Directory not found: {source_dir}")

    staging = root / f"{parent}_temp"
    staging.mkdir(parents=True, exist_ok=True)
    for source_dir in source_dirs:
        shutil.copytree(source_dir, staging, dirs_exist_ok=True)
    shutil.rmtree(parent_dir)
    staging.rename(parent_dir)


def _flatten_playground_paths(playground: Path) -> None:
    """The promoted playground sits one level higher: ../../ becomes ../."""
    for name in (TSCONFIG, "vite.config.js"):
        path = playground / name
        if path.exists():
            _replace_literal(path, '"../../', '"../')


def _single_playground_scripts(root: Path, keep: str, drop_dev_dependency: str | None) -> None:
    path = root / PACKAGE_JSON
    package = _read_json(path)
    scripts = package.setdefault("scripts", {})

    package["workspaces"] = ["playground"]
    kept_script = scripts.get(f"play:{keep}")
    if kept_script:
        scripts["playground"] = kept_script.replace(
            f"--workspace=playground/{keep}", "--workspace=playground"
        )
    scripts.pop("play:browser", None)
    scripts.pop("play:terminal", None)
    if drop_dev_dependency:
        package.get("devDependencies", {}).pop(drop_dev_dependency, None)
    _write_json(path, package)


def _strip_readme_section(root: Path, heading: str, code_marker: str) -> None:
    path = root / README_FILE
    if not path.exists():
        return
    _edit_text(
        path,
        (rf"## {heading}[\s\S]*?(?=##|$)", "", 1),
        (rf"```javascript\s*// {code_marker}[\s\S]*?```", "", 0),
    )


def remove_browser_support(root: Path) -> None:
    with _failure("remove browser support"):
        _promote(root, "playground", ["terminal"])
        _flatten_playground_paths(root / "playground")
        _promote(root, "test", ["core", "terminal"])

        tsconfig_path = root / TSCONFIG
        tsconfig = _read_json(tsconfig_path)
        tsconfig["extends"] = NODE_TSCONFIG_BASE
        _write_json(tsconfig_path, tsconfig)

        _edit_text(
            root / ESLINT_CONFIG,
            (r"import eslintBrowser from", "import eslintNode from", 1),
            (r"\[\.\.\.eslintBrowser\]", "[...eslintNode]", 1),
        )
        _edit_text(
            root / VITEST_CONFIG,
            (VITEST_WORKSPACE_RE, "", 1),
            (r'environment: ".*?"', 'environment: "node"', 1),
        )
        _edit_text(root / TSUP_CONFIG, (r'platform: "neutral"', 'platform: "node"', 1))

        _single_playground_scripts(root, keep="terminal", drop_dev_dependency="jsdom")
        _strip_readme_section(root, "Browser Support", "Browser environment")


def remove_node_support(root: Path) -> None:
    with _failure("remove node support"):
        _promote(root, "playground", ["browser"])
        _flatten_playground_paths(root / "playground")
        _promote(root, "test", ["browser"])

        _edit_text(root / VITEST_CONFIG, (VITEST_WORKSPACE_RE, "", 1))
        _edit_text(root / TSUP_CONFIG, (r'platform: "neutral"', 'platform: "browser"', 1))

        _single_playground_scripts(root, keep="browser", drop_dev_dependency=None)
        _strip_readme_section(root, "Node Support", "Node environment")


def remove_setup_script(script_path: Path) -> None:
    try:
        script_path.unlink()
    except OSError as exc:
        raise RuntimeError(
            f"Could not remove setup script: {exc}. Please delete {script_path} manually."
        ) from exc
