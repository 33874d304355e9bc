"""
Prompt Engine
=============

Three interactive prompt primitives rendered directly on the terminal:
  - ask_text     free text with default / required handling
  - ask_confirm  yes/no question
  - ask_select   arrow-key single choice (raw mode)

Usage:
    from prompter import ask_text, ask_confirm, ask_select
    name = ask_text(terminal, "Library name:", default="my-lib")
    env = ask_select(terminal, "Supported environments", {"node": "Node.js only"})

Each call renders its question, blocks until the user commits an answer,
then replaces the question with a one-line summary of the answer.
"""

import readchar

from terminal import (
    CYAN,
    CURSOR_UP_ONE,
    DIM,
    ERASE_DOWN,
    ERASE_LINE,
    ERASE_TO_LINE_END,
    GREEN,
    NC,
    RED,
    RawModeGuard,
    Terminal,
    cursor_up,
)

ENTER_KEYS = {readchar.key.ENTER, readchar.key.CR, readchar.key.LF}
NEGATIVE_ANSWERS = {"n", "no"}


class SetupAborted(RuntimeError):
    """The user cancelled an interactive prompt; the whole setup stops."""


def _base_query(prompt: str) -> str:
    return f"   • {prompt.removesuffix(':')}"


def _read_answer(terminal: Terminal) -> str:
    try:
        return terminal.read_line().strip()
    except EOFError as exc:
        raise SetupAborted("Input closed before the setup was completed") from exc


def ask_text(
    terminal: Terminal,
    prompt: str,
    default: str = "",
    hint: str = "",
    required: bool = False,
) -> str:
    """
    Ask for free text.

    Empty input resolves to *default*; with no default the question is
    asked again, flagged as required, until something is typed.
    """
    base = _base_query(prompt)
    hint_text = f" {DIM}({hint}){NC}" if hint else ""
    default_text = f" {DIM}({default}){NC}" if default else ""

    while True:
        required_text = f" {RED}(required){NC}" if required else ""
        terminal.write(f"{base}{hint_text}{default_text}{required_text}: ")
        answer = _read_answer(terminal)

        if answer or default:
            value = answer or default
            terminal.write(f"{CURSOR_UP_ONE}{ERASE_LINE}\r{base}: {GREEN}{value}{NC}\n")
            return value

        terminal.write(f"{CURSOR_UP_ONE}{ERASE_LINE}")
        required = True


def ask_confirm(
    terminal: Terminal,
    prompt: str,
    default: bool = True,
    hint: str = "",
) -> bool:
    """
    Ask a yes/no question.

    Only an explicit "n"/"no" (any case) answers False. *default* just picks
    which of [Y/n] / [y/N] is shown.
    """
    base = _base_query(prompt)
    hint_text = f" {DIM}({hint}){NC}" if hint else ""
    options = f"{DIM}[Y/n]{NC}" if default else f"{DIM}[y/N]{NC}"
    terminal.write(f"{base}{hint_text} {options} ")

    answer = _read_answer(terminal)
    result = answer.lower() not in NEGATIVE_ANSWERS
    terminal.write(
        f"{CURSOR_UP_ONE}{ERASE_LINE}\r{base} {GREEN}{'Yes' if result else 'No'}{NC}\n"
    )
    return result


def ask_select(
    terminal: Terminal,
    prompt: str,
    options: dict[str, str],
    default_key: str | None = None,
) -> str:
    """
    Let the user pick one of *options* (key -> label) with the arrow keys.

    Returns the key of the committed option. Ctrl+C raises SetupAborted
    after the terminal mode has been restored.
    """
    if not options:
        raise ValueError("ask_select needs at least one option")

    base = _base_query(prompt)
    keys = list(options.keys())
    labels = list(options.values())
    last = len(labels) - 1
    selected = keys.index(default_key) if default_key in keys else 0

    def render(first: bool = False) -> None:
        if not first:
            terminal.write(f"{cursor_up(len(labels) + 1)}\r")
        terminal.write(ERASE_DOWN)
        terminal.write(f"{base}\n")
        for index, label in enumerate(labels):
            indicator = ">" if index == selected else " "
            highlight = CYAN if index == selected else ""
            terminal.write(f"     {highlight}{indicator} {label}{NC}\n")
        terminal.write("\r")

    with RawModeGuard(terminal):
        render(first=True)
        while True:
            try:
                key = terminal.read_key()
            except KeyboardInterrupt:
                key = readchar.key.CTRL_C

            if key == readchar.key.CTRL_C:
                raise SetupAborted("User aborted setup")
            if key == "":
                raise SetupAborted("Input closed before the setup was completed")

            if (key == readchar.key.UP and selected == 0) or (
                key == readchar.key.DOWN and selected == last
            ):
                terminal.write(f"\r{ERASE_TO_LINE_END}")
                continue

            if key in ENTER_KEYS:
                terminal.write(f"{cursor_up(len(labels) + 1)}\r{ERASE_DOWN}")
                terminal.write(f"{base}: {GREEN}{labels[selected]}{NC}\n")
                return keys[selected]

            if key == readchar.key.UP:
                selected -= 1
                render()
            elif key == readchar.key.DOWN:
                selected += 1
                render()
            else:
                terminal.write(f"\r{ERASE_TO_LINE_END}")
