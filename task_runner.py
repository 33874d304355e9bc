"""Run one named setup task behind a spinner and report its outcome."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable

from run_logging import RunLogger
from spinner import Spinner
from terminal import NC, RED, Terminal

UnitOfWork = Callable[[], Any]


@dataclass(frozen=True)
class SetupTask:
    """A deferred unit of work plus the labels shown while/after it runs."""

    loading_label: str
    success_label: str
    work: UnitOfWork


async def _invoke(work: UnitOfWork) -> None:
    result = work()
    if inspect.isawaitable(result):
        await result


async def run_task(
    loading_label: str,
    success_label: str,
    work: UnitOfWork,
    *,
    terminal: Terminal,
    interval: float = 0.08,
    run_logger: RunLogger | None = None,
    spinner_factory: Callable[..., Spinner] = Spinner,
) -> bool:
    """
    Run *work* with a spinner labelled *loading_label*.

    Returns True on success. A failing task is reported (spinner fail line
    plus the error message) and returns False instead of raising, so the
    caller decides whether the remaining tasks still run.
    """
    spinner = spinner_factory(terminal, loading_label, interval=interval)
    spinner.start()
    if run_logger is not None:
        run_logger.log_task("started", loading_label)

    try:
        await _invoke(work)
    except Exception as exc:
        spinner.fail(f"{loading_label}... [ERROR]")
        terminal.write(f"\r   {RED}  {exc}{NC}\n")
        if run_logger is not None:
            run_logger.log_task("failed", loading_label, error=str(exc))
        return False
    except BaseException:
        spinner.cancel()
        raise

    spinner.stop(success_label)
    if run_logger is not None:
        run_logger.log_task("done", success_label)
    return True


async def run_setup_task(task: SetupTask, **kwargs: Any) -> bool:
    """run_task() for a SetupTask descriptor."""
    return await run_task(task.loading_label, task.success_label, task.work, **kwargs)
