"""
Setup Run Log
=============

Optional JSONL history of one setup run, written next to the template
(`<template>/.setup-logs/<stamp>_<template>_<run_id>.jsonl`). Every line is
one event:

    {"ts": ..., "run_id": ..., "phase": "setup" | "answers" | "task",
     "event_type": ..., "template_dir": ..., "message": ..., "meta": {...}}

Logging never interferes with the setup itself: a log that cannot be
created is disabled, and the first failed write disables the rest.
"""

from __future__ import annotations

import json
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from setup_models import LibraryInfo

TASK_OUTCOMES = ("started", "done", "failed")


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def _utc_stamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _sanitize_label(value: str) -> str:
    lowered = value.strip().lower()
    cleaned = re.sub(r"[^a-z0-9._-]+", "-", lowered).strip("-")
    return cleaned or "template"


@dataclass
class RunLogger:
    """Append-only JSONL logger for one setup run."""

    enabled: bool
    run_id: str
    template_dir: str
    log_file: Path | None = None
    _write_failed: bool = False

    @classmethod
    def create(
        cls,
        *,
        enabled: bool,
        base_dir: Path,
        template_dir: Path,
    ) -> "RunLogger":
        run_id = uuid.uuid4().hex[:8]
        disabled = cls(enabled=False, run_id=run_id, template_dir=str(template_dir))
        if not enabled:
            return disabled

        try:
            base_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            return disabled

        filename = f"{_utc_stamp()}_{_sanitize_label(template_dir.name)}_{run_id}.jsonl"
        return cls(
            enabled=True,
            run_id=run_id,
            template_dir=str(template_dir),
            log_file=base_dir / filename,
        )

    def log_event(
        self,
        *,
        phase: str,
        event_type: str,
        message: str,
        meta: dict[str, Any] | None = None,
    ) -> None:
        if not self.enabled or self.log_file is None or self._write_failed:
            return

        payload: dict[str, Any] = {
            "ts": _utc_iso(),
            "run_id": self.run_id,
            "phase": phase,
            "event_type": event_type,
            "template_dir": self.template_dir,
            "message": message,
        }
        if meta:
            payload["meta"] = meta

        try:
            with self.log_file.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(payload, ensure_ascii=False) + "\n")
        except OSError:
            self._write_failed = True

    def log_task(self, outcome: str, label: str, **meta: Any) -> None:
        """Record one task transition (started / done / failed)."""
        if outcome not in TASK_OUTCOMES:
            raise ValueError(f"Unknown task outcome: {outcome}")
        self.log_event(phase="task", event_type=outcome, message=label, meta=meta or None)

    def log_answers(self, info: LibraryInfo) -> None:
        """Record the choices that shape the task list (no contact details)."""
        self.log_event(
            phase="answers",
            event_type="collected",
            message=info.name,
            meta={
                "environment": info.environment.value,
                "include_docs": info.include_docs,
                "publish": info.publish,
                "commit": info.commit,
                "keywords": list(info.keywords),
            },
        )
