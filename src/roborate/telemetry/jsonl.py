"""Structured JSONL records describing each computation run."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any
from uuid import uuid4

__all__ = ["RunLog", "run_record"]

SCHEMA_VERSION = "1.0"


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _encode(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    raise TypeError(f"Cannot encode {type(value).__name__} in a run record")


@dataclass(slots=True)
class RunLog:
    """JSONL file collecting one record per CLI invocation."""

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def append(self, record: Mapping[str, Any]) -> None:
        line = json.dumps(record, ensure_ascii=False, separators=(",", ":"), default=_encode)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")

    def records(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as handle:
            return [json.loads(line) for line in handle if line.strip()]


def run_record(
    *,
    command: str,
    status: str,
    shift: Mapping[str, Any] | None = None,
    value: Any = None,
    segments: int | None = None,
    config: Mapping[str, Any] | None = None,
    error: str | None = None,
) -> dict[str, Any]:
    """Build the telemetry record written for one CLI invocation."""
    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": uuid4().hex,
        "timestamp": _iso_now(),
        "command": command,
        "status": status,
        "shift": dict(shift) if shift else None,
        "value": value,
        "segments": segments,
        "config": dict(config) if config else None,
        "error": error,
    }
