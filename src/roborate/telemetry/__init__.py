"""Telemetry helpers."""

from .jsonl import RunLog, run_record

__all__ = ["RunLog", "run_record"]
