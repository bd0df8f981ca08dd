"""JSON-line logging on top of loguru."""

from __future__ import annotations

import json
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import IO, Any, Iterator

from loguru import logger

# Fields the pipeline binds; each record carries all of them, null when unset.
RECORD_FIELDS = ("provider", "component", "error_code", "reason")

_CONTEXT_VAR: ContextVar[dict[str, Any]] = ContextVar("indexfeed_log_context", default={})


def _patch_record(record: dict[str, Any]) -> None:
    extra = record["extra"]
    for key, value in _CONTEXT_VAR.get().items():
        extra.setdefault(key, value)


def _format_line(record: dict[str, Any]) -> str:
    extra = record["extra"]
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
    }
    payload.update({key: extra.get(key) for key in RECORD_FIELDS})
    if record["exception"] is not None:
        payload["exception"] = str(record["exception"])
    return json.dumps(payload, default=str)


class _StreamJsonSink:
    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def __call__(self, message: Any) -> None:
        self._stream.write(_format_line(message.record) + "\n")
        self._stream.flush()


class _FileJsonSink:
    """Appends one JSON document per record to ``path``."""

    def __init__(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._path = path

    def __call__(self, message: Any) -> None:
        with open(self._path, "a", encoding="utf-8") as file:
            file.write(_format_line(message.record) + "\n")


def configure_logging(level: str = "INFO", stream: IO[str] | None = None) -> None:
    """Replace every loguru sink with a single JSON sink on ``stream`` (stderr by default)."""

    logger.configure(
        handlers=[{"sink": _StreamJsonSink(stream or sys.stderr), "level": level.upper()}],
        patcher=_patch_record,
    )


def add_file_sink(path: str, level: str = "INFO") -> int:
    """Persist records to ``path`` alongside the configured sinks."""

    return logger.add(_FileJsonSink(path), level=level.upper())


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Stamp ``fields`` onto every record logged inside the block.

    Values bound directly on the logger take precedence.
    """

    token = _CONTEXT_VAR.set({**_CONTEXT_VAR.get(), **fields})
    try:
        yield
    finally:
        _CONTEXT_VAR.reset(token)


__all__ = ["RECORD_FIELDS", "add_file_sink", "configure_logging", "log_context", "logger"]
