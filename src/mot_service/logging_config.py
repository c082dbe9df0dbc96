from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from typing import Any

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

DISTRIBUTION_NAME = "mot-history"


def get_correlation_id() -> str:
    cid = correlation_id.get()
    if not cid:
        cid = uuid.uuid4().hex[:12]
        correlation_id.set(cid)
    return cid


def new_request_id() -> str:
    return uuid.uuid4().hex


@lru_cache(maxsize=1)
def get_app_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "Unknown"


def lookup_context(
    request_id: str,
    registration_number: str,
    app_version: str | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """Build the ``extra`` mapping for a log call made during one MOT lookup."""
    data: dict[str, Any] = {
        "request_id": request_id,
        "registration_number": registration_number,
        "app_version": app_version or get_app_version(),
    }
    data.update(fields)
    return {"extra_data": data}


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = getattr(record, "extra_data", None)
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": correlation_id.get(""),
        }
        if not entry["correlation_id"] and isinstance(data, dict):
            entry["correlation_id"] = data.get("request_id", "")
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        if data is not None:
            entry["data"] = data
        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
        ))
    root.addHandler(handler)
