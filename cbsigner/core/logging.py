"""Logging for the signing path.

Records emitted while a key is in use are tagged with which key it was:
``key_role`` (consensus or proxy) and the abbreviated ``pubkey``, plus the
``delegator`` while a proxy is being minted. ``SigningManager`` opens a
``signing_scope`` around each request; a commit module can open an outer
one with ``caller`` so its requests stay distinguishable in shared logs.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields, replace
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class SigningScope:
    key_role: str | None = None
    pubkey: str | None = None
    delegator: str | None = None
    caller: str | None = None

    def tags(self) -> dict[str, str]:
        return {
            name: getattr(self, name) for name in SCOPE_FIELDS if getattr(self, name) is not None
        }


SCOPE_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(SigningScope))

_current_scope: ContextVar[SigningScope] = ContextVar(
    "cbsigner_signing_scope",
    default=SigningScope(),
)


def current_scope() -> SigningScope:
    return _current_scope.get()


@contextmanager
def signing_scope(**tags: str | None) -> Iterator[SigningScope]:
    """Tag log records in this context; ``None`` keeps the enclosing value."""
    unknown = set(tags) - set(SCOPE_FIELDS)
    if unknown:
        raise TypeError(f"unknown signing scope tags: {sorted(unknown)}")

    scope = replace(
        _current_scope.get(),
        **{name: value for name, value in tags.items() if value is not None},
    )
    token = _current_scope.set(scope)
    try:
        yield scope
    finally:
        _current_scope.reset(token)


class SigningScopeFilter(logging.Filter):
    """Copy the active scope onto each record, plus a rendered ``scope`` string."""

    def filter(self, record: logging.LogRecord) -> bool:
        scope = _current_scope.get()
        for name in SCOPE_FIELDS:
            setattr(record, name, getattr(scope, name))
        record.scope = " ".join(f"{k}={v}" for k, v in scope.tags().items()) or "-"
        return True


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in SCOPE_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        if record.exc_info is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(scope)s] %(message)s"


def setup_logging(level: int | str = logging.INFO, json_output: bool = False) -> None:
    """Route root logging to stdout with signing-scope tags attached."""
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_output else logging.Formatter(_TEXT_FORMAT))
    handler.addFilter(SigningScopeFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)


__all__ = [
    "SCOPE_FIELDS",
    "SigningScope",
    "SigningScopeFilter",
    "current_scope",
    "setup_logging",
    "signing_scope",
]
