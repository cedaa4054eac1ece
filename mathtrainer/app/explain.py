from __future__ import annotations

"""Minimal tracing helpers (Explain Mode).

Enable with the ``--explain`` CLI flag to get one line per milestone:
generation, grading, progress updates, storage fallbacks. Lines go to
stdout unless a sink is given.
"""

import json
from typing import Any, Callable, Dict, Optional

_ENABLED = False
_SINK: Callable[[str], None] = print


def enable(flag: bool = True, sink: Optional[Callable[[str], None]] = None) -> None:
    global _ENABLED, _SINK
    _ENABLED = bool(flag)
    _SINK = sink or print


def format_event(event: str, payload: Dict[str, Any] | None = None) -> str:
    try:
        body = json.dumps(payload or {}, separators=(",", ":"), default=str, sort_keys=True)
    except (TypeError, ValueError):
        return f"[EXPLAIN] {event}"
    return f"[EXPLAIN] {event} :: {body}"


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    _SINK(format_event(event, payload))
