"""Structured logging setup for unitext."""
from __future__ import annotations

import logging
import sys
from typing import List, Optional

import structlog

RENDERERS = ("json", "console")
_PACKAGE_PREFIX = "unitext."


def configure_logging(level: Optional[str] = None, *, renderer: str = "json") -> None:
    """Route unitext's structlog events to stderr.

    Command output on stdout stays machine readable. With the ``json``
    renderer each record is one object carrying ``ts``, ``level``, ``msg`` and
    ``component`` (the emitting module relative to the package) plus the
    event's own fields; ``console`` prints the same fields for people.
    Unknown levels fall back to ``INFO``.
    """

    threshold = _threshold(level)
    logging.basicConfig(
        level=threshold,
        handlers=[logging.StreamHandler(sys.stderr)],
        format="%(message)s",
        force=True,
    )

    processors: List[structlog.types.Processor] = [
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
        structlog.stdlib.add_log_level,
        _add_component,
    ]
    if renderer == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors += [
            _event_as_msg,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        cache_logger_on_first_use=True,
    )


def _threshold(level: Optional[str]) -> int:
    value = logging.getLevelName((level or "INFO").upper())
    return value if isinstance(value, int) else logging.INFO


def _add_component(
    logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    if event_dict.get("component") is None:
        name = getattr(logger, "name", None) or "unitext"
        event_dict["component"] = name[len(_PACKAGE_PREFIX):] if name.startswith(_PACKAGE_PREFIX) else name
    return event_dict


def _event_as_msg(
    _logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    if "msg" not in event_dict and "event" in event_dict:
        event_dict["msg"] = event_dict.pop("event")
    return event_dict


__all__ = ["RENDERERS", "configure_logging"]
