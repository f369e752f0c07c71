# shadowcast/logging_utils.py
"""
structlog setup for hosts that want to see cast diagnostics.

Every cast logs a debug start/finish pair carrying ``duration_ms``,
``reported_count`` and ``columns``; failures are logged at error level. A
settings file may name the level under ``logging.level`` (see
:mod:`shadowcast.config`).
"""

import logging

import structlog
from structlog.stdlib import add_log_level, add_logger_name

log = structlog.get_logger(__name__)


def resolve_level(level: int | str) -> int:
    """Turn ``"debug"``, ``"WARNING"`` or a numeric level into a logging level."""
    if isinstance(level, bool):
        raise ValueError(f"Unknown log level: {level!r}")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(level: int | str = logging.INFO, *, colors: bool = True) -> int:
    """
    Route shadowcast's structlog events through stdlib logging at ``level``.

    Debug level shows the per-cast timing events; anything above keeps only
    warnings and cast failures. Returns the resolved numeric level.
    """
    numeric_level = resolve_level(level)
    logging.basicConfig(level=numeric_level, format="%(message)s")
    logging.getLogger("shadowcast").setLevel(numeric_level)

    renderer = structlog.dev.ConsoleRenderer(colors=colors)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_logger_name,
            add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    log.debug("Cast logging configured", level=logging.getLevelName(numeric_level))
    return numeric_level


__all__ = ["resolve_level", "setup_logging"]
