from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict

import structlog

_REDACTED_KEYS = ("token", "secret", "password", "authorization")


def _stdout_logger(*args: Any) -> structlog.PrintLogger:
    return structlog.PrintLogger(sys.stdout)


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    return structlog.PrintLogger(sys.stderr)


def _redact_credentials(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Processor that masks credential-looking values before rendering."""
    for key in list(event_dict.keys()):
        lower_key = key.lower()
        if lower_key.endswith("_id"):
            continue
        if any(marker in lower_key for marker in _REDACTED_KEYS):
            value = event_dict[key]
            if isinstance(value, str) and len(value) > 8:
                event_dict[key] = value[:4] + "***"
            elif value is not None:
                event_dict[key] = "***"
    return event_dict


def configure_logging(
    log_level: str | None = None,
    json_output: bool | None = None,
    use_stderr: bool = False,
) -> None:
    """Configure structlog for token_lifecycle processes.

    Args:
        log_level: Logging level name; defaults to LOG_LEVEL or INFO.
        json_output: JSON lines when True, console output otherwise;
            defaults to LOG_JSON or True.
        use_stderr: Render to stderr instead of stdout (CLI output owns
            stdout).
    """
    level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    if json_output is None:
        json_output = os.getenv("LOG_JSON", "true").lower() in {"1", "true", "yes", "on"}

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _redact_credentials,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level, logging.INFO)
        ),
        context_class=dict,
        logger_factory=_stderr_logger if use_stderr else _stdout_logger,
        # Streams are looked up per call so redirected std streams are honoured.
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Get a structlog logger bound to a component name."""
    return structlog.get_logger(name)
