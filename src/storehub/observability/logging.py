"""
storehub.observability.logging

structlog setup for the service.

Responsibilities:
- One JSON object per log line on stdout, stamped with service name and UTC time.
- Redact credential-bearing fields (passwords, hashes, tokens, emails) before
  anything is rendered.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any

import structlog

REDACTED = "[REDACTED]"

SENSITIVE_KEYS = frozenset(
    {
        "authorization",
        "email",
        "new_password",
        "password",
        "password_hash",
        "reset_token",
        "token",
    }
)


class _ServiceTag:
    def __init__(self, service_name: str) -> None:
        self._service_name = service_name

    def __call__(self, _: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", self._service_name)
        return event_dict


def _redact(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            k: REDACTED if k in SENSITIVE_KEYS else _redact(v) for k, v in value.items()
        }
    return value


def redact_sensitive(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Nested mappings (e.g. a logged request body) are redacted too.
    return _redact(event_dict)


def configure_logging(*, service_name: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.getLevelNamesMapping().get(level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _ServiceTag(service_name),
            redact_sensitive,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Auth code logs ids only. Redaction catches keys passed by mistake.
