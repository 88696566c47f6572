"""
Diagnostic side channel for SMS sends.

Each send is logged as JSON lines tagged with the service name and a
per-send correlation id. Credentials only enter a log event through
``mask_credential``.
"""

import logging
import sys
import time
from contextvars import ContextVar, Token

import structlog

# Bound by SmsDispatcher.send for the duration of one send
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

CREDENTIAL_VISIBLE_CHARS = 6
INVALID_CREDENTIAL_MARKER = "invalid_key"

# These loggers echo request URLs and headers at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """
    Route structlog events through stdlib logging as JSON on stdout.

    Args:
        service_name: Value of the ``service`` field on every event
        level: Minimum stdlib log level name; unknown names fall back to INFO
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=_send_processors(service_name),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def _send_processors(service_name: str) -> list:
    def tag_send(logger, method_name, event_dict):
        event_dict["service"] = service_name
        cid = correlation_id.get()
        if cid:
            event_dict["correlation_id"] = cid
        return event_dict

    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        tag_send,
        structlog.processors.JSONRenderer(),
    ]


def set_correlation_id(cid: str) -> Token[str]:
    """Bind ``cid`` to the current send; pass the token to ``reset_correlation_id``."""
    return correlation_id.set(cid)


def reset_correlation_id(token: Token[str]) -> None:
    correlation_id.reset(token)


def get_correlation_id() -> str:
    return correlation_id.get()


class Timer:
    """Wall-clock latency of a ``with`` block, read via ``duration_ms`` after exit."""

    def __init__(self) -> None:
        self._started = 0.0
        self._elapsed = 0.0

    def __enter__(self) -> "Timer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, *exc_info) -> None:
        self._elapsed = time.perf_counter() - self._started

    @property
    def duration_ms(self) -> float:
        return round(self._elapsed * 1000, 2)


def mask_credential(value: str | None, visible_chars: int = CREDENTIAL_VISIBLE_CHARS) -> str:
    """
    Mask a credential for logging.

    Only the first ``visible_chars`` characters survive. Values too short to
    mask without exposing them entirely are replaced with a fixed marker.
    """
    if not value or len(value) <= visible_chars:
        return INVALID_CREDENTIAL_MARKER
    return value[:visible_chars] + "..."
