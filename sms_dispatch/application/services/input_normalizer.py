"""
Input normalization for outbound SMS.

Validates the untrusted destination number and message text, canonicalizes
the number and resolves which sender id the gateway will see.
"""

import re

import structlog

from ...config import SANDBOX_USERNAME
from ...domain.errors import InputValidationError
from ...domain.value_objects import NormalizedRequest

logger = structlog.get_logger()

DEFAULT_SENDER = "SMS"

_NON_DIGITS = re.compile(r"[^0-9]")


def canonicalize_phone_number(raw: str) -> str:
    """
    Strip formatting from a phone number.

    A leading ``+`` is kept; every other non-digit character is dropped.
    Applying this to an already canonical number returns it unchanged.
    """
    value = raw.strip()
    if value.startswith("+"):
        return "+" + _NON_DIGITS.sub("", value[1:])
    return _NON_DIGITS.sub("", value)


def _is_utf8_encodable(value: str) -> bool:
    # Lone surrogates survive str handling but fail form encoding.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class InputNormalizer:
    """Turns raw send input into a NormalizedRequest."""

    def __init__(self, username: str, sender_id: str | None = None) -> None:
        self._sandbox = username == SANDBOX_USERNAME
        self._sender_id = sender_id

    @property
    def sender(self) -> str:
        """Sender id every request from this normalizer carries."""
        # The sandbox only delivers messages sent from "sandbox".
        if self._sandbox:
            return SANDBOX_USERNAME
        return self._sender_id or DEFAULT_SENDER

    def normalize(self, to: object, message: object) -> NormalizedRequest:
        """
        Validate and canonicalize a send request.

        Args:
            to: Destination phone number as typed by the user
            message: Message body

        Returns:
            NormalizedRequest with canonical number and resolved sender

        Raises:
            InputValidationError: If the number or message is unusable
        """
        if not isinstance(to, str) or not to:
            raise InputValidationError("Recipient phone number is required and must be a string")
        if not isinstance(message, str) or not message:
            raise InputValidationError("Message is required and must be a string")
        if not _is_utf8_encodable(to):
            raise InputValidationError("Recipient phone number contains characters that cannot be sent")
        if not _is_utf8_encodable(message):
            raise InputValidationError("Message contains characters that cannot be sent")

        number = canonicalize_phone_number(to)
        if not number or number == "+":
            raise InputValidationError("Invalid phone number format")

        logger.info("Sanitized phone number", raw=to, sanitized=number)

        sender = self.sender
        if self._sandbox:
            logger.info("Using sandbox mode", sender=sender)
        else:
            logger.info("Using production mode", sender=sender)

        return NormalizedRequest(to=number, message=message, sender=sender)
