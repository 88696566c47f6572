"""
Classification of gateway outcomes.

Everything that knows the shape of an Africa's Talking response, or which
HTTP failures mean what, lives in this module. A raw response or a raised
httpx error goes in; a SendResult or a DispatchError comes out.
"""

from collections.abc import Mapping
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ...domain.errors import (
    AuthenticationError,
    DispatchError,
    InvalidResponseError,
    InvalidSenderIdError,
    NetworkError,
    ProviderRejectedError,
    RecipientFailedError,
)
from ...domain.value_objects import SendResult

logger = structlog.get_logger()

ENVELOPE_KEY = "SMSMessageData"
SUCCESS_STATUS = "Success"
INVALID_SENDER_ID = "InvalidSenderId"
NO_RECIPIENTS_MESSAGE = "No recipients processed"

AUTH_STATUS_CODES = frozenset({401, 403})

AUTH_HINT = (
    "Authentication error: check AT_API_KEY and AT_USERNAME "
    "(sandbox key required for sandbox mode)"
)
NETWORK_HINT = "Network error: could not reach Africa's Talking API"
INVALID_SENDER_ID_HINT = (
    'InvalidSenderId: are you using sandbox credentials AND using from: "sandbox"?'
)


class RecipientEntry(BaseModel):
    """Per-destination outcome reported by the gateway."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    number: str = ""
    status: str = ""
    cost: str = ""
    message_id: str = Field("", alias="messageId")
    status_code: str | None = Field(None, alias="statusCode")

    @field_validator("number", "status", "cost", "message_id", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class MessageData(BaseModel):
    """The ``SMSMessageData`` envelope."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    message: str = Field("", alias="Message")
    recipients: list[RecipientEntry] = Field(default_factory=list, alias="Recipients")

    @field_validator("message", mode="before")
    @classmethod
    def null_message(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("recipients", mode="before")
    @classmethod
    def null_recipients(cls, v: Any) -> Any:
        return [] if v is None else v


class ResponseClassifier:
    """Maps gateway responses and transport errors onto the error taxonomy."""

    def classify(self, outcome: Any) -> SendResult | DispatchError:
        """
        Classify the outcome of one gateway call.

        Args:
            outcome: The raw response body, or the httpx error the call raised

        Returns:
            SendResult on confirmed delivery, otherwise the matching DispatchError
        """
        if isinstance(outcome, BaseException):
            return self._classify_error(outcome)
        return self._classify_response(outcome)

    def _classify_error(self, error: BaseException) -> DispatchError:
        if isinstance(error, httpx.HTTPStatusError):
            status = error.response.status_code
            if status in AUTH_STATUS_CODES:
                return AuthenticationError(AUTH_HINT)
            if status >= 500:
                return NetworkError(f"{NETWORK_HINT} (HTTP {status})")
            body = error.response.text.strip()
            return ProviderRejectedError(body or f"Gateway rejected the request (HTTP {status})")

        if isinstance(error, httpx.TransportError):
            return NetworkError(f"{NETWORK_HINT} ({type(error).__name__})")

        if isinstance(error, httpx.HTTPError):
            return InvalidResponseError(f"Unreadable gateway response: {error}")

        raise TypeError(f"Cannot classify {type(error).__name__}") from error

    def _classify_response(self, raw: Any) -> SendResult | DispatchError:
        if not isinstance(raw, Mapping) or not isinstance(raw.get(ENVELOPE_KEY), Mapping):
            return InvalidResponseError("Invalid API response structure")

        try:
            data = MessageData.model_validate(raw[ENVELOPE_KEY])
        except PydanticValidationError as e:
            return InvalidResponseError(
                f"Invalid API response structure ({e.error_count()} invalid fields)"
            )

        # Reported at envelope level even when recipients is also empty.
        if data.message == INVALID_SENDER_ID:
            return InvalidSenderIdError(INVALID_SENDER_ID_HINT)

        if not data.recipients:
            if INVALID_SENDER_ID in data.message:
                return InvalidSenderIdError(INVALID_SENDER_ID_HINT)
            return ProviderRejectedError(data.message or NO_RECIPIENTS_MESSAGE)

        recipient = data.recipients[0]
        if recipient.status != SUCCESS_STATUS:
            logger.error(
                "SMS failed for recipient",
                number=recipient.number,
                status=recipient.status,
                status_code=recipient.status_code,
            )
            return RecipientFailedError(recipient.status or "Unknown status")

        logger.info(
            "SMS sent successfully",
            number=recipient.number,
            cost=recipient.cost,
            message_id=recipient.message_id,
        )
        return SendResult(
            recipient_number=recipient.number,
            message_id=recipient.message_id,
            cost=recipient.cost,
            status=recipient.status,
        )
