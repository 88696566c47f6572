"""
Dispatch error taxonomy.

Every failure of a send is reported as exactly one DispatchError subclass.
Callers may catch the base class and branch on ``kind``, or catch the
specific subclasses.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classified failure kinds."""

    VALIDATION = "ValidationError"
    NETWORK = "Network"
    AUTH = "Auth"
    INVALID_RESPONSE = "InvalidResponse"
    INVALID_SENDER_ID = "InvalidSenderId"
    PROVIDER_REJECTED = "ProviderRejected"
    RECIPIENT_FAILED = "RecipientFailed"


class DispatchError(Exception):
    """Base class for classified send failures."""

    kind: ErrorKind

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.detail}"


class InputValidationError(DispatchError):
    """Caller supplied a malformed or empty number or message."""

    kind = ErrorKind.VALIDATION


class NetworkError(DispatchError):
    """The gateway could not be reached."""

    kind = ErrorKind.NETWORK


class AuthenticationError(DispatchError):
    """The gateway rejected the configured credentials."""

    kind = ErrorKind.AUTH


class InvalidResponseError(DispatchError):
    """The gateway answered with an unrecognized shape."""

    kind = ErrorKind.INVALID_RESPONSE


class InvalidSenderIdError(DispatchError):
    """The gateway rejected the sender id."""

    kind = ErrorKind.INVALID_SENDER_ID


class ProviderRejectedError(DispatchError):
    """The gateway processed no recipients."""

    kind = ErrorKind.PROVIDER_REJECTED


class RecipientFailedError(DispatchError):
    """The gateway accepted the request but the recipient status is not Success."""

    kind = ErrorKind.RECIPIENT_FAILED


class ConfigurationError(Exception):
    """Required configuration is missing. Fatal at startup."""
