"""Outbound SMS dispatch through the Africa's Talking gateway."""

from .application.services import SmsDispatcher
from .config import Settings, get_settings, load_settings
from .domain.errors import (
    AuthenticationError,
    ConfigurationError,
    DispatchError,
    ErrorKind,
    InputValidationError,
    InvalidResponseError,
    InvalidSenderIdError,
    NetworkError,
    ProviderRejectedError,
    RecipientFailedError,
)
from .domain.value_objects import SendResult

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "DispatchError",
    "ErrorKind",
    "InputValidationError",
    "InvalidResponseError",
    "InvalidSenderIdError",
    "NetworkError",
    "ProviderRejectedError",
    "RecipientFailedError",
    "SendResult",
    "Settings",
    "SmsDispatcher",
    "get_settings",
    "load_settings",
]
