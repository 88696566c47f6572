"""
Outbound port for SMS delivery.

The application layer depends on this interface; infrastructure adapters
implement it for a concrete messaging provider.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..value_objects import NormalizedRequest


class SmsGateway(ABC):
    """
    Outbound port for sending one SMS through a provider.

    Implementations perform a single network round trip and return the
    provider's raw response. Transport and authentication errors are raised
    as-is; interpreting them is the caller's job.
    """

    @abstractmethod
    async def dispatch(self, request: NormalizedRequest) -> Any:
        """
        Send a normalized request to the provider.

        Args:
            request: Canonical recipient, message text and sender id

        Returns:
            The provider response body, decoded from JSON when possible
        """
        ...
