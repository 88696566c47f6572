"""
Application service for outbound SMS.

Composes the normalizer, the gateway port and the response classifier into
the single ``send`` operation. Every failure leaves as a DispatchError.
"""

from uuid import uuid4

import httpx
import structlog

from ...config import Settings
from ...domain.errors import DispatchError, InputValidationError
from ...domain.ports import SmsGateway
from ...domain.value_objects import SendResult
from ...infrastructure.adapters import AfricasTalkingGateway
from ...infrastructure.logging import Timer, reset_correlation_id, set_correlation_id
from .input_normalizer import InputNormalizer
from .response_classifier import ResponseClassifier

logger = structlog.get_logger()


class SmsDispatcher:
    """
    Sends one SMS per call and reports a single outcome.

    Holds no state besides its collaborators, so one instance may serve
    concurrent callers.
    """

    def __init__(
        self,
        gateway: SmsGateway,
        normalizer: InputNormalizer,
        classifier: ResponseClassifier | None = None,
    ) -> None:
        self._gateway = gateway
        self._normalizer = normalizer
        self._classifier = classifier or ResponseClassifier()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmsDispatcher":
        """Wire the Africa's Talking gateway from loaded settings."""
        gateway = AfricasTalkingGateway(
            api_key=settings.at_api_key,
            username=settings.at_username,
            base_url=settings.at_api_base_url,
        )
        normalizer = InputNormalizer(
            username=settings.at_username,
            sender_id=settings.at_sender,
        )
        return cls(gateway=gateway, normalizer=normalizer)

    async def send(self, to: str, message: str) -> SendResult:
        """
        Send a message to a phone number.

        Args:
            to: Destination number in any common formatting
            message: Message text

        Returns:
            SendResult for the confirmed recipient

        Raises:
            DispatchError: The classified failure
        """
        token = set_correlation_id(uuid4().hex)
        try:
            return await self._send(to, message)
        finally:
            reset_correlation_id(token)

    async def _send(self, to: str, message: str) -> SendResult:
        try:
            request = self._normalizer.normalize(to, message)
        except InputValidationError as e:
            logger.warning("SMS input rejected", detail=e.detail)
            raise

        logger.info("Sending SMS", to=request.to, sender=request.sender)
        with Timer() as timer:
            try:
                raw = await self._gateway.dispatch(request)
            except httpx.HTTPError as e:
                outcome = self._classifier.classify(e)
                cause: BaseException | None = e
            else:
                outcome = self._classifier.classify(raw)
                cause = None

        if isinstance(outcome, DispatchError):
            logger.warning(
                "SMS send failed",
                kind=outcome.kind.value,
                detail=outcome.detail,
                duration_ms=timer.duration_ms,
            )
            raise outcome from cause

        logger.info(
            "SMS send completed",
            message_id=outcome.message_id,
            duration_ms=timer.duration_ms,
        )
        return outcome
