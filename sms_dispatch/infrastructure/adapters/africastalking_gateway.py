from typing import Any

import httpx
import structlog

from ...config import SANDBOX_USERNAME
from ...domain.ports import SmsGateway
from ...domain.value_objects import NormalizedRequest
from ..logging import mask_credential

logger = structlog.get_logger()


class AfricasTalkingGateway(SmsGateway):
    """Africa's Talking bulk SMS API gateway."""

    LIVE_BASE_URL = "https://api.africastalking.com"
    SANDBOX_BASE_URL = "https://api.sandbox.africastalking.com"
    SEND_PATH = "/version1/messaging"

    def __init__(self, api_key: str, username: str, base_url: str | None = None) -> None:
        self._api_key = api_key
        self._username = username
        if base_url:
            self._base_url = base_url.rstrip("/")
        elif username == SANDBOX_USERNAME:
            self._base_url = self.SANDBOX_BASE_URL
        else:
            self._base_url = self.LIVE_BASE_URL

    @property
    def send_url(self) -> str:
        return f"{self._base_url}{self.SEND_PATH}"

    @staticmethod
    def build_payload(request: NormalizedRequest) -> dict[str, Any]:
        """Provider payload; ``to`` is a list even for a single recipient."""
        return {
            "to": [request.to],
            "message": request.message,
            "from": request.sender,
        }

    async def dispatch(self, request: NormalizedRequest) -> Any:
        """Send one SMS and return the decoded response body."""
        payload = self.build_payload(request)
        logger.info(
            "SMS options",
            payload=payload,
            api_key=mask_credential(self._api_key),
            username=self._username,
        )

        form = {
            "username": self._username,
            "to": ",".join(payload["to"]),
            "message": payload["message"],
            "from": payload["from"],
        }
        headers = {
            "apiKey": self._api_key,
            "Accept": "application/json",
        }

        logger.info("Calling Africa's Talking SMS API", url=self.send_url)
        async with httpx.AsyncClient() as client:
            response = await client.post(self.send_url, headers=headers, data=form)

        if not response.is_success:
            logger.warning(
                "Raw API response",
                status_code=response.status_code,
                response=response.text,
            )
            response.raise_for_status()

        try:
            body = response.json()
        except ValueError:
            body = response.text

        logger.info("Raw API response", status_code=response.status_code, response=body)
        return body
