from typing import Any

import pytest

from sms_dispatch.application.services import InputNormalizer, SmsDispatcher
from sms_dispatch.config import Settings, load_settings
from sms_dispatch.domain.ports import SmsGateway
from sms_dispatch.domain.value_objects import NormalizedRequest

TEST_NUMBER = "+2348082225459"
TEST_API_KEY = "atsk_0123456789abcdef"


class FakeGateway(SmsGateway):
    """Gateway that records requests and replays a canned outcome."""

    def __init__(self, response: Any = None, error: BaseException | None = None) -> None:
        self.response = response
        self.error = error
        self.requests: list[NormalizedRequest] = []

    async def dispatch(self, request: NormalizedRequest) -> Any:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def envelope(message: str = "Sent to 1/1 Total Cost: NGN 0.50", recipients: list | None = None) -> dict:
    return {"SMSMessageData": {"Message": message, "Recipients": recipients or []}}


def recipient(
    number: str = TEST_NUMBER,
    status: str = "Success",
    cost: str = "0.50",
    message_id: str = "ATXid_123",
) -> dict:
    return {
        "statusCode": 101 if status == "Success" else 403,
        "number": number,
        "status": status,
        "cost": cost,
        "messageId": message_id,
    }


@pytest.fixture
def sandbox_settings(monkeypatch) -> Settings:
    for name in ("AT_API_KEY", "AT_USERNAME", "AT_SENDER", "AT_API_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    return load_settings(
        _env_file=None,
        at_api_key=TEST_API_KEY,
        at_username="sandbox",
        at_sender="MYAPP",
    )


@pytest.fixture
def success_body() -> dict:
    return envelope(recipients=[recipient()])


@pytest.fixture
def make_dispatcher():
    def _make(
        response: Any = None,
        error: BaseException | None = None,
        username: str = "sandbox",
        sender_id: str | None = None,
    ) -> tuple[SmsDispatcher, FakeGateway]:
        gateway = FakeGateway(response=response, error=error)
        normalizer = InputNormalizer(username=username, sender_id=sender_id)
        return SmsDispatcher(gateway=gateway, normalizer=normalizer), gateway

    return _make


@pytest.fixture
def make_envelope():
    return envelope


@pytest.fixture
def make_recipient():
    return recipient
