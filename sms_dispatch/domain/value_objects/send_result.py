from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class SendResult:
    """Gateway-confirmed delivery to a single recipient."""

    recipient_number: str
    message_id: str
    cost: str
    status: str = "Success"

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
