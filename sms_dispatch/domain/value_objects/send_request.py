from dataclasses import dataclass


@dataclass(frozen=True)
class NormalizedRequest:
    """Validated send input ready for the gateway."""

    to: str
    message: str
    sender: str
