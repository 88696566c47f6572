from .send_request import NormalizedRequest
from .send_result import SendResult

__all__ = ["NormalizedRequest", "SendResult"]
