from .input_normalizer import InputNormalizer, canonicalize_phone_number
from .response_classifier import ResponseClassifier
from .sms_dispatcher import SmsDispatcher

__all__ = [
    "InputNormalizer",
    "ResponseClassifier",
    "SmsDispatcher",
    "canonicalize_phone_number",
]
