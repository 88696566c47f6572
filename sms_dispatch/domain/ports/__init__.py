from .sms_gateway import SmsGateway

__all__ = ["SmsGateway"]
