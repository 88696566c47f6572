from .africastalking_gateway import AfricasTalkingGateway

__all__ = ["AfricasTalkingGateway"]
