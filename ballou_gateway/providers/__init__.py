from .ballou import BallouGateway
from .base import BaseGateway, HttpMethod, NormalizedResponse, RawHttpResult

__all__ = ["BallouGateway", "BaseGateway", "HttpMethod", "NormalizedResponse", "RawHttpResult"]
