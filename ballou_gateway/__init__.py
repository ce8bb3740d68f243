from .errors import ConfigurationError, GatewayError, MalformedResponseError
from .factory import make, make_from_settings
from .providers import BallouGateway, NormalizedResponse, RawHttpResult

__all__ = [
    "BallouGateway",
    "ConfigurationError",
    "GatewayError",
    "MalformedResponseError",
    "NormalizedResponse",
    "RawHttpResult",
    "make",
    "make_from_settings",
]
