from typing import List, Optional


class GatewayError(Exception):
    """Base class for errors raised by the Ballou gateway."""


class ConfigurationError(GatewayError):
    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required configuration key(s): {', '.join(self.missing)}")


class MalformedResponseError(GatewayError, ValueError):
    """Raised when a 200 response body is not the XML document the provider should send."""

    def __init__(self, reason: str, body: Optional[bytes] = None):
        self.body = body
        super().__init__(reason)
