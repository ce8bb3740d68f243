import logging
from typing import Mapping, Optional

import httpx

from .config import BallouSettings, get_settings
from .errors import ConfigurationError
from .providers.ballou import BallouGateway

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("token",)


def requires(config: Mapping[str, str], keys) -> None:
    missing = [key for key in keys if key not in config]
    if missing:
        raise ConfigurationError(missing)


def make(config: Mapping[str, str], client: Optional[httpx.Client] = None) -> BallouGateway:
    """Create a Ballou gateway.

    Args:
        config: Credentials and provider flags. ``token`` is required.
        client: HTTP client to send through. A new one is created when
            omitted; a single client can be shared by several gateways.
    """
    requires(config, REQUIRED_KEYS)
    if client is None:
        client = httpx.Client()
    logger.debug("Ballou gateway created.", extra={"provider": BallouGateway.name})
    return BallouGateway(client, config)


def make_from_settings(settings: Optional[BallouSettings] = None,
                       client: Optional[httpx.Client] = None) -> BallouGateway:
    settings = settings or get_settings()
    return make(settings.as_gateway_config(), client=client)
