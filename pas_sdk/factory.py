"""
PAS SDK Factory

Factory functions for creating clients with real dependencies.

Usage:
    from pas_sdk.factory import create_rest_client
    client = create_rest_client()
"""
import logging
from typing import Optional

from .config import ClientConfig, get_settings
from .protocols import PreconditionError
from .restapi import RestClient

logger = logging.getLogger(__name__)


def create_rest_client(config: Optional[ClientConfig] = None, **kwargs) -> RestClient:
    """
    Create an authenticated RestClient.

    Args:
        config: Client config, defaults to the global settings
        **kwargs: Passed through to RestClient (e.g. transport)

    Returns:
        RestClient carrying the bearer token from config
    """
    config = config or get_settings().client
    if not config.url:
        raise PreconditionError("PAS tenant URL is not configured (PAS_URL)")
    if config.skip_cert_verify:
        logger.warning(f"TLS certificate verification disabled for {config.url}")

    return RestClient(
        config.url,
        token=config.token or None,
        source_header=config.source_header,
        timeout=config.timeout,
        verify=not config.skip_cert_verify,
        **kwargs,
    )


__all__ = ["create_rest_client"]
