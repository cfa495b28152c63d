"""
Builder module for creating configured clients.

Combines the saved configuration, the environment and explicit arguments
into a ready-to-use NectarCRMClient.
"""

import dataclasses
import logging
import os
from typing import Any

import httpx

from ..core import ClientConfig, has_client_config, load_client_config
from .crm_client import NectarCRMClient

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "NECTAR_CRM_TOKEN"


def build_client(
    token: str | None = None,
    http_client: httpx.Client | None = None,
    **overrides: Any,
) -> NectarCRMClient:
    """
    Create a NectarCRMClient from saved settings.

    Settings are resolved in this order, later steps winning:
    - Saved configuration (see `nectar-crm configure`), or defaults
    - NECTAR_CRM_TOKEN environment variable
    - Explicit token and keyword overrides

    Args:
        token: Access token
        http_client: Optional httpx client to use
        **overrides: Any other ClientConfig field (debug, upload, decode,
                     base_url, timeout_seconds)

    Returns:
        Configured NectarCRMClient

    Raises:
        ConfigError: If the saved configuration cannot be read
        TypeError: If an override does not name a ClientConfig field

    Example:
        >>> client = build_client(debug=True)
        >>> contacts = client.list_contacts()
        >>> client.close()
    """
    if has_client_config():
        config = load_client_config()
        logger.debug("Loaded saved client configuration")
    else:
        config = ClientConfig()

    env_token = os.environ.get(TOKEN_ENV_VAR)
    if env_token:
        config.token = env_token

    if token:
        config.token = token

    if overrides:
        config = dataclasses.replace(config, **overrides)

    if not config.token:
        logger.warning("No access token configured; the API will reject requests")

    return NectarCRMClient(config=config, http_client=http_client)
