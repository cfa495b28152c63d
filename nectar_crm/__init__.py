"""Python SDK for the Nectar CRM REST API."""

from .core import (
    ClientConfig,
    QueryParam,
    ResponseEnvelope,
    NectarCRMError,
    ValidationError,
    APIError,
    TransportError,
    ConfigError,
)
from .client import NectarCRMClient, build_client

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "QueryParam",
    "ResponseEnvelope",
    "NectarCRMError",
    "ValidationError",
    "APIError",
    "TransportError",
    "ConfigError",
    "NectarCRMClient",
    "build_client",
]
