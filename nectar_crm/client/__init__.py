"""
Nectar CRM API client.

This module provides the HTTP layer, the resource-oriented client and a
builder that assembles one from saved settings.
"""

from .base import BaseClient
from .crm_client import NectarCRMClient, error_from_response
from .builder import build_client

__all__ = [
    "BaseClient",
    "NectarCRMClient",
    "error_from_response",
    "build_client",
]
