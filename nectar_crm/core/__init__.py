"""Core components for the Nectar CRM SDK."""

from .models import (
    DEFAULT_BASE_URL,
    CONTACT_TYPES,
    ClientConfig,
    QueryParam,
    ResponseEnvelope,
    NectarCRMError,
    ValidationError,
    APIError,
    TransportError,
    ConfigError,
)
from .validation import validate_contact, validate_opportunity, validate_id
from .config_store import (
    get_base_dir,
    config_path,
    save_json,
    load_json,
    has_client_config,
    save_client_config,
    load_client_config,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "CONTACT_TYPES",
    "ClientConfig",
    "QueryParam",
    "ResponseEnvelope",
    "NectarCRMError",
    "ValidationError",
    "APIError",
    "TransportError",
    "ConfigError",
    "validate_contact",
    "validate_opportunity",
    "validate_id",
    "get_base_dir",
    "config_path",
    "save_json",
    "load_json",
    "has_client_config",
    "save_client_config",
    "load_client_config",
]
