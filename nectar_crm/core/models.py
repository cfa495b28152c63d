"""Core data models and errors for the Nectar CRM SDK."""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_BASE_URL = "https://app.nectarcrm.com.br/crm/api/1"

# Contact type codes accepted by the API for the "constante" field
CONTACT_TYPES = (0, 1, 2, 3, 5)


@dataclass
class ClientConfig:
    """Connection settings owned by a single client instance."""
    token: str = ""
    debug: bool = False
    upload: bool = False
    decode: bool = True
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert ClientConfig to a dictionary."""
        return {
            "token": self.token,
            "debug": self.debug,
            "upload": self.upload,
            "decode": self.decode,
            "base_url": self.base_url,
            "timeout_seconds": self.timeout_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """Create ClientConfig from a dictionary, falling back to defaults."""
        return cls(
            token=data.get("token", ""),
            debug=bool(data.get("debug", False)),
            upload=bool(data.get("upload", False)),
            decode=bool(data.get("decode", True)),
            base_url=data.get("base_url") or DEFAULT_BASE_URL,
            timeout_seconds=data.get("timeout_seconds"),
        )


@dataclass(frozen=True)
class QueryParam:
    """A single query string entry."""
    name: str
    value: str

    @property
    def is_empty(self) -> bool:
        """True when either side is empty; such entries never reach the URL."""
        return not self.name or self.value is None or self.value == ""

    @classmethod
    def coerce(cls, item: Any) -> "QueryParam":
        """
        Build a QueryParam from the shapes callers commonly pass.

        Accepts an existing QueryParam, a mapping with "name"/"value" keys,
        or a (name, value) pair.
        """
        if isinstance(item, QueryParam):
            return item
        if isinstance(item, dict):
            return cls(name=item.get("name") or "", value=item.get("value"))
        if isinstance(item, (tuple, list)) and len(item) == 2:
            return cls(name=item[0] or "", value=item[1])
        raise TypeError(f"Unsupported query parameter: {item!r}")


@dataclass
class ResponseEnvelope:
    """
    Normalized result of one HTTP round trip.

    body holds the decoded JSON value, or the raw response text when
    decoding was switched off and the call returned 200.
    """
    http_status: int
    body: Any = None
    debug_info: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return self.http_status == 200

    def to_dict(self) -> dict[str, Any]:
        """Render the envelope in the API's httpCode/body/info shape."""
        data = {"httpCode": self.http_status, "body": self.body}
        if self.debug_info is not None:
            data["info"] = self.debug_info
        return data


class NectarCRMError(Exception):
    """Base class for all SDK errors."""
    pass


class ValidationError(NectarCRMError):
    """Raised before any network call when required fields are missing or invalid."""

    def __init__(self, errors: list[str]):
        super().__init__("\r\n".join(errors))
        self.errors = list(errors)


class APIError(NectarCRMError):
    """Raised when the API answers with anything other than HTTP 200."""

    def __init__(self, message: str, status_code: int | None = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportError(NectarCRMError):
    """Raised when the request could not be completed (DNS, refused connection, timeout)."""
    pass


class ConfigError(NectarCRMError):
    """Raised when there is an error loading or saving configuration."""
    pass
