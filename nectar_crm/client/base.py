"""
HTTP layer of the Nectar CRM client.

Owns the connection settings, assembles request headers and executes every
call through httpx, normalizing the outcome into a ResponseEnvelope.
"""

import dataclasses
import json
import logging
from typing import Any, Iterable
from urllib.parse import urlencode

import httpx

from ..core.models import ClientConfig, QueryParam, ResponseEnvelope, TransportError

logger = logging.getLogger(__name__)

Headers = Iterable[str | tuple[str, str]] | None
Params = Iterable[QueryParam | dict | tuple] | None


def normalize_path(path: str) -> str:
    """Make sure the path starts with a slash."""
    if not path.startswith("/"):
        path = "/" + path
    return path


def build_query_string(params: Params) -> str:
    """
    Build a query string from a sequence of parameters.

    Entries with an empty name or value are skipped; the rest keep their
    order and are form-encoded.

    Returns:
        "?name=value&..." or an empty string when nothing is left
    """
    pairs = []
    for item in params or []:
        param = QueryParam.coerce(item)
        if param.is_empty:
            continue
        pairs.append((str(param.name), str(param.value)))

    if not pairs:
        return ""
    return "?" + urlencode(pairs)


def split_header(header: str | tuple[str, str]) -> tuple[str, str]:
    """Turn a "Name: value" line into a (name, value) pair."""
    if isinstance(header, tuple):
        return header
    name, _, value = header.partition(":")
    return name.strip(), value.strip()


def multipart_parts(body: dict[str, Any]) -> list[tuple[str, Any]]:
    """
    Convert an upload payload into httpx multipart parts.

    Tuples and file objects are passed through as file parts, list values
    become repeated fields and anything else is sent as a plain form field.
    """
    parts = []
    for name, value in body.items():
        values = value if isinstance(value, list) else [value]
        for item in values:
            if isinstance(item, tuple) or hasattr(item, "read"):
                parts.append((name, item))
            elif isinstance(item, bytes):
                parts.append((name, (None, item)))
            else:
                parts.append((name, (None, str(item))))
    return parts


def _decode_json(response: httpx.Response) -> Any:
    # Empty or malformed bodies decode to None
    if not response.content:
        return None
    try:
        return json.loads(response.content)
    except ValueError:
        return None


def _debug_info(response: httpx.Response) -> dict[str, Any]:
    try:
        total_time = response.elapsed.total_seconds()
    except RuntimeError:
        # elapsed is only set once the response stream has been closed
        total_time = None

    return {
        "url": str(response.url),
        "method": response.request.method,
        "http_code": response.status_code,
        "total_time": total_time,
        "http_version": response.http_version,
        "content_type": response.headers.get("content-type"),
        "response_headers": dict(response.headers),
    }


class BaseClient:
    """
    Configuration, header assembly and request execution.

    Verb helpers (get/post/put/delete/options) return a ResponseEnvelope for
    every completed call, whatever its status code. Only failures to
    complete the call at all raise, as TransportError.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.Client | None = None,
        token: str | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Connection settings (copied, never shared with the caller)
            http_client: Optional httpx client (created if None)
            token: Shortcut for setting the access token
        """
        self.config = dataclasses.replace(config) if config else ClientConfig()
        if token is not None:
            self.config.token = token

        # Track if we own the HTTP client (for cleanup)
        self._owns_client = http_client is None

        if http_client is None:
            self.http_client = httpx.Client(timeout=self.config.timeout_seconds)
        else:
            self.http_client = http_client

    def close(self) -> None:
        """Close the HTTP client if we created it."""
        if self._owns_client and self.http_client:
            self.http_client.close()

    def __enter__(self):
        """Context manager support."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager cleanup."""
        self.close()
        return False

    # ===== CONFIGURATION =====

    def set_token(self, token: str) -> None:
        self.config.token = token

    def get_token(self) -> str:
        return self.config.token

    def set_debug(self, debug: bool) -> None:
        """Attach transport diagnostics to every envelope."""
        self.config.debug = debug

    def get_debug(self) -> bool:
        return self.config.debug

    def set_upload(self, upload: bool) -> None:
        """Send POST bodies as multipart form data instead of JSON."""
        self.config.upload = upload

    def get_upload(self) -> bool:
        return self.config.upload

    def set_decode(self, decode: bool) -> None:
        """
        Control JSON decoding of response bodies.

        With decoding off, only 200 responses keep their raw text; any
        other status is still decoded so errors can be interpreted.
        """
        self.config.decode = decode

    def get_decode(self) -> bool:
        return self.config.decode

    def default_headers(self) -> list[str]:
        """Return the headers sent with every request except OPTIONS."""
        headers = [
            f"Access-Token: {self.config.token}",
            "Accept: application/json",
        ]

        if not self.config.upload:
            headers.append("Content-Type: application/json")
        else:
            headers.append("Content-Type: multipart/form-data")
        return headers

    def _with_defaults(self, headers: Headers) -> list:
        return self.default_headers() + list(headers or [])

    # ===== VERB HELPERS =====

    def get(self, path: str, params: Params = None, headers: Headers = None) -> ResponseEnvelope:
        """Execute a GET request."""
        return self._execute("GET", path, params, self._with_defaults(headers))

    def post(
        self,
        path: str,
        body: Any = None,
        params: Params = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        """
        Execute a POST request.

        The body is JSON-encoded unless upload mode is on, in which case a
        mapping is sent as multipart form data and bytes/str as-is. A missing
        body is sent as an empty JSON object ("{}").
        """
        if body is None:
            body = {}

        if not self.config.upload:
            return self._execute(
                "POST", path, params, self._with_defaults(headers), content=json.dumps(body)
            )

        if isinstance(body, (bytes, str)):
            return self._execute("POST", path, params, self._with_defaults(headers), content=body)

        # An empty mapping has no parts; send it bodiless with the default header
        return self._execute(
            "POST", path, params, self._with_defaults(headers), files=multipart_parts(body) or None
        )

    def put(
        self,
        path: str,
        body: Any = None,
        params: Params = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        """Execute a PUT request; the body is always JSON-encoded."""
        if body is None:
            body = {}
        return self._execute(
            "PUT", path, params, self._with_defaults(headers), content=json.dumps(body)
        )

    def delete(self, path: str, params: Params = None, headers: Headers = None) -> ResponseEnvelope:
        """Execute a DELETE request."""
        return self._execute("DELETE", path, params, self._with_defaults(headers))

    def options(self, path: str, params: Params = None, headers: Headers = None) -> ResponseEnvelope:
        """
        Execute an OPTIONS request.

        Note: only the given headers are sent. The default headers, token
        included, are not applied to OPTIONS. The asymmetry with the other
        verbs is probably an oversight but existing callers may rely on it;
        pass the Access-Token header explicitly when authentication is needed.
        """
        return self._execute("OPTIONS", path, params, list(headers or []))

    # ===== REQUEST EXECUTOR =====

    def _build_url(self, path: str, params: Params = None) -> str:
        """
        Build full URL from base URL, path and query parameters.

        Args:
            path: API path (e.g., "contatos/42")
            params: Query parameters

        Returns:
            Full URL
        """
        base_url = self.config.base_url.rstrip("/")
        return base_url + normalize_path(path) + build_query_string(params)

    def _execute(
        self,
        method: str,
        path: str,
        params: Params,
        headers: list,
        content: str | bytes | None = None,
        files: list | None = None,
    ) -> ResponseEnvelope:
        """
        Perform one request and normalize the response.

        Args:
            method: HTTP method
            path: API path relative to the base URL
            params: Query parameters
            headers: Header lines ("Name: value") or pairs
            content: Raw request body
            files: Multipart parts

        Returns:
            ResponseEnvelope for any HTTP status

        Raises:
            TransportError: If the request could not be completed
        """
        url = self._build_url(path, params)
        header_pairs = [split_header(h) for h in headers]

        if files:
            # Let httpx emit the multipart content type with its boundary
            header_pairs = [
                (name, value) for name, value in header_pairs
                if not (name.lower() == "content-type" and value.lower() == "multipart/form-data")
            ]

        logger.debug(f"{method} {url}")

        try:
            response = self.http_client.request(
                method=method,
                url=url,
                headers=header_pairs,
                content=content,
                files=files,
            )
        except httpx.RequestError as e:
            logger.debug(f"{method} {url} failed: {e}")
            raise TransportError(str(e)) from e

        status = response.status_code
        decode = self.config.decode

        # Raw text is only kept for successful calls with decoding disabled
        if decode or (not decode and status != 200):
            body = _decode_json(response)
        else:
            body = response.text

        envelope = ResponseEnvelope(http_status=status, body=body)
        if self.config.debug:
            envelope.debug_info = _debug_info(response)

        logger.debug(f"{method} {url} -> {status}")
        return envelope
