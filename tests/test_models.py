"""Tests for core data models."""

import pytest

from nectar_crm.core.models import (
    DEFAULT_BASE_URL,
    ClientConfig,
    QueryParam,
    ResponseEnvelope,
    NectarCRMError,
    ValidationError,
    APIError,
    TransportError,
    ConfigError,
)


def test_client_config_defaults():
    """Test ClientConfig default values."""
    config = ClientConfig()

    assert config.token == ""
    assert config.debug is False
    assert config.upload is False
    assert config.decode is True
    assert config.base_url == "https://app.nectarcrm.com.br/crm/api/1"
    assert config.timeout_seconds is None


def test_client_config_round_trip():
    """Test ClientConfig to_dict/from_dict."""
    config = ClientConfig(token="abc", debug=True, decode=False, timeout_seconds=5.0)

    restored = ClientConfig.from_dict(config.to_dict())

    assert restored == config


def test_client_config_from_partial_dict():
    """Test ClientConfig.from_dict fills in missing fields."""
    config = ClientConfig.from_dict({"token": "abc"})

    assert config.token == "abc"
    assert config.decode is True
    assert config.base_url == DEFAULT_BASE_URL


def test_query_param_coerce_shapes():
    """Test QueryParam.coerce accepts params, mappings and pairs."""
    param = QueryParam("page", "2")

    assert QueryParam.coerce(param) is param
    assert QueryParam.coerce({"name": "page", "value": "2"}) == param
    assert QueryParam.coerce(("page", "2")) == param


def test_query_param_coerce_rejects_other_types():
    """Test QueryParam.coerce rejects unsupported values."""
    with pytest.raises(TypeError):
        QueryParam.coerce("page=2")


@pytest.mark.parametrize("name,value,empty", [
    ("page", "2", False),
    ("", "2", True),
    ("page", "", True),
    ("page", None, True),
])
def test_query_param_is_empty(name, value, empty):
    """Test QueryParam.is_empty."""
    assert QueryParam(name, value).is_empty is empty


def test_envelope_to_dict_without_debug():
    """Test envelope rendering omits info when debug is off."""
    envelope = ResponseEnvelope(http_status=200, body={"id": 1})

    assert envelope.ok is True
    assert envelope.to_dict() == {"httpCode": 200, "body": {"id": 1}}


def test_envelope_to_dict_with_debug():
    """Test envelope rendering includes debug info."""
    envelope = ResponseEnvelope(http_status=404, body=None, debug_info={"url": "u"})

    assert envelope.ok is False
    assert envelope.to_dict()["info"] == {"url": "u"}


def test_validation_error_joins_messages():
    """Test ValidationError message is the CRLF-joined list."""
    error = ValidationError(["first", "second"])

    assert str(error) == "first\r\nsecond"
    assert error.errors == ["first", "second"]


def test_api_error_fields():
    """Test APIError stores status code and body."""
    error = APIError("Request failed", status_code=422, body={"message": "Request failed"})

    assert str(error) == "Request failed"
    assert error.status_code == 422
    assert error.body == {"message": "Request failed"}


def test_api_error_without_status_code():
    """Test APIError works without status code."""
    error = APIError("Network error")
    assert error.status_code is None
    assert error.body is None


def test_error_hierarchy():
    """Test all SDK errors share a base class."""
    for error_class in (ValidationError, APIError, TransportError, ConfigError):
        assert issubclass(error_class, NectarCRMError)
