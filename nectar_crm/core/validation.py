"""
Field validation for contact and opportunity payloads.

Each validator returns the full list of violation messages (empty when the
payload is acceptable) so callers can report every problem at once.
"""

from typing import Any

from .models import CONTACT_TYPES


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == {} or value == []


def _is_blank_id(value: Any) -> bool:
    return _is_blank(value) or value == 0 or value == "0"


def _to_int(value: Any) -> int | None:
    # Numeric strings such as "1.0" count as their integer value
    try:
        if isinstance(value, str):
            return int(float(value))
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def validate_contact(data: dict[str, Any], require_document: bool = False) -> list[str]:
    """
    Validate a contact payload.

    Args:
        data: Contact fields as sent to the API
        require_document: Also require a CPF or CNPJ (used on update)

    Returns:
        List of violation messages
    """
    errors = []

    if _is_blank(data.get("nome")):
        errors.append("Contact name (nome) is required")

    contact_type = data.get("constante")
    if _is_blank(contact_type):
        errors.append("Contact type (constante) is required")
    elif _to_int(contact_type) not in CONTACT_TYPES:
        accepted = ", ".join(str(t) for t in CONTACT_TYPES[:-1])
        errors.append(f"Accepted contact types are {accepted} and {CONTACT_TYPES[-1]}")

    if require_document and _is_blank(data.get("cpf")) and _is_blank(data.get("cnpj")):
        errors.append("Either CPF or CNPJ must be provided for the contact")

    return errors


def validate_opportunity(data: dict[str, Any]) -> list[str]:
    """
    Validate an opportunity payload.

    Args:
        data: Opportunity fields as sent to the API

    Returns:
        List of violation messages
    """
    errors = []

    client = data.get("cliente")
    client_id = client.get("id") if isinstance(client, dict) else None
    if _is_blank_id(client_id):
        errors.append("Client (contact) ID (cliente.id) is required")

    if _is_blank(data.get("nome")):
        errors.append("Opportunity name (nome) is required")

    return errors


def validate_id(resource_id: Any, label: str) -> list[str]:
    """Check that an identifier was supplied and is not zero."""
    if _is_blank_id(resource_id):
        return [f"The {label} ID is required for deletion"]
    return []
