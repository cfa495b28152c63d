"""
Nectar CRM Client Implementation

Resource-oriented operations for contacts and opportunities built on top
of the HTTP layer in base.py.
"""

import logging
from typing import Any

from ..core.models import APIError, ResponseEnvelope, ValidationError
from ..core.validation import validate_contact, validate_id, validate_opportunity
from .base import BaseClient, Params

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An internal error occurred"

ROUTES = {
    "contacts": {
        "list": "contatos",
        "get": "contatos/{id}",
        "email": "contatos/email/{email}",
        "phone": "contatos/telefone/{phone}",
        "cnpj": "contatos/cnpj/{cnpj}",
        "cpf": "contatos/cpf/{cpf}",
    },
    "opportunities": {
        "list": "oportunidades",
        "get": "oportunidades/{id}",
        "email": "oportunidades/email/{email}",
        "phone": "oportunidades/telefone/{phone}",
        "contact": "oportunidades/contatoId/{id}",
    },
}


def error_from_response(envelope: ResponseEnvelope) -> APIError | None:
    """
    Interpret a completed call.

    Returns None for HTTP 200. Otherwise the error message is taken from
    the body's "message" field, then from its "mensagens" list, and falls
    back to a generic message when neither is present.
    """
    if envelope.http_status == 200:
        return None

    body = envelope.body
    if isinstance(body, dict):
        if body.get("message") is not None:
            return APIError(str(body["message"]), envelope.http_status, body)

        messages = body.get("mensagens")
        if messages is not None:
            if isinstance(messages, (list, tuple)):
                message = "\r\n".join(str(m) for m in messages)
            else:
                message = str(messages)
            return APIError(message, envelope.http_status, body)

    return APIError(GENERIC_ERROR_MESSAGE, envelope.http_status, body)


class NectarCRMClient(BaseClient):
    """
    Client for the Nectar CRM REST API.

    Features:
    - Contact and opportunity lookups, creation, updates and deletion
    - Local validation of required fields before any request is sent
    - Uniform envelope for successful calls, APIError for everything else

    Example:
        >>> with NectarCRMClient(token="...") as client:
        ...     contact = client.get_contact(42).body
    """

    def _route(self, resource: str, name: str, **path_params) -> str:
        return self._substitute_path_params(ROUTES[resource][name], **path_params)

    def _substitute_path_params(self, path: str, **params) -> str:
        """
        Substitute path parameters like {id} with actual values.

        Args:
            path: Path template (e.g., "contatos/{id}")
            **params: Parameter values

        Returns:
            Path with substituted values
        """
        result = path
        for key, value in params.items():
            result = result.replace(f"{{{key}}}", str(value))
        return result

    def _check(self, envelope: ResponseEnvelope) -> ResponseEnvelope:
        error = error_from_response(envelope)
        if error is not None:
            logger.debug(f"API call failed with HTTP {envelope.http_status}: {error}")
            raise error
        return envelope

    @staticmethod
    def _ensure_valid(errors: list[str]) -> None:
        if errors:
            raise ValidationError(errors)

    # ===== CONTACTS METHODS =====

    def list_contacts(self, params: Params = None) -> ResponseEnvelope:
        """
        List contacts.

        Args:
            params: Optional query parameters for filtering

        Returns:
            Envelope with the list of contacts as body
        """
        return self._check(self.get(self._route("contacts", "list"), params))

    def get_contact(self, contact_id: int | str, params: Params = None) -> ResponseEnvelope:
        """Get a single contact by ID."""
        return self._check(self.get(self._route("contacts", "get", id=contact_id), params))

    def get_contact_by_email(self, email: str, params: Params = None) -> ResponseEnvelope:
        """Get a contact by e-mail address."""
        return self._check(self.get(self._route("contacts", "email", email=email), params))

    def get_contact_by_phone(self, phone: str, params: Params = None) -> ResponseEnvelope:
        """Get a contact by phone number."""
        return self._check(self.get(self._route("contacts", "phone", phone=phone), params))

    def get_contact_by_cnpj(self, cnpj: str, params: Params = None) -> ResponseEnvelope:
        """Get a contact by CNPJ (company tax ID)."""
        return self._check(self.get(self._route("contacts", "cnpj", cnpj=cnpj), params))

    def get_contact_by_cpf(self, cpf: str, params: Params = None) -> ResponseEnvelope:
        """Get a contact by CPF (individual tax ID)."""
        return self._check(self.get(self._route("contacts", "cpf", cpf=cpf), params))

    def create_contact(self, data: dict[str, Any], params: Params = None) -> ResponseEnvelope:
        """
        Create a new contact.

        Args:
            data: Contact fields; "nome" and "constante" are required
            params: Optional query parameters

        Returns:
            Envelope with the created contact

        Raises:
            ValidationError: If required fields are missing or invalid
            APIError: If the API rejects the request
        """
        self._ensure_valid(validate_contact(data))
        return self._check(self.post(self._route("contacts", "list"), data, params))

    def update_contact(
        self,
        contact_id: int | str,
        data: dict[str, Any],
        params: Params = None,
    ) -> ResponseEnvelope:
        """
        Update an existing contact.

        Args:
            contact_id: Contact identifier
            data: Contact fields; "nome", "constante" and "cpf" or "cnpj" are required
            params: Optional query parameters

        Returns:
            Envelope with the updated contact

        Raises:
            ValidationError: If required fields are missing or invalid
            APIError: If the API rejects the request
        """
        self._ensure_valid(validate_contact(data, require_document=True))
        return self._check(self.put(self._route("contacts", "get", id=contact_id), data, params))

    def delete_contact(self, contact_id: int | str, params: Params = None) -> ResponseEnvelope:
        """
        Delete a contact.

        Raises:
            ValidationError: If no contact ID is given
            APIError: If the API rejects the request
        """
        self._ensure_valid(validate_id(contact_id, "contact"))
        return self._check(self.delete(self._route("contacts", "get", id=contact_id), params))

    # ===== OPPORTUNITIES METHODS =====

    def list_opportunities(self, params: Params = None) -> ResponseEnvelope:
        """
        List opportunities.

        Args:
            params: Optional query parameters for filtering

        Returns:
            Envelope with the list of opportunities as body
        """
        return self._check(self.get(self._route("opportunities", "list"), params))

    def get_opportunity(self, opportunity_id: int | str, params: Params = None) -> ResponseEnvelope:
        """Get a single opportunity by ID."""
        return self._check(
            self.get(self._route("opportunities", "get", id=opportunity_id), params)
        )

    def get_opportunity_by_email(self, email: str, params: Params = None) -> ResponseEnvelope:
        """Get an opportunity by the e-mail registered on it."""
        return self._check(self.get(self._route("opportunities", "email", email=email), params))

    def get_opportunity_by_phone(self, phone: str, params: Params = None) -> ResponseEnvelope:
        """Get an opportunity by the phone number registered on it."""
        return self._check(self.get(self._route("opportunities", "phone", phone=phone), params))

    def get_opportunities_by_contact(
        self,
        contact_id: int | str,
        params: Params = None,
    ) -> ResponseEnvelope:
        """Get the opportunities linked to a contact."""
        return self._check(
            self.get(self._route("opportunities", "contact", id=contact_id), params)
        )

    def create_opportunity(self, data: dict[str, Any], params: Params = None) -> ResponseEnvelope:
        """
        Create a new opportunity.

        Args:
            data: Opportunity fields; "nome" and "cliente.id" are required
            params: Optional query parameters

        Returns:
            Envelope with the created opportunity

        Raises:
            ValidationError: If required fields are missing
            APIError: If the API rejects the request
        """
        self._ensure_valid(validate_opportunity(data))
        return self._check(self.post(self._route("opportunities", "list"), data, params))

    def update_opportunity(
        self,
        opportunity_id: int | str,
        data: dict[str, Any],
        params: Params = None,
    ) -> ResponseEnvelope:
        """
        Update an existing opportunity.

        Raises:
            ValidationError: If required fields are missing
            APIError: If the API rejects the request
        """
        self._ensure_valid(validate_opportunity(data))
        return self._check(
            self.put(self._route("opportunities", "get", id=opportunity_id), data, params)
        )

    def delete_opportunity(self, opportunity_id: int | str, params: Params = None) -> ResponseEnvelope:
        """
        Delete an opportunity.

        Raises:
            ValidationError: If no opportunity ID is given
            APIError: If the API rejects the request
        """
        self._ensure_valid(validate_id(opportunity_id, "opportunity"))
        return self._check(
            self.delete(self._route("opportunities", "get", id=opportunity_id), params)
        )
