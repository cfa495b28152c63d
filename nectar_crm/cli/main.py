"""Main CLI entry point for the Nectar CRM SDK."""

import argparse
import json
import logging
import sys

from nectar_crm.core import (
    ClientConfig,
    QueryParam,
    ResponseEnvelope,
    has_client_config,
    load_client_config,
    save_client_config,
    ValidationError,
    APIError,
    TransportError,
    ConfigError,
)
from nectar_crm.client import NectarCRMClient, build_client

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
    # Suppress httpx INFO logs for cleaner output
    logging.getLogger("httpx").setLevel(logging.WARNING)


def parse_params(values: list[str] | None) -> list[QueryParam]:
    """Parse repeated --param name=value options."""
    params = []
    for raw in values or []:
        if "=" not in raw:
            print(f"Error: Invalid parameter '{raw}'. Use name=value.", file=sys.stderr)
            sys.exit(1)
        name, value = raw.split("=", 1)
        params.append(QueryParam(name=name.strip(), value=value.strip()))
    return params


def load_data(raw: str) -> dict:
    """Parse the --data JSON object."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        print(f"Error: --data is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)

    if not isinstance(data, dict):
        print("Error: --data must be a JSON object.", file=sys.stderr)
        sys.exit(1)
    return data


def print_envelope(envelope: ResponseEnvelope) -> None:
    print(json.dumps(envelope.to_dict(), indent=2, ensure_ascii=False, default=str))


def client_from_args(args) -> NectarCRMClient:
    """Build a client from saved settings plus command line overrides."""
    overrides = {}
    if args.debug:
        overrides["debug"] = True
    return build_client(token=args.token, **overrides)


def run_resource_command(args, dispatch) -> None:
    """
    Run a resource action and print its envelope.

    Args:
        args: Parsed arguments
        dispatch: Callable taking (client, args, params) and returning an envelope
    """
    try:
        params = parse_params(args.param)
        with client_from_args(args) as client:
            envelope = dispatch(client, args, params)
        print_envelope(envelope)

    except ValidationError as e:
        print("Validation failed:", file=sys.stderr)
        for error in e.errors:
            print(f"  - {error}", file=sys.stderr)
        sys.exit(1)
    except APIError as e:
        print(f"API error: {e}", file=sys.stderr)
        if e.status_code:
            print(f"HTTP Status: {e.status_code}", file=sys.stderr)
        sys.exit(1)
    except TransportError as e:
        print(f"Connection error: {e}", file=sys.stderr)
        sys.exit(1)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)


def dispatch_contacts(client: NectarCRMClient, args, params) -> ResponseEnvelope:
    if args.action == "list":
        return client.list_contacts(params)
    if args.action == "get":
        return client.get_contact(args.id, params)
    if args.action == "find":
        if args.email:
            return client.get_contact_by_email(args.email, params)
        if args.phone:
            return client.get_contact_by_phone(args.phone, params)
        if args.cpf:
            return client.get_contact_by_cpf(args.cpf, params)
        return client.get_contact_by_cnpj(args.cnpj, params)
    if args.action == "create":
        return client.create_contact(load_data(args.data), params)
    if args.action == "update":
        return client.update_contact(args.id, load_data(args.data), params)
    return client.delete_contact(args.id, params)


def dispatch_opportunities(client: NectarCRMClient, args, params) -> ResponseEnvelope:
    if args.action == "list":
        return client.list_opportunities(params)
    if args.action == "get":
        return client.get_opportunity(args.id, params)
    if args.action == "find":
        if args.email:
            return client.get_opportunity_by_email(args.email, params)
        if args.phone:
            return client.get_opportunity_by_phone(args.phone, params)
        return client.get_opportunities_by_contact(args.contact_id, params)
    if args.action == "create":
        return client.create_opportunity(load_data(args.data), params)
    if args.action == "update":
        return client.update_opportunity(args.id, load_data(args.data), params)
    return client.delete_opportunity(args.id, params)


def cmd_configure(args):
    """Handle the configure command."""
    try:
        config = load_client_config() if has_client_config() else ClientConfig()

        config.token = args.token
        if args.base_url:
            config.base_url = args.base_url
        if args.timeout is not None:
            config.timeout_seconds = args.timeout
        config.debug = args.debug
        config.decode = not args.no_decode

        path = save_client_config(config)
        print(f"Configuration saved to: {path}")

    except ConfigError as e:
        print(f"Error saving configuration: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_contacts(args):
    """Handle the contacts command."""
    run_resource_command(args, dispatch_contacts)


def cmd_opportunities(args):
    """Handle the opportunities command."""
    run_resource_command(args, dispatch_opportunities)


def add_resource_actions(parser, find_options: list[tuple[str, str]]):
    """Attach list/get/find/create/update/delete actions to a resource parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--token", help="Access token (overrides NECTAR_CRM_TOKEN and saved config)")
    common.add_argument("--debug", action="store_true", help="Include transport diagnostics in the output")
    common.add_argument(
        "--param",
        action="append",
        metavar="NAME=VALUE",
        help="Query parameter (repeatable)",
    )

    actions = parser.add_subparsers(dest="action", required=True, help="Action to execute")

    actions.add_parser("list", parents=[common], help="List records")

    get_parser = actions.add_parser("get", parents=[common], help="Get a record by ID")
    get_parser.add_argument("--id", required=True, help="Record ID")

    find_parser = actions.add_parser("find", parents=[common], help="Look up records by another key")
    group = find_parser.add_mutually_exclusive_group(required=True)
    for flag, help_text in find_options:
        group.add_argument(flag, help=help_text)

    create_parser = actions.add_parser("create", parents=[common], help="Create a record")
    create_parser.add_argument("--data", required=True, help="Record fields as a JSON object")

    update_parser = actions.add_parser("update", parents=[common], help="Update a record")
    update_parser.add_argument("--id", required=True, help="Record ID")
    update_parser.add_argument("--data", required=True, help="Record fields as a JSON object")

    delete_parser = actions.add_parser("delete", parents=[common], help="Delete a record")
    delete_parser.add_argument("--id", required=True, help="Record ID")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nectar-crm",
        description="Nectar CRM command line client",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Configure command
    configure_parser = subparsers.add_parser("configure", help="Save the access token and client settings")
    configure_parser.add_argument("--token", required=True, help="Access token")
    configure_parser.add_argument("--base-url", help="API base URL")
    configure_parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    configure_parser.add_argument("--debug", action="store_true", help="Include transport diagnostics")
    configure_parser.add_argument("--no-decode", action="store_true", help="Keep raw text for successful responses")
    configure_parser.set_defaults(func=cmd_configure)

    # Contacts command
    contacts_parser = subparsers.add_parser("contacts", help="Work with contacts")
    add_resource_actions(contacts_parser, [
        ("--email", "Contact e-mail"),
        ("--phone", "Contact phone number"),
        ("--cpf", "Contact CPF"),
        ("--cnpj", "Contact CNPJ"),
    ])
    contacts_parser.set_defaults(func=cmd_contacts)

    # Opportunities command
    opportunities_parser = subparsers.add_parser("opportunities", help="Work with opportunities")
    add_resource_actions(opportunities_parser, [
        ("--email", "E-mail registered on the opportunity"),
        ("--phone", "Phone number registered on the opportunity"),
        ("--contact-id", "ID of the linked contact"),
    ])
    opportunities_parser.set_defaults(func=cmd_opportunities)

    return parser


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
