#!/usr/bin/env python3
"""
CredHub command-line interface.

Usage:
    credhub api URL [--auth-url URL] [--skip-tls-validation]
    credhub login -u USERNAME -p PASSWORD
    credhub set -n NAME -t TYPE [--no-overwrite] [value options]
    credhub get -n NAME
    credhub delete -n NAME
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from credhub import __version__
from credhub.actions.action import Action
from credhub.auth.base import Authenticator
from credhub.auth.uaa import UaaAuthenticator
from credhub.cli.output import print_credential, print_error, print_message
from credhub.client.request_builders import (
    build_delete_request,
    build_get_request,
    build_set_request,
)
from credhub.client.transport import Transport
from credhub.config import CredHubConfig
from credhub.credentials.values import (
    RSA,
    SSH,
    Certificate,
    Credential,
    CredentialType,
    User,
)
from credhub.errors import CredHubError, NetworkError, UnauthorizedError
from credhub.repositories.repository import CredentialRepository

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_NETWORK = 3
EXIT_UNAUTHORIZED = 4


class UsageError(Exception):
    """Raised when command arguments cannot be turned into a request."""
    pass


def exit_code_for(error: CredHubError) -> int:
    if isinstance(error, NetworkError):
        return EXIT_NETWORK
    if isinstance(error, UnauthorizedError):
        return EXIT_UNAUTHORIZED
    return EXIT_ERROR


def _read_file(path: Optional[str]) -> Optional[str]:
    if path is None:
        return None
    try:
        return Path(path).read_text()
    except OSError as e:
        raise UsageError(f"Cannot read {path}: {e}") from e


def build_value(args: argparse.Namespace) -> Any:
    """Turn ``set`` command options into a value for ``args.type``."""
    credential_type = CredentialType(args.type)

    if credential_type in (CredentialType.PASSWORD, CredentialType.VALUE):
        if args.value is None:
            raise UsageError(f"A value (-v) is required for type {credential_type.value}")
        return args.value

    if credential_type == CredentialType.JSON:
        if args.value is None:
            raise UsageError("A value (-v) is required for type json")
        try:
            document = json.loads(args.value)
        except ValueError as e:
            raise UsageError(f"The value provided is not valid JSON: {e}") from e
        if not isinstance(document, dict):
            raise UsageError("The value provided must be a JSON object")
        return document

    if credential_type == CredentialType.USER:
        if args.username is None or args.password is None:
            raise UsageError("--username and --password are required for type user")
        return User(username=args.username, password=args.password)

    if credential_type == CredentialType.CERTIFICATE:
        return Certificate(
            ca=_read_file(args.root),
            certificate=_read_file(args.certificate),
            private_key=_read_file(args.private),
        )

    key_pair = {'public_key': _read_file(args.public), 'private_key': _read_file(args.private)}
    if credential_type == CredentialType.RSA:
        return RSA(**key_pair)
    return SSH(**key_pair)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="credhub", description="CredHub command-line client")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('--verbose', action='store_true', help="Enable debug logging")
    subparsers = parser.add_subparsers(dest='command', required=True)

    api = subparsers.add_parser('api', help="Set the CredHub API target")
    api.add_argument('url', help="CredHub server URL")
    api.add_argument('--auth-url', help="UAA server URL")
    api.add_argument('--skip-tls-validation', action='store_true',
                     help="Do not verify the server's TLS certificate")

    login = subparsers.add_parser('login', help="Authenticate with the UAA server")
    login.add_argument('-u', '--username', required=True)
    login.add_argument('-p', '--password', required=True)

    set_cmd = subparsers.add_parser('set', help="Set a credential")
    set_cmd.add_argument('-n', '--name', required=True, help="Name of the credential to set")
    set_cmd.add_argument('-t', '--type', required=True,
                         choices=[t.value for t in CredentialType], help="Credential type")
    set_cmd.add_argument('-v', '--value', help="Value (password, value and json types)")
    set_cmd.add_argument('--username', help="Username (user type)")
    set_cmd.add_argument('--password', help="Password (user type)")
    set_cmd.add_argument('--root', help="Path to the CA certificate (certificate type)")
    set_cmd.add_argument('--certificate', help="Path to the certificate (certificate type)")
    set_cmd.add_argument('--private', help="Path to the private key (certificate, rsa, ssh types)")
    set_cmd.add_argument('--public', help="Path to the public key (rsa, ssh types)")
    set_cmd.add_argument('--no-overwrite', action='store_true',
                         help="Return the existing credential instead of replacing it")

    get = subparsers.add_parser('get', help="Get a credential")
    get.add_argument('-n', '--name', required=True, help="Name of the credential to get")

    delete = subparsers.add_parser('delete', help="Delete a credential")
    delete.add_argument('-n', '--name', required=True, help="Name of the credential to delete")

    return parser


def _persist_tokens(config: CredHubConfig, config_path: Optional[Path]):
    def on_refresh(access_token: str, refresh_token: Optional[str]) -> None:
        config.access_token = access_token
        config.refresh_token = refresh_token
        config.save(config_path)
    return on_refresh


def _run_action(config: CredHubConfig, authenticator: Authenticator, request, identifier: str):
    transport = Transport(authenticator, timeout=config.timeout, verify=config.verify)
    action = Action(CredentialRepository(transport), config)
    return action.do_action(request, identifier)


def _handle_api(args, config: CredHubConfig, config_path: Optional[Path]) -> int:
    config.api_url = args.url.rstrip('/')
    if args.auth_url:
        config.auth_url = args.auth_url.rstrip('/')
    config.verify = not args.skip_tls_validation
    config.save(config_path)
    print_message(f"Setting the target url: {config.api_url}")
    return EXIT_OK


def _handle_login(args, config: CredHubConfig, authenticator: Authenticator,
                  config_path: Optional[Path]) -> int:
    if not isinstance(authenticator, UaaAuthenticator):
        raise UsageError("Login requires a UAA authenticator")
    if not authenticator.login(args.username, args.password):
        raise UnauthorizedError("The provided username and password combination are incorrect.")
    config.access_token = authenticator.access_token
    config.refresh_token = authenticator.refresh_token
    config.save(config_path)
    print_message("Login Successful")
    return EXIT_OK


def _handle_credential(args, config: CredHubConfig, authenticator: Authenticator) -> int:
    if args.command == 'set':
        request = build_set_request(
            config, args.name, args.type, build_value(args), not args.no_overwrite
        )
    elif args.command == 'get':
        request = build_get_request(config, args.name)
    else:
        request = build_delete_request(config, args.name)

    result = _run_action(config, authenticator, request, args.name)

    if args.command == 'delete':
        print_message("Credential successfully deleted")
    elif isinstance(result, Credential):
        print_credential(result)
    return EXIT_OK


def main(
    argv: Optional[List[str]] = None,
    authenticator: Optional[Authenticator] = None,
    config_path: Optional[Path] = None,
) -> int:
    """
    Run the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        authenticator: Authenticator to use instead of one built from config
        config_path: Config file location (defaults to ``default_config_path()``)

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = CredHubConfig.load(config_path)

        if args.command == 'api':
            return _handle_api(args, config, config_path)

        if authenticator is None:
            authenticator = UaaAuthenticator.from_config(
                config, on_refresh=_persist_tokens(config, config_path)
            )

        if args.command == 'login':
            return _handle_login(args, config, authenticator, config_path)
        return _handle_credential(args, config, authenticator)
    except UsageError as e:
        print_error(str(e))
        return EXIT_USAGE
    except CredHubError as e:
        logger.debug(f"{args.command} failed: {e!r}")
        print_error(str(e))
        return exit_code_for(e)


if __name__ == "__main__":
    sys.exit(main())
