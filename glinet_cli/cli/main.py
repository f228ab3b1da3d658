"""
Main CLI Orchestration Module

This module provides the entry point for the glinet CLI. It parses the
command line, bootstraps a router session and dispatches to the command
handlers. Any error aborts the command with exit status 1.

License: MIT
"""

import argparse
import getpass
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Optional

from glinet_cli import config
from glinet_cli.client import GlinetClient, authenticate_and_persist, resolve_session

from .args import parse_args
from .formatters import print_clients, print_error, print_internet_status, print_modem_info, print_public_ip
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)

PASSWORD_ENV_VAR = "GL_INET_PASSWORD"


def resolve_config_path(args: argparse.Namespace) -> Path:
    """Return the config path from --config or the default location."""
    if args.config:
        return Path(args.config).expanduser()
    return config.default_config_path()


def read_password(args: argparse.Namespace) -> str:
    """
    Get the router password for the auth command.

    Order: --password, $GL_INET_PASSWORD, interactive prompt.
    """
    if args.password is not None:
        return args.password.strip()

    from_env = os.environ.get(PASSWORD_ENV_VAR)
    if from_env:
        logger.debug(f"Using password from ${PASSWORD_ENV_VAR}")
        return from_env.strip()

    return getpass.getpass("Enter Password: ").strip()


def cmd_auth(args: argparse.Namespace) -> None:
    path = resolve_config_path(args)

    print(f"Address: '{args.address}'")
    password = read_password(args)

    # A corrupt config aborts before any network call
    store = config.load(path)
    authenticate_and_persist(store, args.address, password, path, timeout=args.timeout)

    print("Authorization successful")


def cmd_public_ip(client: GlinetClient, args: argparse.Namespace) -> None:
    print_public_ip(client.get_public_ip())


def cmd_check_internet(client: GlinetClient, args: argparse.Namespace) -> None:
    print_internet_status(client.check_internet())


def cmd_clients_list(client: GlinetClient, args: argparse.Namespace) -> None:
    print_clients(client.get_clients())


def cmd_modem_info(client: GlinetClient, args: argparse.Namespace) -> None:
    print_modem_info(client.get_modem_info())


def cmd_modem_on(client: GlinetClient, args: argparse.Namespace) -> None:
    client.set_modem_enabled(True)


def cmd_modem_off(client: GlinetClient, args: argparse.Namespace) -> None:
    client.set_modem_enabled(False)


def cmd_modem_auto(client: GlinetClient, args: argparse.Namespace) -> None:
    client.set_modem_auto()


SESSION_HANDLERS: dict[str, Callable[[GlinetClient, argparse.Namespace], None]] = {
    "public-ip": cmd_public_ip,
    "check-internet": cmd_check_internet,
    "clients-list": cmd_clients_list,
    "get-modem-info": cmd_modem_info,
    "modem-turn-on": cmd_modem_on,
    "modem-turn-off": cmd_modem_off,
    "modem-turn-on-auto": cmd_modem_auto,
}


def run_with_client(args: argparse.Namespace) -> None:
    """Resolve the stored session and run a command handler with a client."""
    handler = SESSION_HANDLERS[args.command]
    store = config.load(resolve_config_path(args))
    handle = resolve_session(store)

    with GlinetClient(handle, timeout=args.timeout) as client:
        handler(client, args)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the CLI application."""
    args = None

    try:
        try:
            args = parse_args(argv)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(2)

        setup_logging(debug=args.debug, quiet=args.quiet, log_file=args.log_file)

        if args.command == "auth":
            cmd_auth(args)
        else:
            run_with_client(args)

        logger.debug(f"Command {args.command} finished")

    except KeyboardInterrupt:
        logger.error("Operation cancelled by user")
        print("Operation cancelled by user", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        logger.debug(f"Command failed: {e}")
        print_error(e, debug=bool(args and args.debug))
        sys.exit(1)


if __name__ == "__main__":
    main()
