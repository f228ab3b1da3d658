"""
Command Line Argument Parsing Module

This module handles all argument parsing and validation for the glinet CLI.
It defines the sub-commands and validates user inputs.

License: MIT
"""

import argparse
import ipaddress
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Factory default address of GL.iNet devices
DEFAULT_ROUTER_ADDRESS = "192.168.8.1"

# Sub-commands that need a stored session, with their help text
SESSION_COMMANDS = {
    "public-ip": "Get public IP addr",
    "check-internet": "Check that internet is reachable",
    "clients-list": "Get list of clients",
    "get-modem-info": "Get status of modem",
    "modem-turn-on": "Turn on modem",
    "modem-turn-off": "Turn off modem",
    "modem-turn-on-auto": "Auto dial",
}


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="glinet",
        description="Query and control a GL.iNet router through its local API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s auth                  (log in to 192.168.8.1, prompts for password)
  %(prog)s auth 192.168.8.1
  %(prog)s public-ip
  %(prog)s clients-list

Session:
  'auth' saves the router address, password and session token to the config
  file. Every other command reuses the saved token. When the token expires,
  run 'auth' again.

Password:
  Taken from --password, then the GL_INET_PASSWORD environment variable,
  then an interactive prompt.
        """,
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to the config file (default: $GLINET_CONFIG or ~/.config/glinet/config.json)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: no timeout)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output to stderr",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    auth_parser = subparsers.add_parser(
        "auth",
        help="Auth in router",
        description="Log in to the router and save the session token",
    )
    auth_parser.add_argument(
        "address",
        nargs="?",
        default=DEFAULT_ROUTER_ADDRESS,
        help="Router IP address (default: %(default)s)",
    )
    auth_parser.add_argument("--password", default=None, help="Router admin password")

    for name, help_text in SESSION_COMMANDS.items():
        subparsers.add_parser(name, help=help_text, description=help_text)

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list, defaults to sys.argv[1:]

    Returns:
        Parsed arguments namespace
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logger.debug(f"Parsed command: {args.command}")

    # Validate arguments
    validate_args(args)

    return args


def validate_args(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Normalizes ``args.address`` for the auth command.

    Raises:
        ValueError: If arguments are invalid
    """
    if args.timeout is not None and args.timeout <= 0:
        raise ValueError("Timeout must be greater than 0")

    if args.command == "auth":
        try:
            args.address = str(ipaddress.ip_address(args.address.strip()))
        except ValueError:
            raise ValueError(f"Unable to parse IP address: {args.address!r}") from None

    logger.debug("Arguments validated successfully")
