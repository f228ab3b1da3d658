"""
Output Formatting Module

This module renders decoded router data as console text and ASCII tables
on stdout. Tables are laid out with rich.

License: MIT
"""

import logging
import sys
from io import StringIO
from typing import Any, Optional, TextIO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from glinet_cli.models import ConnectedClient, InternetStatus, ModemInfo, PublicIP

logger = logging.getLogger(__name__)

CLIENT_COLUMNS = ["IP", "Mac", "Online", "Iface", "Name", "Favorite", "Blocked", "OnlineTime", "Alive"]

# Wide enough that no client column ever wraps
TABLE_WIDTH = 1000


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_table(rows: list[list[Any]], header: Optional[list[str]] = None) -> str:
    """
    Render rows as a bordered ASCII table.

    Args:
        rows: Table rows, one list of cell values per row
        header: Optional column titles

    Returns:
        The table as a string, without a trailing newline
    """
    columns = max([len(header or [])] + [len(row) for row in rows])
    table = Table(box=box.ASCII, show_header=header is not None)
    for index in range(columns):
        title = header[index] if header and index < len(header) else ""
        table.add_column(title, no_wrap=True)
    for row in rows:
        # Text cells so names with brackets are not read as console markup
        table.add_row(*(Text(_cell(value)) for value in row))

    console = Console(file=StringIO(), width=TABLE_WIDTH, color_system=None)
    console.print(table)
    return console.file.getvalue().rstrip("\n")


def sort_clients(clients: list[ConnectedClient]) -> list[ConnectedClient]:
    """Order clients online first, keeping the router's order otherwise."""
    return sorted(clients, key=lambda client: not client.online)


def format_clients_table(clients: list[ConnectedClient]) -> str:
    rows = [
        [
            client.ip,
            client.mac,
            client.online,
            client.iface,
            client.name,
            client.favorite,
            client.blocked,
            client.online_time,
            client.alive,
        ]
        for client in sort_clients(clients)
    ]
    logger.debug(f"Rendering {len(rows)} clients")
    return render_table(rows, header=CLIENT_COLUMNS)


def format_modem_info(info: ModemInfo) -> str:
    """Render one key/value block per modem, each headed ``#<n>``."""
    if not info.modems:
        return "No modems found"

    blocks = []
    for number, modem in enumerate(info.modems, start=1):
        rows = [
            ["ModemID", modem.modem_id],
            ["Name", modem.name],
            ["Imei", modem.imei],
            ["Carrier", modem.carrier],
            ["Up", modem.up],
            ["SIMStatus", modem.sim_status],
            ["Ports", ", ".join(modem.ports)],
            ["DataPort", modem.data_port],
            ["ControlPort", modem.control_port],
            ["QmiPort", modem.qmi_port],
            ["Bus", modem.bus],
            ["HwVersion", modem.hw_version],
            ["SimNum", modem.sim_num],
            ["Mnc", modem.mnc],
            ["Mcc", modem.mcc],
            ["Operators", ", ".join(modem.operators)],
        ]
        blocks.append(f"#{number}\n" + render_table(rows))
    return "\n".join(blocks)


def print_public_ip(public_ip: PublicIP, stream: Optional[TextIO] = None) -> None:
    print("server IP", public_ip.server_ip, file=stream or sys.stdout)


def print_internet_status(status: InternetStatus, stream: Optional[TextIO] = None) -> None:
    out = stream or sys.stdout
    print(f"Reachable: {_cell(status.reachable)}", file=out)
    print(f"Reboot flag: {_cell(status.reboot_flag)}", file=out)


def print_clients(clients: list[ConnectedClient], stream: Optional[TextIO] = None) -> None:
    print(format_clients_table(clients), file=stream or sys.stdout)


def print_modem_info(info: ModemInfo, stream: Optional[TextIO] = None) -> None:
    print(format_modem_info(info), file=stream or sys.stdout)


def print_error(error: Exception, debug: bool = False) -> None:
    """
    Print an error to stderr.

    Args:
        error: The exception that aborted the command
        debug: Whether debug mode is enabled
    """
    print(f"Error: {error}", file=sys.stderr)
    if debug:
        # Print full traceback in debug mode
        import traceback

        traceback.print_exc(file=sys.stderr)
