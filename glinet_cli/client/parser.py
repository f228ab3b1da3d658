"""
Response Parser for glinet-cli
==============================

This module decodes router API JSON payloads into the dataclasses in
glinet_cli.models. Fields missing from a payload keep their defaults.

"""

import logging
from typing import Any

from glinet_cli.exceptions import GlinetParsingError
from glinet_cli.models import ConnectedClient, InternetStatus, Modem, ModemInfo, PublicIP

logger = logging.getLogger("glinet-cli")

# JSON key -> ConnectedClient attribute
CLIENT_FIELDS = {
    "remote": "remote",
    "mac": "mac",
    "favorite": "favorite",
    "ip": "ip",
    "up": "up",
    "down": "down",
    "total_up": "total_up",
    "total_down": "total_down",
    "qos_up": "qos_up",
    "qos_down": "qos_down",
    "blocked": "blocked",
    "iface": "iface",
    "name": "name",
    "online_time": "online_time",
    "alive": "alive",
    "new_online": "new_online",
    "online": "online",
    "vendor": "vendor",
    "node": "node",
}

# JSON key -> Modem attribute
MODEM_FIELDS = {
    "ports": "ports",
    "modem_id": "modem_id",
    "data_port": "data_port",
    "control_port": "control_port",
    "qmi_port": "qmi_port",
    "name": "name",
    "IMEI": "imei",
    "bus": "bus",
    "hw_version": "hw_version",
    "sim_num": "sim_num",
    "mnc": "mnc",
    "mcc": "mcc",
    "carrier": "carrier",
    "up": "up",
    "SIM_status": "sim_status",
    "operators": "operators",
}


def _pick(data: dict[str, Any], mapping: dict[str, str]) -> dict[str, Any]:
    return {attr: data[key] for key, attr in mapping.items() if key in data and data[key] is not None}


def _objects(data: dict[str, Any], key: str, operation: str) -> list[dict[str, Any]]:
    items = data.get(key) or []
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise GlinetParsingError(
            f"Unexpected '{key}' value in {operation} response",
            details={"operation": operation, "response_type": type(items).__name__},
        )
    return items


class RouterResponseParser:
    """Parses router API responses into structured data."""

    def parse_public_ip(self, data: dict[str, Any]) -> PublicIP:
        return PublicIP(server_ip=data.get("serverip", ""))

    def parse_internet_status(self, data: dict[str, Any]) -> InternetStatus:
        return InternetStatus(
            reachable=bool(data.get("reachable", False)),
            reboot_flag=bool(data.get("reboot_flag", False)),
        )

    def parse_clients(self, data: dict[str, Any]) -> list[ConnectedClient]:
        """Parse the client list payload."""
        clients = [ConnectedClient(**_pick(item, CLIENT_FIELDS)) for item in _objects(data, "clients", "client list")]
        logger.debug(f"Parsed {len(clients)} clients")
        return clients

    def parse_modem_info(self, data: dict[str, Any]) -> ModemInfo:
        """Parse the modem info payload."""
        modems = [Modem(**_pick(item, MODEM_FIELDS)) for item in _objects(data, "modems", "modem info")]
        logger.debug(f"Parsed {len(modems)} modems")
        return ModemInfo(
            passthrough=bool(data.get("passthrough", False)),
            hint_modify_wifi_channel=data.get("hint_modify_wifi_channel", 0),
            modems=modems,
        )
