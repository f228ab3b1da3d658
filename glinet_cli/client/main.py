"""
Main GL.iNet Router Client
==========================

This module contains the client used by every command except ``auth``. It
wraps one authenticated requests Session and exposes one method per router
API endpoint.

"""

import logging
from typing import Optional, Union

from glinet_cli.client.http import RouterRequestHandler, create_router_session
from glinet_cli.client.parser import RouterResponseParser
from glinet_cli.models import ConnectedClient, InternetStatus, ModemInfo, PublicIP, SessionHandle

logger = logging.getLogger("glinet-cli")

PUBLIC_IP_PATH = "/cgi-bin/api/internet/public_ip/get"
REACHABLE_PATH = "/cgi-bin/api/internet/reachable"
CLIENT_LIST_PATH = "/cgi-bin/api/client/list"
MODEM_INFO_PATH = "/cgi-bin/api/modem/info"
MODEM_ENABLE_PATH = "/cgi-bin/api/modem/enable"
MODEM_AUTO_PATH = "/cgi-bin/api/modem/auto"

DEFAULT_MODEM_ID = "1"
DEFAULT_MODEM_BUS = "1-1.2"


class GlinetClient:
    """
    Client for the GL.iNet router management API.

    Built from a SessionHandle, so the caller decides whether the token comes
    from a fresh login or from the credential store:

    >>> handle = resolve_session(load(default_config_path()))
    >>> with GlinetClient(handle) as client:
    ...     print(client.get_public_ip().server_ip)
    """

    def __init__(self, handle: SessionHandle, timeout: Optional[Union[float, tuple]] = None):
        """
        Initialize the client.

        Args:
            handle: Authenticated session handle
            timeout: Optional request timeout in seconds, none by default
        """
        self.handle = handle
        self.timeout = timeout
        self.session = create_router_session(handle)
        self.request_handler = RouterRequestHandler(self.session, handle.base_url, timeout=timeout)
        self.parser = RouterResponseParser()

        logger.info(f"GlinetClient initialized for {handle.base_address}")

    @property
    def base_url(self) -> str:
        return self.handle.base_url

    def get_public_ip(self) -> PublicIP:
        """Return the router's public IP address."""
        data = self.request_handler.request_json("GET", PUBLIC_IP_PATH)
        return self.parser.parse_public_ip(data)

    def check_internet(self) -> InternetStatus:
        """Ask the router whether the internet is reachable."""
        data = self.request_handler.request_json("GET", REACHABLE_PATH)
        return self.parser.parse_internet_status(data)

    def get_clients(self) -> list[ConnectedClient]:
        """Return the devices known to the router."""
        data = self.request_handler.request_json("GET", CLIENT_LIST_PATH)
        return self.parser.parse_clients(data)

    def get_modem_info(self) -> ModemInfo:
        """Return the status of attached cellular modems."""
        data = self.request_handler.request_json("POST", MODEM_INFO_PATH)
        return self.parser.parse_modem_info(data)

    def set_modem_enabled(self, enabled: bool) -> None:
        """Turn the modem on or off."""
        form = {"disable": "false" if enabled else "true"}
        logger.info(f"Turning modem {'on' if enabled else 'off'}")
        self.request_handler.request("POST", MODEM_ENABLE_PATH, data=form)

    def set_modem_auto(self, modem_id: str = DEFAULT_MODEM_ID, bus: str = DEFAULT_MODEM_BUS) -> None:
        """Switch the modem to automatic dialing."""
        logger.info(f"Enabling auto dial for modem {modem_id} on bus {bus}")
        self.request_handler.request("POST", MODEM_AUTO_PATH, data={"modem_id": modem_id, "bus": bus})

    def close(self) -> None:
        """Clean up resources."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


# Export main client
__all__ = ["GlinetClient"]
