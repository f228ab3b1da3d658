"""
HTTP Request Handling for glinet-cli
====================================

This module builds the requests Session used to talk to the router and
sends authenticated API requests. Every call is a single round-trip: there
is no retry logic.

"""

import json
import logging
from typing import Any, Optional, Union

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from glinet_cli.exceptions import GlinetHTTPError, GlinetParsingError, wrap_connection_error
from glinet_cli.models import SessionHandle

# Routers serve the API over HTTPS with a self-signed certificate
urllib3.disable_warnings(InsecureRequestWarning)

logger = logging.getLogger("glinet-cli")

USER_AGENT = "glinet-cli/1.0.0"


def create_router_session(handle: Optional[SessionHandle] = None) -> requests.Session:
    """
    Create a requests Session configured for the router.

    Args:
        handle: Optional session handle; its token is sent as the
            Authorization header on every request

    Returns:
        requests.Session with TLS verification disabled
    """
    session = requests.Session()
    session.verify = False
    session.headers.update(
        {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
    )
    if handle is not None:
        session.headers["Authorization"] = handle.auth_token

    logger.debug("🔧 Created router session")
    return session


class RouterRequestHandler:
    """Sends authenticated requests to a router and decodes JSON responses."""

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        timeout: Optional[Union[float, tuple]] = None,
    ):
        """
        Initialize the request handler.

        Args:
            session: HTTP session carrying the Authorization header
            base_url: Base URL for the router, e.g. https://192.168.8.1
            timeout: Optional request timeout, none by default
        """
        self.session = session
        self.base_url = base_url
        self.timeout = timeout

    @property
    def host(self) -> str:
        return self.base_url.split("://", 1)[-1]

    def request(self, method: str, path: str, data: Optional[dict[str, str]] = None) -> requests.Response:
        """
        Send one request and check its status.

        Raises:
            GlinetConnectionError: On transport failure
            GlinetHTTPError: If the status is not 200
        """
        logger.debug(f"📤 {method} {path}")
        try:
            response = self.session.request(method, f"{self.base_url}{path}", data=data, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise wrap_connection_error(e, self.host, path) from e

        logger.debug(f"📥 {path}: HTTP {response.status_code}")
        if response.status_code != 200:
            response_text = response.text[:500] if isinstance(response.text, str) else ""
            raise GlinetHTTPError(
                f"Unexpected status code {response.status_code} for {path}",
                status_code=response.status_code,
                details={"operation": path, "response_text": response_text},
            )
        return response

    def request_json(self, method: str, path: str, data: Optional[dict[str, str]] = None) -> dict[str, Any]:
        """
        Send one request and decode the JSON object it returns.

        Raises:
            GlinetParsingError: If the body is not a JSON object
        """
        response = self.request(method, path, data)
        try:
            payload = json.loads(response.text)
        except (json.JSONDecodeError, TypeError) as e:
            raise GlinetParsingError(
                f"Invalid JSON in response to {path}",
                details={"operation": path, "parse_error": str(e), "response": str(response.text)[:200]},
            ) from e

        if not isinstance(payload, dict):
            raise GlinetParsingError(
                f"Unexpected response shape for {path}",
                details={"operation": path, "response": str(response.text)[:200]},
            )
        return payload
