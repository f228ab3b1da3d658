"""
Session bootstrap for glinet-cli
================================

This module turns a router address into a ready-to-use SessionHandle, either
by logging in with the admin password or by reading the token saved by a
previous ``glinet auth``.

There is no token refresh: an expired token surfaces as an HTTP error from
whichever API call uses it, and the user runs ``glinet auth`` again.

"""

import json
import logging
from typing import Optional, Union

import requests

from glinet_cli import config
from glinet_cli.client.http import create_router_session
from glinet_cli.exceptions import GlinetAuthenticationError, wrap_connection_error
from glinet_cli.models import CredentialStore, RouterCredential, SessionHandle

logger = logging.getLogger("glinet-cli")

LOGIN_PATH = "/api/router/login"


def extract_token(response: requests.Response, address: str) -> str:
    """
    Pull the session token out of a login response.

    Args:
        response: Response of the login request
        address: Router address, for error context

    Returns:
        The token string

    Raises:
        GlinetAuthenticationError: If the body has no usable token
    """
    try:
        data = json.loads(response.text)
    except (json.JSONDecodeError, TypeError) as e:
        raise GlinetAuthenticationError(
            f"Login to {address} failed: response is not JSON",
            details={"address": address, "status_code": response.status_code, "response": str(response.text)[:200]},
        ) from e

    token = data.get("token") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        raise GlinetAuthenticationError(
            f"Login to {address} failed: no token in response, check the password",
            details={"address": address, "status_code": response.status_code},
        )
    return token


def login(
    address: str,
    password: str,
    timeout: Optional[Union[float, tuple]] = None,
    session: Optional[requests.Session] = None,
) -> SessionHandle:
    """
    Log in to the router and return a session handle.

    Performs exactly one POST to the login endpoint. Nothing is persisted.

    Args:
        address: Router IP address
        password: Admin password
        timeout: Optional requests timeout, none by default
        session: Optional session to send the request with

    Returns:
        SessionHandle carrying the freshly issued token

    Raises:
        GlinetConnectionError: If the router cannot be reached
        GlinetTimeoutError: If the request times out
        GlinetAuthenticationError: If the response carries no token
    """
    owns_session = session is None
    if session is None:
        session = create_router_session()

    url = f"https://{address}{LOGIN_PATH}"
    logger.debug(f"📤 Login request to {url}")

    try:
        response = session.post(url, data={"pwd": password}, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error(f"Login request to {address} failed: {e}")
        raise wrap_connection_error(e, address, LOGIN_PATH) from e
    finally:
        if owns_session:
            session.close()

    logger.debug(f"📥 Login response: HTTP {response.status_code}")
    token = extract_token(response, address)
    logger.info(f"Authenticated against {address}")
    return SessionHandle(base_address=address, auth_token=token)


def authenticate_and_persist(
    store: CredentialStore,
    address: str,
    password: str,
    path: config.PathLike,
    timeout: Optional[Union[float, tuple]] = None,
    session: Optional[requests.Session] = None,
) -> CredentialStore:
    """
    Log in, record the credential in the store and write the store to disk.

    If any step fails the file at ``path`` is left as it was.

    Returns:
        The updated store, as saved
    """
    handle = login(address, password, timeout=timeout, session=session)
    updated = config.upsert(store, RouterCredential(address=address, password=password, token=handle.auth_token))
    config.save(updated, path)
    return updated


def resolve_session(store: CredentialStore) -> SessionHandle:
    """
    Build a session handle from the single stored router, without network I/O.

    Raises:
        AmbiguousSelectionError: If the store holds zero or several routers
    """
    credential = config.resolve_single(store)
    logger.debug(f"Using stored session for {credential.address}")
    return SessionHandle(base_address=credential.address, auth_token=credential.token)


__all__ = ["authenticate_and_persist", "extract_token", "login", "resolve_session"]
