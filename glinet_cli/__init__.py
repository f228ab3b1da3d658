"""
GL.iNet Router CLI Library
==========================

Python client and command-line tool for the local HTTP management API of
GL.iNet routers.

The library stores the routers you have logged in to in a small JSON file
(``~/.config/glinet/config.json``) and reuses the saved session token for
every later command.

Quick Start:
    Log in once and save the token:

    >>> from glinet_cli import authenticate_and_persist, default_config_path, load
    >>> path = default_config_path()
    >>> store = authenticate_and_persist(load(path), "192.168.8.1", "your_password", path)

    Query the router with the stored token:

    >>> from glinet_cli import GlinetClient, resolve_session
    >>> with GlinetClient(resolve_session(load(path))) as client:
    ...     print(client.get_public_ip().server_ip)

Error Handling:
    All operations raise subclasses of GlinetError:

    >>> from glinet_cli import GlinetAuthenticationError
    >>> try:
    ...     login("192.168.8.1", "wrong_password")
    ... except GlinetAuthenticationError as e:
    ...     print(f"Authentication failed: {e}")

The router password is stored in plaintext, protected only by the file mode.

This is an unofficial tool not affiliated with GL.iNet.

License: MIT
"""

from .config import default_config_path, load, resolve_single, save, upsert
from .client import GlinetClient, authenticate_and_persist, login, resolve_session
from .exceptions import (
    AmbiguousSelectionError,
    ConfigIOError,
    CorruptConfigError,
    GlinetAuthenticationError,
    GlinetConnectionError,
    GlinetError,
    GlinetHTTPError,
    GlinetParsingError,
    GlinetTimeoutError,
    UnsupportedVersionError,
)
from .models import CredentialStore, RouterCredential, SessionHandle

# Version information
__version__ = "1.0.0"
__license__ = "MIT"

# Public API
__all__ = [
    "AmbiguousSelectionError",
    "ConfigIOError",
    "CorruptConfigError",
    "CredentialStore",
    "GlinetAuthenticationError",
    "GlinetClient",
    "GlinetConnectionError",
    "GlinetError",
    "GlinetHTTPError",
    "GlinetParsingError",
    "GlinetTimeoutError",
    "RouterCredential",
    "SessionHandle",
    "UnsupportedVersionError",
    "__license__",
    "__version__",
    "authenticate_and_persist",
    "default_config_path",
    "load",
    "login",
    "resolve_session",
    "resolve_single",
    "save",
    "upsert",
]
