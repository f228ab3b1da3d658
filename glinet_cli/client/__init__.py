"""
Router API client package for glinet-cli.

- auth.py: login and session bootstrap
- http.py: requests Session and request handling
- parser.py: JSON response decoding
- main.py: GlinetClient facade
"""

from .auth import authenticate_and_persist, login, resolve_session
from .main import GlinetClient

__all__ = ["GlinetClient", "authenticate_and_persist", "login", "resolve_session"]
