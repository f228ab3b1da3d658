"""
Credential Store for glinet-cli
===============================

This module owns the on-disk configuration file holding the routers the user
has authenticated against. The file is JSON:

    {"v": "v1", "routers": [{"addr": "192.168.8.1", "password": "...", "token": "..."}]}

The store is threaded explicitly through ``load`` / ``upsert`` / ``save`` with
the path passed in, so nothing here touches the home directory unless asked.

The router password is stored in plaintext. Only the file mode (0600)
protects it.

License: MIT
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional, Union

from glinet_cli.exceptions import (
    AmbiguousSelectionError,
    ConfigIOError,
    CorruptConfigError,
    UnsupportedVersionError,
)
from glinet_cli.models import CONFIG_VERSION_V1, CURRENT_CONFIG_VERSION, CredentialStore, RouterCredential

logger = logging.getLogger("glinet-cli")

CONFIG_ENV_VAR = "GLINET_CONFIG"
DEFAULT_CONFIG_FILE = Path(".config") / "glinet" / "config.json"
CONFIG_FILE_MODE = 0o600

PathLike = Union[str, "os.PathLike[str]"]


def default_config_path() -> Path:
    """
    Return the config file location.

    ``$GLINET_CONFIG`` wins when set, otherwise ``~/.config/glinet/config.json``.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / DEFAULT_CONFIG_FILE


def _migrate_unversioned(document: dict[str, Any]) -> dict[str, Any]:
    """Lift the pre-versioning multi-router layout to v1."""
    migrated = dict(document)
    migrated["v"] = CONFIG_VERSION_V1
    return migrated


# Converters from a legacy version tag to the next version. ``None`` is the
# unversioned multi-router document written before the "v" key existed.
_MIGRATIONS: dict[Optional[str], Callable[[dict[str, Any]], dict[str, Any]]] = {
    None: _migrate_unversioned,
}

SUPPORTED_VERSIONS = (CONFIG_VERSION_V1,)


def _corrupt(path: Path, reason: str) -> CorruptConfigError:
    return CorruptConfigError(
        f"Config file {path} is corrupted. Check the file or delete it",
        details={"path": str(path), "parse_error": reason},
    )


def _migrate(document: dict[str, Any], path: Path) -> dict[str, Any]:
    """Apply legacy converters until the document reaches a supported version."""
    while document.get("v") not in SUPPORTED_VERSIONS:
        version = document.get("v")
        converter = _MIGRATIONS.get(version) if version is None or isinstance(version, str) else None
        if converter is None or (version is None and "routers" not in document):
            raise UnsupportedVersionError(
                "Unsupported config version",
                details={"path": str(path), "version": version, "supported": list(SUPPORTED_VERSIONS)},
            )
        logger.info(f"Migrating config {path} from version {version!r}")
        document = converter(document)
    return document


def load(path: PathLike) -> CredentialStore:
    """
    Load the credential store from ``path``.

    Args:
        path: Location of the config file

    Returns:
        The parsed store, or an empty store when the file does not exist

    Raises:
        CorruptConfigError: If the file exists but cannot be parsed
        UnsupportedVersionError: If the file has an unknown schema version
        ConfigIOError: If the file exists but cannot be read
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        logger.debug(f"No config file at {path}, starting with an empty store")
        return CredentialStore()
    except OSError as e:
        raise ConfigIOError(
            f"Unable to read config file {path}",
            details={"path": str(path), "original_error": str(e)},
        ) from e

    try:
        document = json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise _corrupt(path, str(e)) from e

    if not isinstance(document, dict):
        raise _corrupt(path, "top-level value is not an object")

    document = _migrate(document, path)

    routers = document.get("routers")
    if routers is None:
        routers = []
    if not isinstance(routers, list):
        raise _corrupt(path, "'routers' is not a list")

    try:
        credentials = [RouterCredential.from_dict(entry) for entry in routers]
    except (KeyError, TypeError, AttributeError) as e:
        raise _corrupt(path, f"malformed router entry: {e}") from e

    store = CredentialStore(version=document["v"])
    for credential in credentials:
        store = upsert(store, credential)

    logger.debug(f"Loaded {len(store.routers)} router(s) from {path}")
    return store


def upsert(store: CredentialStore, credential: RouterCredential) -> CredentialStore:
    """
    Insert or replace the credential for ``credential.address``.

    An existing record keeps its position and gets the new password and
    token. A new address is appended. ``store`` itself is not modified.
    """
    routers = []
    replaced = False
    for router in store.routers:
        if router.address == credential.address:
            routers.append(RouterCredential(router.address, credential.password, credential.token))
            replaced = True
        else:
            routers.append(RouterCredential(router.address, router.password, router.token))

    if not replaced:
        routers.append(RouterCredential(credential.address, credential.password, credential.token))

    return CredentialStore(version=CURRENT_CONFIG_VERSION, routers=routers)


def save(store: CredentialStore, path: PathLike) -> None:
    """
    Write the whole store to ``path`` with owner-only permissions.

    The content goes to a temporary file next to the target which then
    replaces it, so the old file is either untouched or fully replaced.

    Raises:
        ConfigIOError: On any filesystem failure
    """
    path = Path(path)
    payload = json.dumps(store.to_dict(), indent=2) + "\n"

    tmp_path = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.chmod(tmp_path, CONFIG_FILE_MODE)
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as e:
        raise ConfigIOError(
            f"Unable to write config file {path}",
            details={"path": str(path), "original_error": str(e)},
        ) from e
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)

    logger.debug(f"Saved {len(store.routers)} router(s) to {path}")


def resolve_single(store: CredentialStore) -> RouterCredential:
    """
    Return the only router in the store.

    Selecting among several stored routers is not supported.

    Raises:
        AmbiguousSelectionError: If the store holds zero or several routers
    """
    count = len(store.routers)
    if count == 1:
        return store.routers[0]

    if count == 0:
        raise AmbiguousSelectionError(
            "No router configured. Run 'glinet auth' first",
            details={"count": 0},
        )
    raise AmbiguousSelectionError(
        "Several routers configured, selecting one of them is not implemented",
        details={"count": count, "addresses": [router.address for router in store.routers]},
    )


__all__ = [
    "CONFIG_ENV_VAR",
    "SUPPORTED_VERSIONS",
    "default_config_path",
    "load",
    "resolve_single",
    "save",
    "upsert",
]
