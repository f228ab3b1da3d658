"""
Data Models for glinet-cli
==========================

This module contains all dataclasses used by glinet-cli: the persisted
credential records, the ephemeral session handle, and the decoded responses
of the router API endpoints.

"""

from dataclasses import dataclass, field

CONFIG_VERSION_V1 = "v1"
CURRENT_CONFIG_VERSION = CONFIG_VERSION_V1


@dataclass
class RouterCredential:
    """
    A router known to the credential store.

    Attributes:
        address: Router IP address, unique within the store
        password: Plaintext admin password used to log in again
        token: Session token issued by the router's login endpoint
    """

    address: str
    password: str
    token: str

    def to_dict(self) -> dict:
        """Convert to the on-disk representation."""
        return {"addr": self.address, "password": self.password, "token": self.token}

    @classmethod
    def from_dict(cls, data: dict) -> "RouterCredential":
        """
        Build from the on-disk representation.

        Raises:
            KeyError: If "addr" is missing
            TypeError: If a field is not a string
        """
        fields = {"addr": data["addr"], "password": data.get("password", ""), "token": data.get("token", "")}
        for key, value in fields.items():
            if not isinstance(value, str):
                raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
        return cls(address=fields["addr"], password=fields["password"], token=fields["token"])


@dataclass
class CredentialStore:
    """
    Versioned collection of router credentials.

    Records are kept in insertion order and there is at most one record per
    address. Use ``glinet_cli.config.upsert`` to add or replace records.
    """

    version: str = CURRENT_CONFIG_VERSION
    routers: list[RouterCredential] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to the on-disk representation."""
        return {"v": self.version, "routers": [router.to_dict() for router in self.routers]}


@dataclass(frozen=True)
class SessionHandle:
    """
    Authenticated request context for a single command invocation.

    Never persisted. Built either from a fresh login or from a stored token.
    """

    base_address: str
    auth_token: str

    @property
    def base_url(self) -> str:
        """HTTPS base URL of the router."""
        return f"https://{self.base_address}"

    def __repr__(self) -> str:
        return f"SessionHandle(base_address={self.base_address!r}, auth_token='***')"


@dataclass
class PublicIP:
    """Public address as seen by the router."""

    server_ip: str = ""


@dataclass
class InternetStatus:
    """Result of the router's internet reachability check."""

    reachable: bool = False
    reboot_flag: bool = False


@dataclass
class ConnectedClient:
    """A device listed by the router's client list endpoint."""

    remote: bool = False
    mac: str = ""
    favorite: bool = False
    ip: str = ""
    up: str = ""
    down: str = ""
    total_up: str = ""
    total_down: str = ""
    qos_up: str = ""
    qos_down: str = ""
    blocked: bool = False
    iface: str = ""
    name: str = ""
    online_time: str = ""
    alive: str = ""
    new_online: bool = False
    online: bool = False
    vendor: str = ""
    node: str = ""


@dataclass
class Modem:
    """A cellular modem attached to the router."""

    ports: list[str] = field(default_factory=list)
    modem_id: int = 0
    data_port: str = ""
    control_port: str = ""
    qmi_port: str = ""
    name: str = ""
    imei: str = ""
    bus: str = ""
    hw_version: str = ""
    sim_num: str = ""
    mnc: str = ""
    mcc: str = ""
    carrier: str = ""
    up: str = ""
    sim_status: int = 0
    operators: list[str] = field(default_factory=list)


@dataclass
class ModemInfo:
    """Modem information block returned by the router."""

    passthrough: bool = False
    hint_modify_wifi_channel: int = 0
    modems: list[Modem] = field(default_factory=list)


# Export all models
__all__ = [
    "CONFIG_VERSION_V1",
    "CURRENT_CONFIG_VERSION",
    "ConnectedClient",
    "CredentialStore",
    "InternetStatus",
    "Modem",
    "ModemInfo",
    "PublicIP",
    "RouterCredential",
    "SessionHandle",
]
