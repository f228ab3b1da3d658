import json
from unittest.mock import Mock, patch

import pytest

from glinet_cli.cli import logging_setup
from glinet_cli.models import CredentialStore, RouterCredential


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep the user's real config and password out of every test."""
    monkeypatch.delenv("GLINET_CONFIG", raising=False)
    monkeypatch.delenv("GL_INET_PASSWORD", raising=False)
    logging_setup.reset_logging()
    yield
    logging_setup.reset_logging()


@pytest.fixture
def config_path(tmp_path):
    """Config file location inside a not-yet-existing directory."""
    return tmp_path / "glinet" / "config.json"


@pytest.fixture
def single_router_store():
    return CredentialStore(routers=[RouterCredential("192.168.8.1", "secret", "abc123")])


@pytest.fixture
def two_router_store():
    return CredentialStore(
        routers=[
            RouterCredential("192.168.8.1", "secret", "abc123"),
            RouterCredential("192.168.9.1", "other", "def456"),
        ]
    )


@pytest.fixture
def mock_router_responses():
    """Fixture providing router API responses as returned by the firmware."""
    return {
        "login_success": json.dumps({"token": "abc123"}),
        "login_failure": json.dumps({"code": -1}),
        "public_ip": json.dumps({"code": 0, "serverip": "203.0.113.7"}),
        "reachable": json.dumps({"code": 0, "reachable": True, "reboot_flag": False}),
        "clients": json.dumps(
            {
                "code": 0,
                "clients": [
                    {
                        "remote": False,
                        "mac": "AA:BB:CC:DD:EE:01",
                        "favorite": False,
                        "ip": "192.168.8.101",
                        "up": "0",
                        "down": "0",
                        "total_up": "1024",
                        "total_down": "4096",
                        "qos_up": "0",
                        "qos_down": "0",
                        "blocked": False,
                        "iface": "5G",
                        "name": "laptop",
                        "online_time": "0",
                        "alive": "0",
                        "new_online": False,
                        "online": False,
                        "vendor": "Intel",
                        "node": "",
                    },
                    {
                        "mac": "AA:BB:CC:DD:EE:02",
                        "ip": "192.168.8.102",
                        "iface": "2.4G",
                        "name": "phone",
                        "online": True,
                        "favorite": True,
                        "online_time": "3600",
                        "alive": "12",
                    },
                ],
            }
        ),
        "modem_info": json.dumps(
            {
                "code": 0,
                "passthrough": False,
                "hint_modify_wifi_channel": 0,
                "modems": [
                    {
                        "ports": ["/dev/ttyUSB0", "/dev/ttyUSB1"],
                        "modem_id": 1,
                        "data_port": "/dev/ttyUSB2",
                        "control_port": "/dev/ttyUSB3",
                        "qmi_port": "/dev/cdc-wdm0",
                        "name": "Quectel EC25",
                        "IMEI": "860000000000001",
                        "bus": "1-1.2",
                        "hw_version": "EC25",
                        "sim_num": "1",
                        "mnc": "01",
                        "mcc": "250",
                        "carrier": "ExampleTel",
                        "up": "on",
                        "SIM_status": 0,
                        "operators": ["ExampleTel", "OtherNet"],
                    }
                ],
            }
        ),
        "empty_ok": json.dumps({"code": 0}),
    }


@pytest.fixture
def mock_login_post(mock_router_responses):
    """Mock a successful login round-trip."""
    with patch("requests.Session.post") as mock_post:
        mock_post.return_value = Mock(status_code=200, text=mock_router_responses["login_success"])
        yield mock_post
