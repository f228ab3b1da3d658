"""Tests for the credential store."""

import json
import os
import stat
from unittest.mock import patch

import pytest

from glinet_cli import config
from glinet_cli.exceptions import (
    AmbiguousSelectionError,
    ConfigIOError,
    CorruptConfigError,
    UnsupportedVersionError,
)
from glinet_cli.models import CURRENT_CONFIG_VERSION, CredentialStore, RouterCredential


@pytest.mark.unit
class TestLoad:
    """Test loading the config file."""

    def test_missing_file_gives_empty_store(self, config_path):
        store = config.load(config_path)

        assert store.version == CURRENT_CONFIG_VERSION
        assert store.routers == []
        assert not config_path.exists()

    def test_load_v1_file(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(
            json.dumps({"v": "v1", "routers": [{"addr": "192.168.8.1", "password": "secret", "token": "abc123"}]})
        )

        store = config.load(config_path)

        assert store.version == "v1"
        assert store.routers == [RouterCredential("192.168.8.1", "secret", "abc123")]

    def test_corrupt_file_raises_and_is_untouched(self, config_path):
        config_path.parent.mkdir(parents=True)
        original = b'{"v": "v1", "routers": [ broken'
        config_path.write_bytes(original)

        with pytest.raises(CorruptConfigError, match="delete it"):
            config.load(config_path)

        assert config_path.read_bytes() == original

    @pytest.mark.parametrize(
        "original",
        [
            b'{"v": "v1", "routers": [\xff\xfe]}',
            b"\xff\xfe\x00\x00",
            b'{"v": "v1", "routers": [{"addr": "192.168.8.\xc3"}]}',
        ],
    )
    def test_invalid_utf8_is_corrupt(self, config_path, original):
        config_path.parent.mkdir(parents=True)
        config_path.write_bytes(original)

        with pytest.raises(CorruptConfigError, match="delete it"):
            config.load(config_path)

        assert config_path.read_bytes() == original

    def test_deeply_nested_document_is_corrupt(self, config_path):
        config_path.parent.mkdir(parents=True)
        original = "[" * 100000 + "]" * 100000
        config_path.write_text(original)

        with pytest.raises(CorruptConfigError, match="delete it"):
            config.load(config_path)

        assert config_path.read_text() == original

    @pytest.mark.parametrize(
        "content",
        [
            "[1, 2, 3]",
            '{"v": "v1", "routers": {"addr": "192.168.8.1"}}',
            '{"v": "v1", "routers": {}}',
            '{"v": "v1", "routers": ""}',
            '{"v": "v1", "routers": 0}',
            '{"v": "v1", "routers": [{"password": "no-address"}]}',
            '{"v": "v1", "routers": ["192.168.8.1"]}',
            '{"v": "v1", "routers": [{"addr": 123, "password": null, "token": ["x"]}]}',
            '{"v": "v1", "routers": [{"addr": "192.168.8.1", "password": "pw", "token": null}]}',
            '{"v": "v1", "routers": [{"addr": "192.168.8.1", "password": 1234, "token": "t"}]}',
        ],
    )
    def test_malformed_structure_is_corrupt(self, config_path, content):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(content)

        with pytest.raises(CorruptConfigError, match="delete it"):
            config.load(config_path)

        assert config_path.read_text() == content

    def test_null_routers_is_empty_store(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('{"v": "v1", "routers": null}')

        assert config.load(config_path).routers == []

    def test_missing_password_and_token_default_to_empty(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('{"v": "v1", "routers": [{"addr": "192.168.8.1"}]}')

        assert config.load(config_path).routers == [RouterCredential("192.168.8.1", "", "")]

    def test_unknown_version_rejected(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({"v": "v2", "routers": []}))

        with pytest.raises(UnsupportedVersionError) as exc_info:
            config.load(config_path)

        assert exc_info.value.details["version"] == "v2"

    def test_object_without_version_or_routers_rejected(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({"token": "abc123"}))

        with pytest.raises(UnsupportedVersionError):
            config.load(config_path)

    def test_unversioned_multi_router_file_is_migrated(self, config_path):
        config_path.parent.mkdir(parents=True)
        original = json.dumps({"routers": [{"addr": "192.168.8.1", "password": "secret", "token": "abc123"}]})
        config_path.write_text(original)

        store = config.load(config_path)

        assert store.version == "v1"
        assert store.routers == [RouterCredential("192.168.8.1", "secret", "abc123")]
        # Migration happens in memory only
        assert config_path.read_text() == original

    def test_duplicate_addresses_collapse_on_load(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(
            json.dumps(
                {
                    "v": "v1",
                    "routers": [
                        {"addr": "192.168.8.1", "password": "old", "token": "t1"},
                        {"addr": "192.168.8.1", "password": "new", "token": "t2"},
                    ],
                }
            )
        )

        store = config.load(config_path)

        assert store.routers == [RouterCredential("192.168.8.1", "new", "t2")]


@pytest.mark.unit
class TestUpsert:
    """Test replace-or-append by address."""

    def test_upsert_replaces_existing_address(self, two_router_store):
        first = config.upsert(two_router_store, RouterCredential("192.168.8.1", "p1", "t1"))
        second = config.upsert(first, RouterCredential("192.168.8.1", "p2", "t2"))

        matching = [r for r in second.routers if r.address == "192.168.8.1"]
        assert matching == [RouterCredential("192.168.8.1", "p2", "t2")]
        assert len(second.routers) == 2
        # Position is preserved
        assert second.routers[0].address == "192.168.8.1"
        assert second.routers[1] == RouterCredential("192.168.9.1", "other", "def456")

    def test_upsert_appends_new_address(self, two_router_store):
        updated = config.upsert(two_router_store, RouterCredential("10.0.0.1", "pw", "tok"))

        assert len(updated.routers) == 3
        assert updated.routers[:2] == two_router_store.routers
        assert updated.routers[2] == RouterCredential("10.0.0.1", "pw", "tok")

    def test_upsert_does_not_mutate_input(self, single_router_store):
        config.upsert(single_router_store, RouterCredential("192.168.8.1", "changed", "changed"))

        assert single_router_store.routers == [RouterCredential("192.168.8.1", "secret", "abc123")]

    def test_upsert_into_empty_store(self):
        updated = config.upsert(CredentialStore(), RouterCredential("192.168.8.1", "secret", "abc123"))

        assert updated.version == CURRENT_CONFIG_VERSION
        assert updated.routers == [RouterCredential("192.168.8.1", "secret", "abc123")]


@pytest.mark.unit
class TestSave:
    """Test writing the config file."""

    def test_save_creates_directories_and_round_trips(self, config_path, two_router_store):
        config.save(two_router_store, config_path)

        assert config.load(config_path) == two_router_store

    def test_saved_file_layout(self, config_path, single_router_store):
        config.save(single_router_store, config_path)

        assert json.loads(config_path.read_text()) == {
            "v": "v1",
            "routers": [{"addr": "192.168.8.1", "password": "secret", "token": "abc123"}],
        }

    @pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
    def test_saved_file_is_owner_only(self, config_path, single_router_store):
        config.save(single_router_store, config_path)

        assert stat.S_IMODE(config_path.stat().st_mode) == 0o600

    def test_save_leaves_no_temp_files(self, config_path, single_router_store):
        config.save(single_router_store, config_path)
        config.save(single_router_store, config_path)

        assert [p.name for p in config_path.parent.iterdir()] == ["config.json"]

    def test_failed_replace_raises_and_keeps_old_file(self, config_path, single_router_store, two_router_store):
        config.save(single_router_store, config_path)
        before = config_path.read_bytes()

        with patch("glinet_cli.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(ConfigIOError, match="Unable to write"):
                config.save(two_router_store, config_path)

        assert config_path.read_bytes() == before
        assert [p.name for p in config_path.parent.iterdir()] == ["config.json"]

    def test_unwritable_parent_raises_config_io_error(self, tmp_path, single_router_store):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")

        with pytest.raises(ConfigIOError):
            config.save(single_router_store, blocker / "config.json")


@pytest.mark.unit
class TestResolveSingle:
    """Test picking the one configured router."""

    def test_single_router(self, single_router_store):
        credential = config.resolve_single(single_router_store)

        assert credential == RouterCredential("192.168.8.1", "secret", "abc123")

    def test_empty_store(self):
        with pytest.raises(AmbiguousSelectionError, match="glinet auth"):
            config.resolve_single(CredentialStore())

    def test_several_routers(self, two_router_store):
        with pytest.raises(AmbiguousSelectionError) as exc_info:
            config.resolve_single(two_router_store)

        assert exc_info.value.details["count"] == 2
        assert exc_info.value.details["addresses"] == ["192.168.8.1", "192.168.9.1"]


@pytest.mark.unit
class TestDefaultConfigPath:
    def test_default_location(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config.Path, "home", classmethod(lambda cls: tmp_path))

        assert config.default_config_path() == tmp_path / ".config" / "glinet" / "config.json"

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GLINET_CONFIG", str(tmp_path / "custom.json"))

        assert config.default_config_path() == tmp_path / "custom.json"
