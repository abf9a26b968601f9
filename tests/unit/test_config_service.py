"""Unit tests for the deployment config store."""

import pytest

from hostdeploy.exceptions import ConfigError, ConfigMissingError
from hostdeploy.services.config_service import ConfigStore


class TestConfigStore:
    """Reading and writing single config values."""

    def test_write_then_read_strips_whitespace(self, tmp_path):
        store = ConfigStore(tmp_path)
        store.write("config/common/route", "  https://example.com\n")

        assert (tmp_path / "config" / "common" / "route").is_file()
        assert store.read("config/common/route") == "https://example.com"

    @pytest.mark.parametrize(
        "value",
        ["a\rb", "line1\r\nline2", "line1\nline2\n", "\r\n  padded\t\r\n", "tab\there"],
    )
    def test_round_trip_keeps_inner_characters(self, tmp_path, value):
        store = ConfigStore(tmp_path)
        store.write("admin_email", value)

        assert store.read("admin_email") == value.strip()

    def test_read_lines_accepts_crlf(self, tmp_path):
        store = ConfigStore(tmp_path)
        store.write("backend_hosts", "203.0.113.7\r\n")

        assert store.read_lines("backend_hosts") == ["203.0.113.7"]

    def test_write_overwrites(self, tmp_path):
        store = ConfigStore(tmp_path)
        store.write("admin_email", "a@example.com")
        store.write("admin_email", "b@example.com")

        assert store.read("admin_email") == "b@example.com"

    def test_missing_config_raises(self, tmp_path):
        store = ConfigStore(tmp_path)

        with pytest.raises(ConfigMissingError) as exc_info:
            store.read("admin_email")
        assert exc_info.value.name == "admin_email"
        assert not store.exists("admin_email")

    @pytest.mark.parametrize("name", ["", "../outside", "config/../../outside", "/etc/passwd"])
    def test_names_cannot_escape_deployment(self, tmp_path, name):
        store = ConfigStore(tmp_path / "prod")

        with pytest.raises(ConfigError):
            store.write(name, "value")

    def test_read_bool(self, tmp_path):
        store = ConfigStore(tmp_path)
        store.write("on", "True\n")
        store.write("off", "False")
        store.write("bad", "yes")

        assert store.read_bool("on") is True
        assert store.read_bool("off") is False
        with pytest.raises(ConfigError):
            store.read_bool("bad")

    def test_read_lines_drops_blank_lines(self, tmp_path):
        store = ConfigStore(tmp_path)
        store.write("backend_hosts", "a\n\n b \n")

        assert store.read_lines("backend_hosts") == ["a", "b"]


class TestLoadDeploymentConfig:
    """The typed view used by push."""

    def test_loads_all_values(self, tmp_path, write_config):
        write_config(tmp_path, enable_https=False)

        config = ConfigStore(tmp_path).load_deployment_config()

        assert config.host == "203.0.113.7"
        assert config.admin_email == "ops@example.com"
        assert config.enable_https is False
        assert config.route == "https://example.com"

    def test_requires_exactly_one_host(self, tmp_path, write_config):
        write_config(tmp_path)
        ConfigStore(tmp_path).write("backend_hosts", "a.example.com\nb.example.com\n")

        with pytest.raises(ConfigError):
            ConfigStore(tmp_path).load_deployment_config()

    def test_missing_route_raises(self, tmp_path, write_config):
        write_config(tmp_path)
        (tmp_path / "config" / "common" / "route").unlink()

        with pytest.raises(ConfigMissingError):
            ConfigStore(tmp_path).load_deployment_config()
