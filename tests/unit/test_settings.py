"""Unit tests for settings loading."""

from pathlib import Path

from hostdeploy.settings import Settings, load_settings


class TestSettingsFromMapping:
    def test_defaults(self):
        settings = Settings.from_mapping({})

        assert settings.ssh_user == "root"
        assert settings.nix_builders == []
        assert settings.uses_default_keystore_password

    def test_values(self):
        settings = Settings.from_mapping(
            {
                "HOSTDEPLOY_SSH_USER": "deploy",
                "HOSTDEPLOY_LOG_DIR": "/var/log/hostdeploy",
                "HOSTDEPLOY_NIX_BUILDERS": "ssh://b1 x86_64-linux; ssh://b2 ;",
                "HOSTDEPLOY_KEYSTORE_PASSWORD": "s3cret",
            }
        )

        assert settings.ssh_user == "deploy"
        assert settings.log_dir == Path("/var/log/hostdeploy")
        assert settings.nix_builders == ["ssh://b1 x86_64-linux", "ssh://b2"]
        assert not settings.uses_default_keystore_password

    def test_empty_values_are_ignored(self):
        settings = Settings.from_mapping({"HOSTDEPLOY_SSH_USER": "  ", "HOSTDEPLOY_KEYSTORE_ALIAS": None})

        assert settings.ssh_user == "root"
        assert settings.keystore_alias == "hostdeploy"


class TestLoadSettings:
    def test_environment_overrides_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("HOSTDEPLOY_SSH_USER=fromfile\nHOSTDEPLOY_KEYSTORE_ALIAS=release\n")
        monkeypatch.setenv("HOSTDEPLOY_SSH_USER", "fromenv")

        settings = load_settings(env_file)

        assert settings.ssh_user == "fromenv"
        assert settings.keystore_alias == "release"
