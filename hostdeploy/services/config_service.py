"""
Deployment Config Store

One file per config name inside the deployment directory. Values are written
verbatim and read back with surrounding whitespace stripped.
"""

from pathlib import Path, PurePosixPath
from typing import List, Union

from hostdeploy.constants import (
    ADMIN_EMAIL_CONFIG,
    BACKEND_HOSTS_CONFIG,
    ENABLE_HTTPS_CONFIG,
    ROUTE_CONFIG,
)
from hostdeploy.exceptions import ConfigError, ConfigMissingError
from hostdeploy.models.deployment import DeploymentConfig


class ConfigStore:
    """Key to text-value storage rooted at a deployment directory."""

    def __init__(self, deploy_dir: Union[str, Path]):
        self.deploy_dir = Path(deploy_dir)

    def _path_for(self, name: str) -> Path:
        parts = PurePosixPath(name.replace("\\", "/")).parts
        if not parts or parts[0] == "/" or ".." in parts:
            raise ConfigError(
                f"Invalid config name '{name}'",
                context="Config names are relative paths inside the deployment directory",
            )
        return self.deploy_dir.joinpath(*parts)

    def write(self, name: str, value: str) -> None:
        """Overwrite config `name` with `value`, creating parent directories."""
        path = self._path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", newline="") as f:
            f.write(value)

    def read(self, name: str) -> str:
        """
        Read config `name` with leading/trailing whitespace removed.

        Raises:
            ConfigMissingError: If the config file does not exist
        """
        path = self._path_for(name)
        if not path.is_file():
            raise ConfigMissingError(name, self.deploy_dir)
        try:
            with path.open(newline="") as f:
                return f.read().strip()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Couldn't read config '{name}'", context=str(e))

    def exists(self, name: str) -> bool:
        return self._path_for(name).is_file()

    def read_bool(self, name: str) -> bool:
        """Read a flag written as "True" or "False"."""
        value = self.read(name)
        if value == "True":
            return True
        if value == "False":
            return False
        raise ConfigError(
            f"Config '{name}' must be 'True' or 'False'", context=f"Found: {value!r}"
        )

    def read_lines(self, name: str) -> List[str]:
        """Read a newline-separated list, dropping blank lines."""
        return [line.strip() for line in self.read(name).splitlines() if line.strip()]

    def load_deployment_config(self) -> DeploymentConfig:
        """
        Read the deployment settings written by init.

        Raises:
            ConfigMissingError: If any required config is absent
            ConfigError: If a value can't be parsed
        """
        hosts = self.read_lines(BACKEND_HOSTS_CONFIG)
        if len(hosts) != 1:
            raise ConfigError(
                f"'{BACKEND_HOSTS_CONFIG}' must list exactly one host",
                context=f"Found: {', '.join(hosts) or 'none'}",
            )
        return DeploymentConfig(
            host=hosts[0],
            admin_email=self.read(ADMIN_EMAIL_CONFIG),
            enable_https=self.read_bool(ENABLE_HTTPS_CONFIG),
            route=self.read(ROUTE_CONFIG),
        )
