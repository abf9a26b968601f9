"""
Deployment Models

The deployment directory and the typed view of its configuration.
"""

from dataclasses import dataclass
from pathlib import Path

from hostdeploy.constants import (
    CONFIG_DIR,
    KNOWN_HOSTS_FILE,
    LOCK_FILE,
    SRC_DIR,
    SSH_KEY_FILE,
)
from hostdeploy.models.ssh import SSHConfig


@dataclass(frozen=True)
class DeploymentDirectory:
    """Persisted state for one remote target host."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.resolve().name

    @property
    def ssh_key_path(self) -> Path:
        return self.path / SSH_KEY_FILE

    @property
    def known_hosts_path(self) -> Path:
        return self.path / KNOWN_HOSTS_FILE

    @property
    def src_path(self) -> Path:
        return self.path / SRC_DIR

    @property
    def config_path(self) -> Path:
        return self.path / CONFIG_DIR

    @property
    def lock_path(self) -> Path:
        return self.path / LOCK_FILE

    def ssh_config(self, user: str) -> SSHConfig:
        """SSH configuration bound to this deployment's key and trust store."""
        return SSHConfig(
            key_path=self.ssh_key_path,
            known_hosts_path=self.known_hosts_path,
            user=user,
        )

    def exists(self) -> bool:
        return self.path.is_dir()


@dataclass(frozen=True)
class DeploymentConfig:
    """Deployment settings read from the config store."""

    host: str
    admin_email: str
    enable_https: bool
    route: str
