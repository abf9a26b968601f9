"""
SSH Configuration Models

Dataclass models for SSH operations against a deployment's isolated trust store.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class HostKeyChecking(Enum):
    """StrictHostKeyChecking modes used by hostdeploy."""

    # First contact at init time: the operator accepts the fingerprint
    ASK = "ask"
    # Every later connection: unknown or changed keys fail hard
    YES = "yes"


@dataclass(frozen=True)
class SSHConfig:
    """SSH configuration for connecting to a deployment's host."""

    key_path: Path
    known_hosts_path: Path
    user: str = "root"

    def options(self, checking: HostKeyChecking = HostKeyChecking.YES) -> list[str]:
        """Get ssh options pinning the trust store, checking mode and key."""
        return [
            "-o",
            f"UserKnownHostsFile={self.known_hosts_path}",
            "-o",
            f"StrictHostKeyChecking={checking.value}",
            "-i",
            str(self.key_path),
        ]

    def destination(self, host: str) -> str:
        """Get SSH destination string (user@host)."""
        return f"{self.user}@{host}"
