"""Android signing keystore generation via keytool."""

import shlex
from dataclasses import dataclass
from pathlib import Path

from hostdeploy.constants import (
    KEYSTORE_KEYALG,
    KEYSTORE_KEYSIZE,
    KEYSTORE_VALIDITY_DAYS,
)
from hostdeploy.process import ProcessRunner


@dataclass(frozen=True)
class KeytoolConfig:
    """Parameters for a generated signing key."""

    keystore: Path
    alias: str
    storepass: str
    dname: str

    def keytool_command(self) -> str:
        return shlex.join(
            [
                "keytool",
                "-genkeypair",
                "-noprompt",
                "-keystore", str(self.keystore),
                "-keyalg", KEYSTORE_KEYALG,
                "-keysize", str(KEYSTORE_KEYSIZE),
                "-validity", str(KEYSTORE_VALIDITY_DAYS),
                "-storetype", "pkcs12",
                "-storepass", self.storepass,
                "-alias", self.alias,
                "-dname", self.dname,
            ]
        )


class KeystoreService:
    """Creates keystores with keytool from a nix-shell that provides a JDK."""

    def __init__(self, runner: ProcessRunner, jdk_shell_expr: str):
        self.runner = runner
        self.jdk_shell_expr = jdk_shell_expr

    def create_keystore(self, root: Path, config: KeytoolConfig) -> None:
        """
        Generate a new keystore.

        Raises:
            ExternalToolError: If nix-shell or keytool fails
        """
        self.runner.run(
            ["nix-shell", "-E", self.jdk_shell_expr, "--run", config.keytool_command()],
            f"Creating keystore {config.keystore.name}",
            cwd=root,
        )
