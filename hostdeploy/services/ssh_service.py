"""SSH service for executing commands on a deployment's host."""

from typing import List

from hostdeploy.constants import SWITCH_TO_CONFIGURATION, SYSTEM_PROFILE
from hostdeploy.models.ssh import HostKeyChecking, SSHConfig
from hostdeploy.process import ProcessRunner


class SSHService:
    """
    Service for SSH operations.

    Host keys are trusted through the deployment's own known_hosts file:
    `verify_host_key` asks the operator once, everything else runs with
    StrictHostKeyChecking=yes.
    """

    def __init__(self, config: SSHConfig, runner: ProcessRunner):
        """
        Initialize SSH service.

        Args:
            config: SSH configuration
            runner: Process runner used for ssh and nix-copy-closure
        """
        self.config = config
        self.runner = runner

    def ssh_command(
        self,
        host: str,
        command: str,
        checking: HostKeyChecking = HostKeyChecking.YES,
    ) -> List[str]:
        """Build a full ssh command line for a remote command."""
        return [
            "ssh",
            *self.config.options(checking),
            self.config.destination(host),
            command,
        ]

    def verify_host_key(self, host: str) -> None:
        """
        Connect once so the operator can accept the host key.

        This is interactive: on first contact ssh prompts for the
        fingerprint and records it in the deployment's known_hosts.

        Raises:
            ExternalToolError: If the connection fails or the key is rejected
        """
        command = [
            "ssh",
            *self.config.options(HostKeyChecking.ASK),
            self.config.destination(host),
            "-o",
            "NumberOfPasswordPrompts=0",
            "exit",
        ]
        self.runner.run(command, f"Verifying host keys ({host})", interactive=True)

    def execute(self, host: str, command: str, description: str) -> str:
        """Run a command on the host and return its stdout."""
        return self.runner.run(self.ssh_command(host, command), description).stdout

    def copy_closure(self, host: str, store_path: str) -> None:
        """
        Copy a store path and its runtime dependencies to the host.

        nix-copy-closure reads ssh options from NIX_SSHOPTS.
        """
        env = {"NIX_SSHOPTS": " ".join(self.config.options(HostKeyChecking.YES))}
        self.runner.run(
            [
                "nix-copy-closure",
                "-v",
                "--to",
                self.config.destination(host),
                "--gzip",
                store_path,
            ],
            "Uploading closure",
            env=env,
        )

    def switch(self, host: str, store_path: str) -> None:
        """Make store_path the system profile and activate it."""
        command = " ".join(
            [
                f"nix-env -p {SYSTEM_PROFILE} --set {store_path}",
                "&&",
                f"{SWITCH_TO_CONFIGURATION} switch",
            ]
        )
        self.execute(host, command, "Switching to new configuration")
