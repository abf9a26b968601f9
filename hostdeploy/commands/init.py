"""hostdeploy CLI - Initialize a deployment directory"""

from pathlib import Path
from typing import Optional, Sequence

import click

from hostdeploy.base import BaseCommand


class InitCommand(BaseCommand):
    """Create a deployment directory for one host and trust its SSH host key."""

    def __init__(
        self,
        deploy_dir: Path,
        ssh_key: Path,
        hostnames: Sequence[str],
        route: str,
        admin_email: str,
        enable_https: bool = True,
        config_dir: Path = Path("config"),
        project_dir: Path = Path("."),
        source_url: Optional[str] = None,
        ref: Optional[str] = None,
        rev: Optional[str] = None,
        verbose: bool = False,
    ):
        super().__init__(verbose=verbose)
        self.deploy_dir = Path(deploy_dir)
        self.ssh_key = Path(ssh_key)
        self.hostnames = list(hostnames)
        self.route = route
        self.admin_email = admin_email
        self.enable_https = enable_https
        self.config_dir = Path(config_dir)
        self.project_dir = Path(project_dir)
        self.source_url = source_url
        self.ref = ref
        self.rev = rev

    def execute(self) -> None:
        """Execute init command."""
        self.show_header(
            title="Initialize Deployment",
            deployment=str(self.deploy_dir),
            details={
                "Host": ", ".join(self.hostnames),
                "Route": self.route,
                "HTTPS": "enabled" if self.enable_https else "disabled",
            },
        )
        self.init_logger(self.deploy_dir.resolve().name, "init")
        operations = self.operations()

        self.logger.step("Pinning source")
        pointer = operations.pointer_for_project(
            self.project_dir, self.source_url, self.ref, self.rev
        )
        self.logger.success(f"{pointer.url} @ {pointer.rev}")

        operations.init(
            pointer=pointer,
            config_dir=self.config_dir,
            deploy_dir=self.deploy_dir,
            ssh_key_path=self.ssh_key,
            hostnames=self.hostnames,
            route=self.route,
            admin_email=self.admin_email,
            enable_https=self.enable_https,
        )

        self.console.print("\n[bold]Next:[/bold]")
        self.console.print(f"  [cyan]hostdeploy push {self.deploy_dir}[/cyan]\n")


@click.command(name="init")
@click.argument("deploy_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--ssh-key",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Private key with root access to the host (copied into the deployment)",
)
@click.option("--hostname", "hostnames", required=True, multiple=True, help="Host to deploy to")
@click.option("--route", required=True, help="Public URL, e.g. https://example.com")
@click.option("--admin-email", required=True, help="Email used for ACME certificates")
@click.option("--enable-https/--disable-https", default=True, show_default=True)
@click.option(
    "--config-dir",
    default="config",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Project configuration copied into the deployment",
)
@click.option(
    "--project-dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Project checkout to pin when --source-url is not given",
)
@click.option("--source-url", help="Git URL of the source to deploy")
@click.option("--ref", help="Branch or tag to track (with --source-url)")
@click.option("--rev", help="Commit to pin (with --source-url)")
@click.option("--verbose", is_flag=True, help="Show all command output")
def init(
    deploy_dir,
    ssh_key,
    hostnames,
    route,
    admin_email,
    enable_https,
    config_dir,
    project_dir,
    source_url,
    ref,
    rev,
    verbose,
):
    """
    Initialize a deployment directory

    \b
    Examples:
      hostdeploy init ./prod --ssh-key ~/.ssh/id_ed25519 \\
          --hostname 203.0.113.7 --route https://example.com \\
          --admin-email ops@example.com

    \b
    The first connection to the host is interactive: confirm the host key
    fingerprint. It is stored in ./prod/backend_known_hosts and every later
    connection requires it to match.
    """
    cmd = InitCommand(
        deploy_dir,
        ssh_key,
        hostnames,
        route,
        admin_email,
        enable_https=enable_https,
        config_dir=config_dir,
        project_dir=project_dir,
        source_url=source_url,
        ref=ref,
        rev=rev,
        verbose=verbose,
    )
    cmd.run()
