"""hostdeploy CLI - Build and switch the deployment's host"""

from pathlib import Path

import click

from hostdeploy.base import DeploymentCommand
from hostdeploy.models.results import PipelineState


class PushCommand(DeploymentCommand):
    """Build the server system, upload its closure and switch the host."""

    def execute(self) -> None:
        """Execute push command."""
        self.show_header(title="Push Deployment", deployment=str(self.deployment.path))
        self.init_logger(self.deployment.name, "push")

        result = self.operations().push(self.deployment.path)

        if result.state == PipelineState.DONE_NOOP:
            self.print_warning("Build produced no output, host left unchanged")
            return

        if result.commit_error:
            self.print_warning(
                "Host switched, but the deployment directory could not be committed"
            )
            self.print_dim(result.commit_error)

        self.console.print(f"\n[green]✅ Deployed => {result.route}[/green]")
        self.print_dim(f"Version: {result.version}")
        self.print_dim(f"System: {result.artifact_path}\n")


@click.command(name="push")
@click.argument("deploy_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--verbose", is_flag=True, help="Show all command output")
def push(deploy_dir, verbose):
    """
    Build and deploy to the host

    \b
    Steps:
    1. Validate the deployment configuration and route
    2. Pin ./src (a checkout must be committed and pushed)
    3. Build server.system with nix-build
    4. Copy the closure to the host
    5. Switch the host to the new system
    6. Commit the deployment directory
    """
    cmd = PushCommand(deploy_dir, verbose=verbose)
    cmd.run()
