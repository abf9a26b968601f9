"""hostdeploy CLI - Update the deployment's source pointer"""

from pathlib import Path

import click

from hostdeploy.base import DeploymentCommand


class UpdateCommand(DeploymentCommand):
    """Advance ./src to the latest upstream revision."""

    def execute(self) -> None:
        self.show_header(title="Update Source", deployment=str(self.deployment.path))
        self.init_logger(self.deployment.name, "update")

        pointer = self.operations().update(self.deployment.path)

        self.console.print(f"\n[green]✓ Source updated to {pointer.rev}[/green]")
        self.console.print(f"  [cyan]hostdeploy push {self.deployment.path}[/cyan]\n")


@click.command(name="update")
@click.argument("deploy_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--verbose", is_flag=True, help="Show all command output")
def update(deploy_dir, verbose):
    """
    Update the deployment's source to the latest upstream revision
    """
    cmd = UpdateCommand(deploy_dir, verbose=verbose)
    cmd.run()
