"""hostdeploy CLI - Build and deploy a signed mobile app"""

from pathlib import Path
from typing import Sequence

import click

from hostdeploy.base import BaseCommand


class MobileCommand(BaseCommand):
    """Build a platform frontend and run its bundled deploy script."""

    def __init__(
        self,
        platform: str,
        extra_args: Sequence[str] = (),
        root: Path = Path("."),
        verbose: bool = False,
    ):
        super().__init__(verbose=verbose)
        self.platform = platform
        self.extra_args = list(extra_args)
        self.root = Path(root)

    def execute(self) -> None:
        self.show_header(
            title="Mobile Release",
            deployment=str(self.root),
            details={"Platform": self.platform},
        )
        self.init_logger("mobile", self.platform)
        self.operations().mobile(self.platform, self.extra_args, self.root)


@click.command(
    name="mobile",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@click.argument("platform", type=click.Choice(["android", "ios"]))
@click.argument("extra_args", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--root",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Deployment root containing ./src",
)
@click.option("--verbose", is_flag=True, help="Show all command output")
def mobile(platform, extra_args, root, verbose):
    """
    Build a signed mobile release and run its deploy script

    \b
    Examples:
      hostdeploy mobile android            # Build and install on a device
      hostdeploy mobile ios -- <team-id>   # Arguments go to the deploy script

    \b
    Android builds are signed with ./android_keystore.jks, created on first
    use. Set HOSTDEPLOY_KEYSTORE_PASSWORD before publishing.
    """
    cmd = MobileCommand(platform, extra_args, root=root, verbose=verbose)
    cmd.run()
