"""
Deployment Command Base Class

Base class for commands that operate on an existing deployment directory.
"""

from pathlib import Path
from typing import Optional

from hostdeploy.models.deployment import DeploymentDirectory
from hostdeploy.settings import Settings
from .base_command import BaseCommand


class DeploymentCommand(BaseCommand):
    """
    Base class for deployment-specific commands.

    Provides:
    - Deployment directory validation
    - Logger named after the deployment
    """

    def __init__(
        self,
        deploy_dir: Path,
        verbose: bool = False,
        settings: Optional[Settings] = None,
    ):
        super().__init__(verbose=verbose, settings=settings)
        self.deployment = DeploymentDirectory(Path(deploy_dir))

    def validate_deployment(self) -> None:
        """
        Validate that the deployment directory exists.

        Raises:
            SystemExit: If it does not
        """
        if not self.deployment.exists():
            self.exit_with_error(
                f"Deployment directory '{self.deployment.path}' does not exist\n"
                f"Run: hostdeploy init {self.deployment.path}"
            )

    def run(self, **kwargs) -> None:
        """
        Run command with deployment validation.

        Args:
            **kwargs: Command arguments
        """
        self.validate_deployment()
        super().run(**kwargs)
