"""
hostdeploy Exception Hierarchy

Closed exception hierarchy for consistent error handling across the CLI.
Every failure aborts the current operation; the command base class turns
these into a human-readable message and an exit code.
"""

from pathlib import Path
from typing import Optional, Union


class HostDeployError(Exception):
    """Base exception for all hostdeploy errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ValidationError(HostDeployError):
    """Raised when user supplied input fails validation."""

    pass


class PreconditionError(HostDeployError):
    """Raised when the environment is not in a state the operation requires."""

    pass


class ConfigError(HostDeployError):
    """Raised when a deployment config value is unreadable or unparsable."""

    pass


class InvalidRouteError(ValidationError):
    """Raised when the route URL violates the route grammar."""

    reason = "is invalid"

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"Route ({uri}) {self.reason}")


class InvalidURIError(InvalidRouteError):
    reason = "is not a valid URI"


class MissingSchemeError(InvalidRouteError):
    reason = "must have an URI scheme"


class NotHttpsError(InvalidRouteError):
    reason = "must be HTTPS"


class MissingHostError(InvalidRouteError):
    reason = "must contain a hostname"


class HasPortError(InvalidRouteError):
    reason = "cannot specify port"


class HasPathError(InvalidRouteError):
    reason = "cannot contain path"


class ConfigMissingError(PreconditionError):
    """Raised when a deployment config file does not exist."""

    def __init__(self, name: str, deploy_dir: Union[str, Path]):
        self.name = name
        self.deploy_dir = Path(deploy_dir)
        super().__init__(
            f"Deployment config '{name}' not found",
            context=f"Deployment directory: {deploy_dir}",
        )


class MissingSSHKeyError(PreconditionError):
    """Raised when the SSH private key to import does not exist."""

    def __init__(self, key_path: Union[str, Path]):
        self.key_path = Path(key_path)
        super().__init__(f"SSH key file does not exist: {key_path}")


class SSHKeyMismatchError(PreconditionError):
    """Raised when a deployment already holds a different SSH key."""

    def __init__(self, key_path: Union[str, Path], existing_path: Union[str, Path]):
        self.key_path = Path(key_path)
        self.existing_path = Path(existing_path)
        super().__init__(
            f"Deployment already has a different SSH key: {existing_path}",
            context=f"Refusing to overwrite it with {key_path}",
        )


class MissingSourceDirectoryError(PreconditionError):
    """Raised when a project root has no src directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        super().__init__(
            f"No src directory found in {root}",
            context="hostdeploy mobile must be run inside of a deploy directory",
        )


class DirtySourceError(PreconditionError):
    """Raised when a source checkout has uncommitted or unpushed changes."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(
            f"Ensure {path} has no pending changes and latest is pushed upstream"
        )


class DeploymentNotFoundError(PreconditionError):
    """Raised when a deployment directory does not exist."""

    def __init__(self, deploy_dir: Union[str, Path]):
        self.deploy_dir = Path(deploy_dir)
        super().__init__(
            f"Deployment directory '{deploy_dir}' does not exist",
            context="Run: hostdeploy init <deploy-dir>",
        )


class DeploymentLockedError(PreconditionError):
    """Raised when another hostdeploy process holds the deployment lock."""

    def __init__(self, lock_path: Union[str, Path]):
        self.lock_path = Path(lock_path)
        super().__init__(
            "Another hostdeploy operation is running on this deployment",
            context=f"Lock file: {lock_path}",
        )


class ExternalToolError(HostDeployError):
    """Raised when an external tool exits with a non-zero status."""

    def __init__(self, tool: str, returncode: int, output: str = ""):
        self.tool = tool
        self.returncode = returncode
        self.output = output
        context = output.strip()[-2000:] if output and output.strip() else None
        super().__init__(f"{tool} failed with exit code {returncode}", context)


class SourcePointerError(HostDeployError):
    """Raised when the source pointer at a path cannot be read."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(
            f"Couldn't read source pointer at {path}", context=reason
        )


class EmptyBuildError(HostDeployError):
    """Raised when a build that must produce an artifact produced nothing."""

    def __init__(self, description: str):
        self.description = description
        super().__init__(f"Building {description} produced no output")
