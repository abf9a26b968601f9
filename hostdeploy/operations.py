"""
Deployment operations

init, push, update and mobile, wired to the nix/git/ssh services. Each
operation on a deployment directory runs under its advisory lock.
"""

import filecmp
import shutil
from pathlib import Path
from typing import Callable, Optional, Sequence

from hostdeploy.constants import (
    ADMIN_EMAIL_CONFIG,
    BACKEND_HOSTS_CONFIG,
    ENABLE_HTTPS_CONFIG,
    GITIGNORE_FILE,
    LOCK_FILE,
    ROUTE_CONFIG,
    SSH_KEY_MODE,
)
from hostdeploy.exceptions import (
    DeploymentNotFoundError,
    DirtySourceError,
    MissingSSHKeyError,
    SSHKeyMismatchError,
    ValidationError,
)
from hostdeploy.lock import DeploymentLock
from hostdeploy.logger import DeployLogger
from hostdeploy.models.deployment import DeploymentDirectory
from hostdeploy.models.results import PushResult
from hostdeploy.models.source import SourcePointer
from hostdeploy.models.ssh import SSHConfig
from hostdeploy.pipeline import ReleasePipeline
from hostdeploy.process import ProcessRunner
from hostdeploy.services.config_service import ConfigStore
from hostdeploy.services.contracts import (
    BuildService,
    RemoteExecutor,
    SourcePointerSubsystem,
    VersionControl,
)
from hostdeploy.services.git_service import GitService
from hostdeploy.services.keystore_service import KeystoreService
from hostdeploy.services.mobile_service import MobileReleaseBuilder
from hostdeploy.services.nix_service import NixService
from hostdeploy.services.route_validator import get_host_from_route
from hostdeploy.services.source_service import SourceGate, ThunkSource
from hostdeploy.services.ssh_service import SSHService
from hostdeploy.settings import Settings


class DeploymentOperations:
    """
    Entry points used by the CLI commands.

    Collaborators default to the real nix/git/ssh services and can be
    replaced for testing.
    """

    def __init__(
        self,
        settings: Settings,
        runner: ProcessRunner,
        logger: Optional[DeployLogger] = None,
        git: Optional[GitService] = None,
        build_service: Optional[BuildService] = None,
        source: Optional[SourcePointerSubsystem] = None,
        remote_factory: Optional[Callable[[SSHConfig], RemoteExecutor]] = None,
    ):
        self.settings = settings
        self.runner = runner
        self.logger = logger
        self.git = git or GitService(runner)
        self.build_service = build_service or NixService(runner)
        self.thunks = ThunkSource(self.git)
        self.source = source or self.thunks
        self.remote_factory = remote_factory or (lambda config: SSHService(config, runner))

    @property
    def vcs(self) -> VersionControl:
        return self.git

    def _step(self, name: str):
        if self.logger:
            self.logger.step(name)

    def _success(self, message: str):
        if self.logger:
            self.logger.success(message)

    def remote_for(self, deployment: DeploymentDirectory) -> RemoteExecutor:
        return self.remote_factory(deployment.ssh_config(self.settings.ssh_user))

    def pointer_for_project(
        self,
        project_dir: Path,
        source_url: Optional[str] = None,
        ref: Optional[str] = None,
        rev: Optional[str] = None,
    ) -> SourcePointer:
        """
        Work out the source pointer a new deployment should pin.

        With a source URL, pins `rev` (or the current head of `ref`).
        Otherwise pins HEAD of the project checkout, which must be clean
        and pushed.
        """
        if source_url:
            return SourcePointer(
                url=source_url,
                rev=rev or self.git.ls_remote(source_url, ref),
                ref=ref,
            )
        if not self.thunks.check_clean(project_dir, True):
            raise DirtySourceError(project_dir)
        return self.thunks.pointer_for_checkout(project_dir)

    def _import_ssh_key(self, ssh_key_path: Path, deployment: DeploymentDirectory):
        """Copy the private key into the deployment once, owner read/write only."""
        if not ssh_key_path.is_file():
            raise MissingSSHKeyError(ssh_key_path)

        local_key = deployment.ssh_key_path
        if local_key.exists():
            if not filecmp.cmp(ssh_key_path, local_key, shallow=False):
                raise SSHKeyMismatchError(ssh_key_path, local_key)
        else:
            shutil.copyfile(ssh_key_path, local_key)
        local_key.chmod(SSH_KEY_MODE)

    def _ignore_lock_file(self, deployment: DeploymentDirectory):
        """Add the lock file to .gitignore, keeping any existing entries."""
        gitignore = deployment.path / GITIGNORE_FILE
        existing = gitignore.read_text() if gitignore.is_file() else ""
        if LOCK_FILE in (line.strip() for line in existing.splitlines()):
            return
        if existing and not existing.endswith("\n"):
            existing += "\n"
        gitignore.write_text(f"{existing}{LOCK_FILE}\n")

    def init(
        self,
        pointer: SourcePointer,
        config_dir: Path,
        deploy_dir: Path,
        ssh_key_path: Path,
        hostnames: Sequence[str],
        route: str,
        admin_email: str,
        enable_https: bool,
    ) -> DeploymentDirectory:
        """
        Create a deployment directory for one host.

        Raises:
            ValidationError: If hostnames or the route are invalid
            PreconditionError: If the SSH key is missing or conflicts
            ExternalToolError: If ssh, git or copying fails
        """
        hostnames = [h.strip() for h in hostnames if h.strip()]
        if len(hostnames) != 1:
            raise ValidationError(
                "A deployment targets exactly one host",
                context=f"Hostnames given: {', '.join(hostnames) or 'none'}",
            )

        deployment = DeploymentDirectory(Path(deploy_dir))
        config_dir = Path(config_dir)

        self._step(f"Preparing {deploy_dir}")
        deployment.path.mkdir(parents=True, exist_ok=True)

        with DeploymentLock(deployment.lock_path):
            has_config_dir = config_dir.is_dir()
            self._import_ssh_key(Path(ssh_key_path), deployment)

            self._step("Validating configuration")
            get_host_from_route(enable_https, route)

            remote = self.remote_for(deployment)
            for hostname in hostnames:
                # Interactive: ssh may prompt for the host fingerprint
                self._step(f"Verifying host keys ({hostname})")
                remote.verify_host_key(hostname)

            if has_config_dir:
                self._step("Importing project configuration")
                shutil.copytree(config_dir, deployment.config_path, dirs_exist_ok=True)

            self._step("Writing deployment configuration")
            store = ConfigStore(deployment.path)
            store.write(BACKEND_HOSTS_CONFIG, "".join(f"{h}\n" for h in hostnames))
            store.write(ENABLE_HTTPS_CONFIG, str(bool(enable_https)))
            store.write(ADMIN_EMAIL_CONFIG, admin_email)
            store.write(ROUTE_CONFIG, route)
            self._ignore_lock_file(deployment)

            self._step("Creating source pointer (./src)")
            self.source.create(deployment.src_path, pointer)

            self._step(f"Initializing git repository ({deploy_dir})")
            self.vcs.init(deployment.path)

        self._success(f"Deployment initialized in {deploy_dir}")
        return deployment

    def default_nix_builders(self) -> Sequence[str]:
        return list(self.settings.nix_builders)

    def _existing(self, deploy_dir: Path) -> DeploymentDirectory:
        deployment = DeploymentDirectory(Path(deploy_dir))
        if not deployment.exists():
            raise DeploymentNotFoundError(deploy_dir)
        return deployment

    def push(
        self,
        deploy_dir: Path,
        get_nix_builders: Optional[Callable[[], Sequence[str]]] = None,
    ) -> PushResult:
        """Build, upload and switch the deployment's host."""
        deployment = self._existing(deploy_dir)
        if get_nix_builders is None:
            get_nix_builders = self.default_nix_builders

        with DeploymentLock(deployment.lock_path):
            pipeline = ReleasePipeline(
                deployment=deployment,
                config_store=ConfigStore(deployment.path),
                source_gate=SourceGate(self.source, self.logger),
                build_service=self.build_service,
                remote=self.remote_for(deployment),
                vcs=self.vcs,
                get_nix_builders=get_nix_builders,
                logger=self.logger,
            )
            result = pipeline.run()

        if result.deployed:
            self._success(f"Deployed => {result.route}")
        return result

    def update(self, deploy_dir: Path) -> SourcePointer:
        """Advance the deployment's source pointer to the latest upstream revision."""
        deployment = self._existing(deploy_dir)
        with DeploymentLock(deployment.lock_path):
            self._step("Updating source pointer (./src)")
            pointer = self.source.update(deployment.src_path)
        self._success(f"Source pinned at {pointer.rev}")
        return pointer

    def mobile(self, platform: str, extra_args: Sequence[str] = (), root: Path = Path(".")) -> None:
        """Build a signed mobile frontend and run its deploy script."""
        builder = MobileReleaseBuilder(
            root=Path(root),
            settings=self.settings,
            build_service=self.build_service,
            keystore_service=KeystoreService(self.runner, self.settings.jdk_shell_expr),
            runner=self.runner,
            logger=self.logger,
        )
        self._step(f"Building {platform} release")
        builder.deploy(platform, extra_args)
