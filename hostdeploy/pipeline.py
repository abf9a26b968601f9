"""
Release pipeline

Builds the deployment's server system, uploads its closure, switches the
host to it and commits the deployment directory. States run strictly in
order and any failure aborts the rest:

    RESOLVING_CONFIG -> RESOLVING_SOURCE -> BUILDING -> UPLOADING
        -> SWITCHING -> COMMITTING_LOCAL_STATE -> DONE

A build with no output ends the run in DONE_NOOP without touching the host.
"""

from typing import Callable, Optional, Sequence, Tuple

from hostdeploy.constants import DEPLOY_COMMIT_MESSAGE, SERVER_SYSTEM_ATTR
from hostdeploy.exceptions import ExternalToolError
from hostdeploy.logger import DeployLogger
from hostdeploy.models.deployment import DeploymentDirectory
from hostdeploy.models.results import PipelineState, PushResult
from hostdeploy.services.config_service import ConfigStore
from hostdeploy.services.contracts import (
    BuildService,
    RemoteExecutor,
    VersionControl,
    first_output_line,
)
from hostdeploy.services.nix_service import NixTarget, bool_arg, raw_arg, str_arg
from hostdeploy.services.route_validator import get_host_from_route
from hostdeploy.services.source_service import SourceGate


class ReleasePipeline:
    """Runs one push of a deployment directory to its host."""

    def __init__(
        self,
        deployment: DeploymentDirectory,
        config_store: ConfigStore,
        source_gate: SourceGate,
        build_service: BuildService,
        remote: RemoteExecutor,
        vcs: VersionControl,
        get_nix_builders: Callable[[], Sequence[str]] = lambda: [],
        logger: Optional[DeployLogger] = None,
    ):
        self.deployment = deployment
        self.config_store = config_store
        self.source_gate = source_gate
        self.build_service = build_service
        self.remote = remote
        self.vcs = vcs
        self.get_nix_builders = get_nix_builders
        self.logger = logger
        self.state: Optional[PipelineState] = None

    def _enter(self, state: PipelineState, step_name: Optional[str] = None):
        self.state = state
        if self.logger:
            if step_name:
                self.logger.step(step_name)
            else:
                self.logger.log(f"Pipeline state: {state.value}", "DEBUG")

    def run(self) -> PushResult:
        """
        Run the pipeline to completion.

        Returns:
            PushResult describing how far the pipeline went

        Raises:
            HostDeployError: From whichever state failed
        """
        self._enter(PipelineState.RESOLVING_CONFIG, "Reading deployment configuration")
        config = self.config_store.load_deployment_config()
        route_host = get_host_from_route(config.enable_https, config.route)

        self._enter(PipelineState.RESOLVING_SOURCE, "Resolving source")
        src_path = self.deployment.src_path
        pointer = self.source_gate.resolve(src_path)
        version = pointer.rev
        if self.logger:
            self.logger.success(f"Source pinned at {version}")

        self._enter(PipelineState.BUILDING, "Building server system")
        build_output = self.build_service.build(
            NixTarget(path=src_path, attr=SERVER_SYSTEM_ATTR),
            [
                str_arg("hostName", config.host),
                str_arg("adminEmail", config.admin_email),
                str_arg("routeHost", route_host),
                str_arg("version", version),
                bool_arg("enableHttps", config.enable_https),
                raw_arg("config", str(self.deployment.config_path.resolve())),
            ],
            self.get_nix_builders(),
        )
        artifact = first_output_line(build_output)

        result = PushResult(
            state=PipelineState.DONE_NOOP,
            host=config.host,
            route=config.route,
            version=version,
            artifact_path=artifact,
        )
        if artifact is None:
            self._enter(PipelineState.DONE_NOOP)
            if self.logger:
                self.logger.warning("Build produced no output, nothing to deploy")
            return result

        self._enter(PipelineState.UPLOADING, "Uploading closure")
        self.remote.copy_closure(config.host, artifact)

        self._enter(PipelineState.SWITCHING, "Switching to new configuration")
        self.remote.switch(config.host, artifact)

        self._enter(PipelineState.COMMITTING_LOCAL_STATE, "Committing changes to Git")
        result.committed, result.commit_error = self._commit_local_state()

        self._enter(PipelineState.DONE)
        result.state = PipelineState.DONE
        return result

    def _commit_local_state(self) -> Tuple[bool, Optional[str]]:
        """
        Commit the deployment directory if its working tree changed.

        The host is already switched at this point, so a failure here is
        reported instead of raised.
        """
        path = self.deployment.path
        try:
            if self.vcs.check_clean(path, False):
                return False, None
            self.vcs.add(path, ".")
            self.vcs.commit(path, DEPLOY_COMMIT_MESSAGE)
        except ExternalToolError as e:
            if self.logger:
                self.logger.warning(f"Couldn't commit deployment changes: {e.message}")
            return False, e.format_message()
        return True, None
