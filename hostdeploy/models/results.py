"""
Result Models

Dataclass models for operation results and command outputs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass
class ExecutionResult:
    """Result of a command execution (subprocess, SSH, etc.)."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return self.returncode != 0

    @property
    def output(self) -> str:
        """Get combined output (stdout + stderr)."""
        return f"{self.stdout}\n{self.stderr}".strip()

    def __repr__(self) -> str:
        return f"ExecutionResult(returncode={self.returncode}, command='{self.command[:50]}...')"


class PipelineState(Enum):
    """States of the release pipeline, in execution order."""

    RESOLVING_CONFIG = "resolving_config"
    RESOLVING_SOURCE = "resolving_source"
    BUILDING = "building"
    DONE_NOOP = "done_noop"
    UPLOADING = "uploading"
    SWITCHING = "switching"
    COMMITTING_LOCAL_STATE = "committing_local_state"
    DONE = "done"


@dataclass
class PushResult:
    """Outcome of a release pipeline run."""

    state: PipelineState
    host: str
    route: str
    version: str
    artifact_path: Optional[str] = None
    committed: bool = False
    commit_error: Optional[str] = None

    @property
    def deployed(self) -> bool:
        """Check if the host was switched to a new configuration."""
        return self.state == PipelineState.DONE

    def __repr__(self) -> str:
        return f"PushResult(state={self.state.value}, host={self.host}, version={self.version[:12]})"
