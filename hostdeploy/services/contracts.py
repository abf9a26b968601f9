"""
Collaborator contracts

The release pipeline and init/update operations depend only on these
protocols; the concrete services in this package shell out to nix, git
and ssh.
"""

from pathlib import Path
from typing import Optional, Protocol, Sequence, runtime_checkable

from hostdeploy.models.source import SourcePointer, SourceState
from hostdeploy.services.nix_service import NixArg, NixTarget


@runtime_checkable
class BuildService(Protocol):
    """Evaluates a build target and returns the build output text."""

    def build(
        self,
        target: NixTarget,
        args: Sequence[NixArg] = (),
        builders: Sequence[str] = (),
    ) -> str:
        ...


@runtime_checkable
class SourcePointerSubsystem(Protocol):
    """Reads, packs and advances pinned source pointers."""

    def read(self, path: Path) -> SourceState:
        ...

    def pack(self, path: Path) -> SourcePointer:
        ...

    def check_clean(self, path: Path, check_upstream: bool) -> bool:
        ...

    def update(self, path: Path) -> SourcePointer:
        ...

    def create(self, path: Path, pointer: SourcePointer) -> None:
        ...


@runtime_checkable
class VersionControl(Protocol):
    """The subset of git the deployment directory needs."""

    def init(self, path: Path) -> None:
        ...

    def check_clean(self, path: Path, check_upstream: bool) -> bool:
        ...

    def add(self, path: Path, *pathspecs: str) -> None:
        ...

    def commit(self, path: Path, message: str) -> None:
        ...


@runtime_checkable
class RemoteExecutor(Protocol):
    """Remote operations over a deployment's isolated SSH trust store."""

    def verify_host_key(self, host: str) -> None:
        ...

    def copy_closure(self, host: str, store_path: str) -> None:
        ...

    def switch(self, host: str, store_path: str) -> None:
        ...


def first_output_line(output: Optional[str]) -> Optional[str]:
    """Return the first line of build output, or None when there is none."""
    lines = (output or "").splitlines()
    if not lines:
        return None
    return lines[0].strip() or None
