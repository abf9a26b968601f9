"""
Source pointer service

A deployment's `src` directory pins the source tree it builds. It is either
packed (a git.json pointer plus a default.nix that fetches it) or a live git
checkout that the operator is working in.
"""

import json
import shutil
from pathlib import Path
from typing import Optional

from hostdeploy.constants import THUNK_JSON_FILE, THUNK_NIX_FILE
from hostdeploy.exceptions import DirtySourceError, SourcePointerError
from hostdeploy.logger import DeployLogger
from hostdeploy.models.source import (
    CheckoutSource,
    PackedSource,
    SourcePointer,
    SourceState,
)
from hostdeploy.services.contracts import SourcePointerSubsystem
from hostdeploy.services.git_service import GitService

THUNK_NIX = f"""# DO NOT HAND-EDIT THIS FILE
import (builtins.fetchGit (builtins.fromJSON (builtins.readFile ./{THUNK_JSON_FILE})))
"""


class ThunkSource:
    """Reads, creates, packs and updates source pointers on disk."""

    def __init__(self, git: GitService):
        self.git = git

    def read(self, path: Path) -> SourceState:
        """
        Determine whether path is a packed pointer or a checkout.

        Raises:
            SourcePointerError: If path is neither, or git.json is malformed
        """
        path = Path(path)
        if not path.is_dir():
            raise SourcePointerError(path, "directory does not exist")
        if (path / ".git").exists():
            return CheckoutSource(path)

        json_path = path / THUNK_JSON_FILE
        if not json_path.is_file():
            raise SourcePointerError(
                path, f"neither a git checkout nor a packed pointer ({THUNK_JSON_FILE} missing)"
            )
        try:
            return PackedSource(SourcePointer.from_json(json.loads(json_path.read_text())))
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise SourcePointerError(path, f"invalid {THUNK_JSON_FILE}: {e}")

    def check_clean(self, path: Path, check_upstream: bool) -> bool:
        return self.git.check_clean(path, check_upstream)

    def pointer_for_checkout(self, path: Path) -> SourcePointer:
        """Pin a checkout's HEAD on its origin remote."""
        return SourcePointer(
            url=self.git.remote_url(path),
            rev=self.git.head_commit(path),
            ref=self.git.current_branch(path),
        )

    def create(self, path: Path, pointer: SourcePointer) -> None:
        """Write a packed pointer to path, replacing any previous one."""
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)
        (path / THUNK_JSON_FILE).write_text(json.dumps(pointer.to_json(), indent=2) + "\n")
        (path / THUNK_NIX_FILE).write_text(THUNK_NIX)

    def pack(self, path: Path) -> SourcePointer:
        """
        Replace a checkout with a packed pointer to its HEAD.

        Callers must check the checkout is clean and pushed first; the
        working tree is deleted.
        """
        pointer = self.pointer_for_checkout(path)
        shutil.rmtree(path)
        self.create(path, pointer)
        return pointer

    def update(self, path: Path) -> SourcePointer:
        """Advance the pointer (or checkout) to the latest upstream revision."""
        state = self.read(path)
        if isinstance(state, CheckoutSource):
            self.git.pull(path)
            return self.pointer_for_checkout(path)

        current = state.pointer
        rev = self.git.ls_remote(current.url, current.ref)
        updated = SourcePointer(url=current.url, rev=rev, ref=current.ref)
        if updated != current:
            self.create(path, updated)
        return updated


class SourceGate:
    """Resolves a deployment's src into a buildable, immutable pointer."""

    def __init__(
        self,
        source: SourcePointerSubsystem,
        logger: Optional[DeployLogger] = None,
    ):
        self.source = source
        self.logger = logger

    def resolve(self, src_path: Path) -> SourcePointer:
        """
        Return the packed pointer for src_path, packing a clean checkout.

        Raises:
            DirtySourceError: If the checkout has uncommitted or unpushed work
            SourcePointerError: If src_path can't be read
        """
        state = self.source.read(src_path)
        if isinstance(state, PackedSource):
            return state.pointer

        if not self.source.check_clean(src_path, True):
            raise DirtySourceError(src_path)

        if self.logger:
            self.logger.log(f"Packing source checkout {src_path}")
        return self.source.pack(src_path)
