"""Git service for the deployment directory and source checkouts."""

from pathlib import Path
from typing import Optional

from hostdeploy.constants import INITIAL_COMMIT_MESSAGE
from hostdeploy.exceptions import ExternalToolError
from hostdeploy.process import ProcessRunner


class GitService:
    """Thin wrapper over the git CLI, always run with `-C <path>`."""

    def __init__(self, runner: ProcessRunner):
        self.runner = runner

    def _git(self, path: Path, *args: str, description: str = "Running git", check: bool = True):
        return self.runner.run(
            ["git", "-C", str(path), *args], description, check=check
        )

    def init(self, path: Path) -> None:
        """Create (or reinitialize) a repository and commit everything in it."""
        self._git(path, "init", description="Initializing git repository")
        self.add(path, ".")
        if not self.check_clean(path, False):
            self.commit(path, INITIAL_COMMIT_MESSAGE)

    def check_clean(self, path: Path, check_upstream: bool) -> bool:
        """
        Check a working tree for uncommitted changes.

        Args:
            path: Repository path
            check_upstream: Also require every local commit to exist on a remote

        Returns:
            True if clean
        """
        status = self._git(
            path, "status", "--porcelain", "--ignore-submodules=none",
            description="Checking for uncommitted changes",
        )
        if status.stdout.strip():
            return False
        if check_upstream:
            unpushed = self._git(
                path, "log", "--branches", "--not", "--remotes", "--oneline",
                description="Checking for unpushed commits",
            )
            if unpushed.stdout.strip():
                return False
        return True

    def add(self, path: Path, *pathspecs: str) -> None:
        self._git(path, "add", *pathspecs, description="Staging changes")

    def commit(self, path: Path, message: str) -> None:
        self._git(path, "commit", "-m", message, description="Committing changes to Git")

    def head_commit(self, path: Path) -> str:
        return self._git(path, "rev-parse", "HEAD", description="Reading HEAD").stdout.strip()

    def current_branch(self, path: Path) -> Optional[str]:
        branch = self._git(
            path, "rev-parse", "--abbrev-ref", "HEAD", description="Reading branch"
        ).stdout.strip()
        return None if branch == "HEAD" else branch

    def remote_url(self, path: Path, remote: str = "origin") -> str:
        return self._git(
            path, "remote", "get-url", remote, description="Reading remote URL"
        ).stdout.strip()

    def pull(self, path: Path) -> None:
        self._git(path, "pull", "--ff-only", description="Pulling latest changes")

    def ls_remote(self, url: str, ref: Optional[str] = None) -> str:
        """
        Resolve a ref (default HEAD) on a remote to a commit hash.

        Raises:
            ExternalToolError: If git fails or the ref does not exist
        """
        ref = ref or "HEAD"
        result = self.runner.run(
            ["git", "ls-remote", url, ref], f"Resolving {ref} on {url}"
        )
        for line in result.stdout.splitlines():
            commit, _, name = line.partition("\t")
            if name in (ref, f"refs/heads/{ref}", f"refs/tags/{ref}"):
                return commit.strip()
        raise ExternalToolError("git", 2, f"Ref '{ref}' not found on {url}")
