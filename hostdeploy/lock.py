"""Advisory lock serializing operations on one deployment directory."""

import fcntl
from pathlib import Path
from typing import Optional, TextIO

from hostdeploy.exceptions import DeploymentLockedError


class DeploymentLock:
    """
    Exclusive, non-blocking flock on a lock file.

    Usage:
        with DeploymentLock(deployment.lock_path):
            ...
    """

    def __init__(self, lock_path: Path):
        self.lock_path = Path(lock_path)
        self._handle: Optional[TextIO] = None

    def acquire(self) -> None:
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(self.lock_path, "a")
        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            handle.close()
            raise DeploymentLockedError(self.lock_path)
        self._handle = handle

    def release(self) -> None:
        if self._handle is None:
            return
        try:
            fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
        finally:
            self._handle.close()
            self._handle = None

    @property
    def held(self) -> bool:
        return self._handle is not None

    def __enter__(self) -> "DeploymentLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        self.release()
        return False
