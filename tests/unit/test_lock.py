"""Unit tests for the deployment lock."""

import pytest

from hostdeploy.exceptions import DeploymentLockedError
from hostdeploy.lock import DeploymentLock


class TestDeploymentLock:
    """One operation per deployment directory at a time."""

    def test_second_holder_is_rejected(self, tmp_path):
        lock_path = tmp_path / ".hostdeploy.lock"

        with DeploymentLock(lock_path) as first:
            assert first.held
            with pytest.raises(DeploymentLockedError):
                DeploymentLock(lock_path).acquire()

    def test_lock_is_reusable_after_release(self, tmp_path):
        lock_path = tmp_path / ".hostdeploy.lock"

        with DeploymentLock(lock_path):
            pass

        lock = DeploymentLock(lock_path)
        lock.acquire()
        assert lock.held
        lock.release()
        assert not lock.held

    def test_released_when_body_raises(self, tmp_path):
        lock_path = tmp_path / ".hostdeploy.lock"

        with pytest.raises(RuntimeError):
            with DeploymentLock(lock_path):
                raise RuntimeError("boom")

        with DeploymentLock(lock_path) as lock:
            assert lock.held
