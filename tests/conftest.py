"""Shared fixtures for hostdeploy tests."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from hostdeploy.models.deployment import DeploymentDirectory
from hostdeploy.models.results import ExecutionResult
from hostdeploy.services.config_service import ConfigStore


def write_deployment_config(
    deploy_dir: Path,
    host: str = "203.0.113.7",
    route: str = "https://example.com",
    enable_https: bool = True,
    admin_email: str = "ops@example.com",
) -> None:
    store = ConfigStore(deploy_dir)
    store.write("backend_hosts", f"{host}\n")
    store.write("enable_https", str(enable_https))
    store.write("admin_email", admin_email)
    store.write("config/common/route", route)


@pytest.fixture
def deployment(tmp_path):
    """A deployment directory with a complete config."""
    deploy_dir = tmp_path / "prod"
    deploy_dir.mkdir()
    write_deployment_config(deploy_dir)
    return DeploymentDirectory(deploy_dir)


@pytest.fixture
def runner():
    """A ProcessRunner stand-in whose commands all succeed silently."""
    mock = MagicMock()
    mock.run.return_value = ExecutionResult(returncode=0)
    return mock


@pytest.fixture
def write_config():
    """Write a complete deployment config into a directory."""
    return write_deployment_config
