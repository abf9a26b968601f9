"""
hostdeploy Services Layer

Config store, route validation and the adapters for nix, git, ssh and keytool.
"""

from .config_service import ConfigStore
from .git_service import GitService
from .keystore_service import KeystoreService, KeytoolConfig
from .mobile_service import MobileReleaseBuilder
from .nix_service import NixService, NixTarget, NixArg
from .route_validator import get_host_from_route, validate_route
from .source_service import SourceGate, ThunkSource
from .ssh_service import SSHService

__all__ = [
    "ConfigStore",
    "GitService",
    "KeystoreService",
    "KeytoolConfig",
    "MobileReleaseBuilder",
    "NixService",
    "NixTarget",
    "NixArg",
    "get_host_from_route",
    "validate_route",
    "SourceGate",
    "ThunkSource",
    "SSHService",
]
