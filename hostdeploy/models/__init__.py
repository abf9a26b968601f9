"""
hostdeploy Domain Models

Dataclass-based models for type-safe data handling.
"""

from .results import (
    ExecutionResult,
    PipelineState,
    PushResult,
)
from .deployment import (
    DeploymentConfig,
    DeploymentDirectory,
)
from .source import (
    CheckoutSource,
    PackedSource,
    SourcePointer,
    SourceState,
)
from .ssh import (
    HostKeyChecking,
    SSHConfig,
)

__all__ = [
    # Results
    "ExecutionResult",
    "PipelineState",
    "PushResult",
    # Deployment
    "DeploymentConfig",
    "DeploymentDirectory",
    # Source
    "CheckoutSource",
    "PackedSource",
    "SourcePointer",
    "SourceState",
    # SSH
    "HostKeyChecking",
    "SSHConfig",
]
