"""
hostdeploy CLI Base Command Classes

Abstract base classes for consistent command structure.
"""

from .base_command import BaseCommand
from .deployment_command import DeploymentCommand

__all__ = [
    "BaseCommand",
    "DeploymentCommand",
]
