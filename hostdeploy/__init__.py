"""hostdeploy - build, ship and switch a single NixOS host from a deployment directory."""

__version__ = "1.0.0"
