"""hostdeploy CLI commands."""
