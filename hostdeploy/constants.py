"""
hostdeploy Constants

Centralized constants for the deployment directory layout and remote paths.
"""

# Deployment directory layout
SSH_KEY_FILE = "ssh_key"
KNOWN_HOSTS_FILE = "backend_known_hosts"
BACKEND_HOSTS_CONFIG = "backend_hosts"
ENABLE_HTTPS_CONFIG = "enable_https"
ADMIN_EMAIL_CONFIG = "admin_email"
ROUTE_CONFIG = "config/common/route"
CONFIG_DIR = "config"
SRC_DIR = "src"
LOCK_FILE = ".hostdeploy.lock"
GITIGNORE_FILE = ".gitignore"

# Source pointer (thunk) files
THUNK_JSON_FILE = "git.json"
THUNK_NIX_FILE = "default.nix"

# Default SSH Configuration
DEFAULT_SSH_USER = "root"
SSH_KEY_MODE = 0o600

# Build targets
SERVER_SYSTEM_ATTR = "server.system"

# Remote system profile
SYSTEM_PROFILE = "/nix/var/nix/profiles/system"
SWITCH_TO_CONFIGURATION = f"{SYSTEM_PROFILE}/bin/switch-to-configuration"

# Git commit messages
INITIAL_COMMIT_MESSAGE = "Initial commit."
DEPLOY_COMMIT_MESSAGE = "New deployment"

# Mobile signing defaults
ANDROID_PLATFORM = "android"
ANDROID_KEYSTORE_FILE = "android_keystore.jks"
DEFAULT_KEYSTORE_ALIAS = "hostdeploy"
DEFAULT_KEYSTORE_PASSWORD = "hostdeploy"
DEFAULT_KEYSTORE_DNAME = "CN=hostdeploy, OU=Release, O=hostdeploy, C=US"
KEYSTORE_KEYALG = "RSA"
KEYSTORE_KEYSIZE = 2048
KEYSTORE_VALIDITY_DAYS = 10000
DEFAULT_JDK_SHELL_EXPR = "with import <nixpkgs> {}; mkShell { buildInputs = [ jdk ]; }"

# Logging
DEFAULT_LOG_DIR = "~/.hostdeploy/logs"
