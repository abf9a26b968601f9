"""hostdeploy - Settings loaded from the environment and an optional .env file"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values

from hostdeploy.constants import (
    DEFAULT_JDK_SHELL_EXPR,
    DEFAULT_KEYSTORE_ALIAS,
    DEFAULT_KEYSTORE_DNAME,
    DEFAULT_KEYSTORE_PASSWORD,
    DEFAULT_LOG_DIR,
    DEFAULT_SSH_USER,
)

ENV_PREFIX = "HOSTDEPLOY_"


def find_env_file() -> Optional[Path]:
    """Smart .env file detection"""
    search_paths = [
        Path.cwd() / ".env",
        Path.home() / ".hostdeploy" / ".env",
    ]

    for path in search_paths:
        if path.exists():
            return path

    return None


@dataclass(frozen=True)
class Settings:
    """Operator-level settings shared by every command."""

    ssh_user: str = DEFAULT_SSH_USER
    log_dir: Path = field(default_factory=lambda: Path(DEFAULT_LOG_DIR).expanduser())
    nix_builders: List[str] = field(default_factory=list)
    keystore_alias: str = DEFAULT_KEYSTORE_ALIAS
    keystore_password: str = DEFAULT_KEYSTORE_PASSWORD
    keystore_dname: str = DEFAULT_KEYSTORE_DNAME
    jdk_shell_expr: str = DEFAULT_JDK_SHELL_EXPR

    @property
    def uses_default_keystore_password(self) -> bool:
        return self.keystore_password == DEFAULT_KEYSTORE_PASSWORD

    @classmethod
    def from_mapping(cls, values: Mapping[str, Optional[str]]) -> "Settings":
        """Build settings from HOSTDEPLOY_* keys, ignoring unset or empty ones."""

        def get(key: str) -> Optional[str]:
            value = values.get(ENV_PREFIX + key)
            return value.strip() if value and value.strip() else None

        kwargs: Dict[str, object] = {}
        if get("SSH_USER"):
            kwargs["ssh_user"] = get("SSH_USER")
        if get("LOG_DIR"):
            kwargs["log_dir"] = Path(get("LOG_DIR")).expanduser()
        if get("NIX_BUILDERS"):
            kwargs["nix_builders"] = [
                b.strip() for b in get("NIX_BUILDERS").split(";") if b.strip()
            ]
        if get("KEYSTORE_ALIAS"):
            kwargs["keystore_alias"] = get("KEYSTORE_ALIAS")
        if get("KEYSTORE_PASSWORD"):
            kwargs["keystore_password"] = get("KEYSTORE_PASSWORD")
        if get("KEYSTORE_DNAME"):
            kwargs["keystore_dname"] = get("KEYSTORE_DNAME")
        if get("JDK_SHELL_EXPR"):
            kwargs["jdk_shell_expr"] = get("JDK_SHELL_EXPR")
        return cls(**kwargs)


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Load settings, letting process environment variables override the .env file.

    Args:
        env_file: Explicit .env path (default: smart detection)

    Returns:
        Settings instance
    """
    env_file = env_file or find_env_file()
    values: Dict[str, Optional[str]] = {}
    if env_file:
        values.update(dotenv_values(env_file))
    values.update({k: v for k, v in os.environ.items() if k.startswith(ENV_PREFIX)})
    return Settings.from_mapping(values)
