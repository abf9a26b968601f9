"""
Mobile release builder

Builds a platform frontend with release signing configured and runs the
deploy script bundled with the result.
"""

from pathlib import Path
from typing import Optional, Sequence

from hostdeploy.constants import ANDROID_KEYSTORE_FILE, ANDROID_PLATFORM, SRC_DIR
from hostdeploy.exceptions import EmptyBuildError, MissingSourceDirectoryError
from hostdeploy.logger import DeployLogger
from hostdeploy.process import ProcessRunner
from hostdeploy.services.contracts import BuildService, first_output_line
from hostdeploy.services.keystore_service import KeystoreService, KeytoolConfig
from hostdeploy.services.nix_service import NixTarget, render_attrset, render_string
from hostdeploy.settings import Settings


def release_key_attrset(keystore: Path, alias: str, password: str) -> str:
    """Render the releaseKey override for an Android build."""
    return render_attrset(
        {
            "storeFile": str(keystore),
            "storePassword": render_string(password),
            "keyAlias": render_string(alias),
            "keyPassword": render_string(password),
        }
    )


def frontend_expression(src_dir: Path, platform: str, release_key: Optional[str]) -> str:
    """Build expression for a platform's frontend, optionally overriding its signing key."""
    expr = f"with (import {src_dir} {{}}); {platform}.frontend"
    if release_key is None:
        return expr
    return f"{expr}.override (drv: {{ releaseKey = drv.releaseKey // {release_key}; }})"


class MobileReleaseBuilder:
    """Builds and deploys a signed mobile app from a deployment root."""

    def __init__(
        self,
        root: Path,
        settings: Settings,
        build_service: BuildService,
        keystore_service: KeystoreService,
        runner: ProcessRunner,
        logger: Optional[DeployLogger] = None,
    ):
        self.root = Path(root)
        self.settings = settings
        self.build_service = build_service
        self.keystore_service = keystore_service
        self.runner = runner
        self.logger = logger

    @property
    def src_dir(self) -> Path:
        return self.root / SRC_DIR

    @property
    def keystore_path(self) -> Path:
        return self.root / ANDROID_KEYSTORE_FILE

    def _log(self, message: str, level: str = "INFO"):
        if self.logger:
            if level == "WARNING":
                self.logger.warning(message)
            else:
                self.logger.log(message, level)

    def ensure_keystore(self) -> Path:
        """Create the Android keystore if it does not exist yet."""
        keystore = self.keystore_path
        if keystore.exists():
            return keystore

        self._log(f"Creating keystore: {keystore}")
        if self.settings.uses_default_keystore_password:
            self._log(
                "Using the default keystore password. Set HOSTDEPLOY_KEYSTORE_PASSWORD "
                "before publishing a release signed with this key.",
                "WARNING",
            )
        self.keystore_service.create_keystore(
            self.root,
            KeytoolConfig(
                keystore=keystore,
                alias=self.settings.keystore_alias,
                storepass=self.settings.keystore_password,
                dname=self.settings.keystore_dname,
            ),
        )
        return keystore

    def build(self, platform: str) -> str:
        """
        Build the platform frontend and return its store path.

        Raises:
            MissingSourceDirectoryError: If the root has no src directory
            EmptyBuildError: If the build produced no output
            ExternalToolError: If keystore generation or the build fails
        """
        if not self.src_dir.is_dir():
            raise MissingSourceDirectoryError(self.root)

        release_key = None
        if platform == ANDROID_PLATFORM:
            keystore = self.ensure_keystore()
            release_key = release_key_attrset(
                keystore.resolve(),
                self.settings.keystore_alias,
                self.settings.keystore_password,
            )

        target = NixTarget(
            expr=frontend_expression(self.src_dir.resolve(), platform, release_key)
        )
        result = first_output_line(self.build_service.build(target))
        if result is None:
            raise EmptyBuildError(f"{platform}.frontend")
        return result

    def deploy(self, platform: str, extra_args: Sequence[str] = ()) -> None:
        """Build the frontend and run its bundled deploy script with extra_args."""
        result = self.build(platform)
        self.runner.run(
            [str(Path(result) / "bin" / "deploy"), *extra_args],
            f"Deploying {platform} app",
            interactive=True,
        )
