# region Docstring
"""
clipstore.config.base

Environment detection and application-data directory resolution.

Overview:
- Provides a utility class for reading the current application environment
    (prod, docker or dev) from the CLIPSTORE_ENV variable.
- Resolves the platform-specific directory under which the record store file
    is placed.
- Exposes module-level constants for the application root and environment.

Contents:
- Classes:
    - AppEnv:
        A utility class for environment detection and path resolution. Provides
        class methods to determine the current environment, retrieve the application
        root directory, and locate the application data directory.

- Module-level Constants:
    - APP_ROOT (Path): The resolved root directory of the application.
    - APP_ENV (Literal["prod", "docker", "dev"]): The detected application environment.

Environment Detection Logic:
- CLIPSTORE_ENV selects the environment explicitly.
- Unset or unrecognised values default to development. The working directory
    is never consulted; a desktop store runs from arbitrary paths.

App-Data Directory Logic:
- CLIPSTORE_HOME, when set, is used as-is.
- Windows: %APPDATA%\\clipstore
- macOS: ~/Library/Application Support/clipstore
- Others: $XDG_DATA_HOME/clipstore, or ~/.local/share/clipstore

Design Notes:
- Environment detection is performed at import time to ensure consistent behavior
    throughout the application lifecycle.
- The app-data directory is resolved lazily; resolving the home directory can fail
    in stripped-down environments and that failure belongs to store initialization,
    not to import.
"""
# endregion
# region Imports
import os
import sys
from pathlib import Path
from typing import Literal

from clipstore.constants import APP_NAME

# endregion
# region AppEnv Class


class AppEnv:
    """
    Application environment detection utility.

    Attributes:
        ROOT (Path): The root directory of the application. Defaults to the current working directory.
        PROD (Literal["prod"]): Constant representing the production environment.
        DOCKER (Literal["docker"]): Constant representing the Docker environment.
        DEV (Literal["dev"]): Constant representing the development environment.
    """

    ROOT: Path = Path().cwd().resolve()
    PROD: Literal["prod"] = "prod"
    DOCKER: Literal["docker"] = "docker"
    DEV: Literal["dev"] = "dev"

    @classmethod
    def environment(cls) -> Literal["prod", "docker", "dev"]:
        """
        Determine the current application environment from CLIPSTORE_ENV.

        The environment only selects which config.{env}.yaml overlay is read.
        Unset or unknown values mean dev.
        """
        env = os.getenv("CLIPSTORE_ENV")
        if env in {cls.PROD, cls.DOCKER, cls.DEV}:
            return env
        return cls.DEV

    @classmethod
    def app_root(cls) -> Path:
        """Get the application root directory."""
        return cls.ROOT

    @classmethod
    def app_data_dir(cls) -> Path:
        """
        Get the directory the record store file lives in.

        Returns:
            Path: The resolved application data directory (not created here).

        Raises:
            RuntimeError: If the user's home directory cannot be determined.
        """
        override = os.getenv("CLIPSTORE_HOME")
        if override:
            return Path(override).expanduser().resolve()

        if sys.platform == "win32":
            appdata = os.getenv("APPDATA")
            base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        elif sys.platform == "darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            xdg = os.getenv("XDG_DATA_HOME")
            base = Path(xdg) if xdg else Path.home() / ".local" / "share"
        return (base / APP_NAME).resolve()


# endregion
# region Module-level Constants

APP_ROOT: Path = AppEnv.app_root()
"""[Path] Root directory of the application."""
APP_ENV: Literal["prod", "docker", "dev"] = AppEnv.environment()
"""[Literal] Environment type."""
# endregion


__all__ = [
    "APP_ENV",
    "APP_ROOT",
    "AppEnv",
]
