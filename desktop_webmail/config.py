"""Application context: paths and flags resolved once at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

APP_NAME = "desktop-webmail"
REGISTRY_FILE_NAME = "webmailers.ini"
PREFERENCE_FILE_NAME = "desktop-webmail.ini"

PACKAGE_DATA_DIR = Path(__file__).parent / "data"
DEFAULT_SYSCONF_DIR = Path("/etc") / APP_NAME


def _xdg_path(env_var: str, fallback: Path) -> Path:
    raw = os.getenv(env_var)
    if raw:
        return Path(raw).expanduser()
    return fallback


@dataclass(frozen=True)
class AppContext:
    """Everything the resolver needs to know about the environment."""

    config_dir: Path
    cache_dir: Path
    bundled_search_dirs: Tuple[Path, ...] = (PACKAGE_DATA_DIR,)
    sysconf_dir: Path = DEFAULT_SYSCONF_DIR
    verbose: bool = False

    @property
    def preference_path(self) -> Path:
        return self.config_dir / PREFERENCE_FILE_NAME

    @property
    def user_registry_path(self) -> Path:
        return self.config_dir / REGISTRY_FILE_NAME

    @property
    def system_registry_path(self) -> Path:
        return self.sysconf_dir / REGISTRY_FILE_NAME

    @property
    def bundled_registry_path(self) -> Optional[Path]:
        """Return the first bundled registry file found, if any."""

        for directory in self.bundled_search_dirs:
            candidate = directory / REGISTRY_FILE_NAME
            if candidate.is_file():
                return candidate
        return None

    @property
    def registry_sources(self) -> Tuple[Path, ...]:
        """Registry files in load order: bundled, user, system override."""

        bundled = self.bundled_registry_path
        sources = (self.user_registry_path, self.system_registry_path)
        if bundled is None:
            return sources
        return (bundled, *sources)


def load_context(base_dir: Path | None = None) -> AppContext:
    """Build the context from XDG locations and environment overrides."""

    base_dir = base_dir or Path.cwd()
    home = Path.home()
    config_dir = _xdg_path("XDG_CONFIG_HOME", home / ".config") / APP_NAME
    cache_dir = _xdg_path("XDG_CACHE_HOME", home / ".cache") / APP_NAME

    data_override = os.getenv("DESKTOP_WEBMAIL_DATA_DIR")
    data_dir = Path(data_override).expanduser() if data_override else PACKAGE_DATA_DIR

    sysconf_override = os.getenv("DESKTOP_WEBMAIL_SYSCONF_DIR")
    sysconf_dir = Path(sysconf_override).expanduser() if sysconf_override else DEFAULT_SYSCONF_DIR

    verbose = os.getenv("DESKTOP_WEBMAIL_DEBUG", "false").lower() in {"1", "true", "yes"}

    return AppContext(
        config_dir=config_dir,
        cache_dir=cache_dir,
        bundled_search_dirs=(data_dir, base_dir),
        sysconf_dir=sysconf_dir,
        verbose=verbose,
    )


def ensure_dirs(context: AppContext) -> None:
    """Create the per-user config and cache directories."""

    for directory in (context.cache_dir, context.config_dir):
        directory.mkdir(mode=0o700, parents=True, exist_ok=True)
