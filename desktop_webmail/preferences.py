"""Persist and restore the user's webmail choice."""

from __future__ import annotations

from pathlib import Path

from .keyfile import (
    collect_comments,
    dump_keyfile,
    escape_value,
    load_keyfile,
    new_keyfile,
    unescape_value,
)
from .log import get_logger
from .models import Preference

CONFIG_GROUP = "Config"
REMEMBER_KEY = "remember"
PROVIDER_KEY = "default-provider"
URL_KEY = "default-url"
INBOX_KEY = "default-inbox"

logger = get_logger(__name__)


class PreferenceWriteError(RuntimeError):
    """Raised when the preference file cannot be written."""


class PreferenceStore:
    """Read and write the ``[Config]`` group of the preference file."""

    def __init__(self, path: Path):
        self.path = path

    def read(self) -> Preference:
        keyfile = load_keyfile(self.path)
        if keyfile is None or not keyfile.has_section(CONFIG_GROUP):
            return Preference()
        group = keyfile[CONFIG_GROUP]
        try:
            remember = group.getboolean(REMEMBER_KEY, fallback=False)
        except ValueError:
            logger.warning("invalid remember flag", path=str(self.path), value=group.get(REMEMBER_KEY))
            remember = False
        return Preference(
            remember=remember,
            default_provider=unescape_value(group.get(PROVIDER_KEY, "")),
            default_url=unescape_value(group.get(URL_KEY, "")),
            default_inbox=unescape_value(group.get(INBOX_KEY, "")),
        )

    def write(self, preference: Preference) -> None:
        """Replace the stored preference, keeping other groups and comments."""

        keyfile = load_keyfile(self.path)
        comments = collect_comments(self.path) if keyfile is not None else {}
        if keyfile is None:
            keyfile = new_keyfile()
        if not keyfile.has_section(CONFIG_GROUP):
            keyfile.add_section(CONFIG_GROUP)
        group = keyfile[CONFIG_GROUP]
        group[REMEMBER_KEY] = "true" if preference.remember else "false"
        group[PROVIDER_KEY] = escape_value(preference.default_provider)
        group[URL_KEY] = escape_value(preference.default_url)
        group[INBOX_KEY] = escape_value(preference.default_inbox)

        text = dump_keyfile(keyfile, comments)
        try:
            if not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise PreferenceWriteError(f"Could not write preferences to {self.path}") from exc
        logger.debug("stored preference", path=str(self.path), provider=preference.default_provider)
