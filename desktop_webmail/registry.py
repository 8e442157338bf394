"""Webmail provider registry assembled from layered key files."""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .keyfile import load_keyfile, unescape_value
from .log import get_logger
from .models import Provider

ICON_KEY = "ICON"
URL_KEY = "URL"
INBOX_KEY = "INBOX"

logger = get_logger(__name__)


def providers_from_keyfile(keyfile: configparser.ConfigParser) -> List[Provider]:
    """Turn every usable group of ``keyfile`` into a provider, in file order."""

    providers: List[Provider] = []
    for name in keyfile.sections():
        group = keyfile[name]
        action_url = group.get(URL_KEY)
        icon_ref = group.get(ICON_KEY)
        if not name or action_url is None:
            logger.debug("dropping provider group without URL", group=name)
            continue
        providers.append(
            Provider(
                name=name,
                action_url_template=unescape_value(action_url),
                icon_ref=unescape_value(icon_ref) if icon_ref is not None else None,
                inbox_url=unescape_value(group.get(INBOX_KEY, "")),
            )
        )
    return providers


class ProviderRegistry:
    """Ordered, append-only collection of providers.

    Sources are read in the order given and their providers appended as
    they come; a name defined in several sources shows up several times.
    """

    def __init__(self, providers: Iterable[Provider] = ()) -> None:
        self.providers: List[Provider] = list(providers)

    @classmethod
    def load(cls, sources: Iterable[Path]) -> "ProviderRegistry":
        registry = cls()
        for source in sources:
            keyfile = load_keyfile(source)
            if keyfile is None:
                continue
            loaded = providers_from_keyfile(keyfile)
            logger.debug("loaded provider source", path=str(source), count=len(loaded))
            registry.providers.extend(loaded)
        return registry

    def __iter__(self) -> Iterator[Provider]:
        return iter(self.providers)

    def __len__(self) -> int:
        return len(self.providers)

    def sorted_by_name(self) -> List[Provider]:
        """Providers ordered for display: ordinal, case-sensitive name order."""

        return sorted(self.providers, key=lambda provider: provider.name)

    def find(self, name: str) -> Optional[Provider]:
        """Return the first provider called ``name`` in load order."""

        for provider in self.providers:
            if provider.name == name:
                return provider
        return None
