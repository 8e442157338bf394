"""Decide which URL a ``mailto:`` invocation should open."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional

from .log import get_logger
from .mailto import parse_mailto
from .models import Preference, Provider
from .preferences import PreferenceStore, PreferenceWriteError
from .registry import ProviderRegistry
from .template import expand_template

logger = get_logger(__name__)


class SelectionCancelled(Exception):
    """Raised by a selection collaborator when the user backs out."""


@dataclass(frozen=True)
class Selection:
    provider: Provider
    remember: bool


class ResolverState(enum.Enum):
    NEEDS_SELECTION = "needs-selection"
    READY = "ready"


@dataclass(frozen=True)
class Resolution:
    """Outcome of one invocation; ``url`` is what was handed to the opener."""

    preference: Preference
    url: Optional[str] = None
    cancelled: bool = False


SelectProvider = Callable[[ProviderRegistry, Preference], Selection]
OpenUrl = Callable[[str], None]
LoadRegistry = Callable[[], ProviderRegistry]


class Resolver:
    """Operations shared between the command line entry point and tests."""

    def __init__(
        self,
        store: PreferenceStore,
        load_registry: LoadRegistry,
        select: SelectProvider,
        open_url: OpenUrl,
    ) -> None:
        self.store = store
        self.load_registry = load_registry
        self.select = select
        self.open_url = open_url

    def state(self, preference: Preference, *, force_config: bool = False) -> ResolverState:
        if preference.is_complete() and not force_config:
            return ResolverState.READY
        return ResolverState.NEEDS_SELECTION

    def resolve(self, argument: str | None = None, *, force_config: bool = False) -> Resolution:
        """Run one invocation: select a provider if needed, then open a URL.

        ``argument`` is a ``mailto:`` URL or ``None`` to open the inbox. With
        ``force_config`` the selection always runs and nothing is opened.
        """

        preference = self.store.read()
        if self.state(preference, force_config=force_config) is ResolverState.NEEDS_SELECTION:
            try:
                selection = self.select(self.load_registry(), preference)
            except SelectionCancelled:
                logger.info("provider selection cancelled")
                return Resolution(preference=preference, cancelled=True)
            preference = self.commit(selection)

        if force_config:
            return Resolution(preference=preference)

        url = self.target_url(preference, argument)
        if not url:
            logger.warning(
                "no webmail url configured",
                provider=preference.default_provider,
                compose=argument is not None,
            )
            return Resolution(preference=preference)
        self.open_url(url)
        return Resolution(preference=preference, url=url)

    def commit(self, selection: Selection) -> Preference:
        """Store ``selection`` and return the preference as read back."""

        try:
            self.store.write(Preference.from_provider(selection.provider, remember=selection.remember))
        except PreferenceWriteError as exc:
            logger.warning("could not store provider selection", error=str(exc.__cause__ or exc))
        return self.store.read()

    @staticmethod
    def target_url(preference: Preference, argument: str | None) -> str:
        if argument is None:
            return preference.default_inbox
        if not preference.default_url:
            return ""
        return expand_template(preference.default_url, parse_mailto(argument))
