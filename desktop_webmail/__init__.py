"""desktop-webmail: open ``mailto:`` links with a webmail provider."""

from .config import AppContext, ensure_dirs, load_context
from .controller import Resolver, Selection, SelectionCancelled
from .mailto import parse_mailto
from .models import MailtoFields, Preference, Provider
from .preferences import PreferenceStore, PreferenceWriteError
from .registry import ProviderRegistry
from .template import expand_template

__all__ = [
    "AppContext",
    "MailtoFields",
    "Preference",
    "PreferenceStore",
    "PreferenceWriteError",
    "Provider",
    "ProviderRegistry",
    "Resolver",
    "Selection",
    "SelectionCancelled",
    "ensure_dirs",
    "expand_template",
    "load_context",
    "parse_mailto",
]
