"""Data models for desktop-webmail."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True, slots=True)
class Provider:
    name: str
    action_url_template: str
    icon_ref: Optional[str] = None
    inbox_url: str = ""


@dataclass(slots=True)
class MailtoFields:
    """Named components of a ``mailto:`` URL.

    ``to`` and ``url`` are always set; the header fields stay ``None`` unless
    the URL carried them. Query keys without a named slot end up in ``extra``.
    """

    to: str
    url: str
    subject: Optional[str] = None
    cc: Optional[str] = None
    bcc: Optional[str] = None
    body: Optional[str] = None
    extra: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None``."""

        if key in _NAMED_FIELDS:
            return getattr(self, key)
        return self.extra.get(key)

    def set(self, key: str, value: str) -> None:
        if key in _NAMED_FIELDS:
            setattr(self, key, value)
        else:
            self.extra[key] = value


_NAMED_FIELDS = frozenset({"to", "url", "subject", "cc", "bcc", "body"})


@dataclass(frozen=True, slots=True)
class Preference:
    remember: bool = False
    default_provider: str = ""
    default_url: str = ""
    default_inbox: str = ""

    @classmethod
    def from_provider(cls, provider: Provider, *, remember: bool) -> "Preference":
        """Snapshot the URLs of ``provider`` into a new preference."""

        return cls(
            remember=remember,
            default_provider=provider.name,
            default_url=provider.action_url_template,
            default_inbox=provider.inbox_url,
        )

    def is_complete(self) -> bool:
        return bool(
            self.remember and self.default_url and self.default_inbox and self.default_provider
        )
