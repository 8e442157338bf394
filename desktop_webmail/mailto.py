"""Parse ``mailto:`` URLs into :class:`MailtoFields`."""

from __future__ import annotations

import re

from .log import get_logger
from .models import MailtoFields

MAILTO_PREFIX = "mailto:"

_QUERY_DELIMITERS = re.compile(r"[&#?]")
_RESERVED_KEYS = frozenset({"to", "url"})

logger = get_logger(__name__)


def parse_mailto(mailto: str) -> MailtoFields:
    """Split ``mailto`` into recipient, raw URL and header fields.

    The scheme prefix is stripped without checking it. Header keys are
    lower-cased and values are kept verbatim (no percent-decoding). Tokens
    lacking ``=`` are skipped and duplicate keys keep the last value.
    """

    remainder = mailto[len(MAILTO_PREFIX):]
    recipient, separator, query = remainder.partition("?")
    fields = MailtoFields(to=recipient, url=mailto)
    if not separator:
        return fields

    for token in _QUERY_DELIMITERS.split(query):
        key, equals, value = token.partition("=")
        if not equals:
            if token:
                logger.debug("skipping malformed mailto token", token=token)
            continue
        key = _ascii_lower(key)
        if key in _RESERVED_KEYS:
            # recipient and raw URL always come from the URL itself
            fields.extra[key] = value
        else:
            fields.set(key, value)
    return fields


def _ascii_lower(value: str) -> str:
    return value.translate(_ASCII_LOWER)


_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")
