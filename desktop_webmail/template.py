"""Expand provider compose-URL templates."""

from __future__ import annotations

from typing import Dict, List

from .models import MailtoFields

ESCAPE = "%"

ESCAPE_FIELDS: Dict[str, str] = {
    "j": "subject",
    "k": "cc",
    "l": "bcc",
    "m": "body",
    "s": "url",
    "t": "to",
}


def expand_template(template: str, fields: MailtoFields) -> str:
    """Substitute ``%x`` escapes in ``template`` with values from ``fields``.

    Every escape consumes two characters. Unknown codes and escapes whose
    field is missing produce nothing; a trailing ``%`` is dropped. Inserted
    values are not scanned again.
    """

    parts: List[str] = []
    position = 0
    length = len(template)
    while position < length:
        escape_at = template.find(ESCAPE, position)
        if escape_at == -1:
            parts.append(template[position:])
            break
        parts.append(template[position:escape_at])
        code = template[escape_at + 1 : escape_at + 2]
        key = ESCAPE_FIELDS.get(code)
        if key is not None:
            value = fields.get(key)
            if value is not None:
                parts.append(value)
        position = escape_at + 2
    return "".join(parts)
