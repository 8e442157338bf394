"""Helpers for the ``[Group]`` / ``Key=value`` files used for configuration.

The files follow the desktop key-file conventions: keys are case-sensitive,
leading whitespace on a line is ignored, there are no continuation lines and
values escape ``\\s``, ``\\n``, ``\\t``, ``\\r`` and ``\\\\``.
"""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .log import get_logger

logger = get_logger(__name__)

# Group names are provider names, so no real group may act as the
# configparser defaults section.
_NO_DEFAULTS_SECTION = "\x00defaults"

_ESCAPES = {"\n": "\\n", "\t": "\\t", "\r": "\\r", "\\": "\\\\"}
_UNESCAPES = {"s": " ", "n": "\n", "t": "\t", "r": "\r", "\\": "\\"}

# (group, key) -> comment and blank lines found above that entry.
# (group, None) is the group header, (None, None) the end of the file.
CommentMap = Dict[Tuple[Optional[str], Optional[str]], List[str]]


def escape_value(value: str) -> str:
    """Escape ``value`` so it survives a write and read as a single line."""

    last = len(value) - 1
    parts: List[str] = []
    for index, char in enumerate(value):
        if char == " " and index in (0, last):
            parts.append("\\s")
        else:
            parts.append(_ESCAPES.get(char, char))
    return "".join(parts)


def unescape_value(value: str) -> str:
    """Undo :func:`escape_value`; unknown sequences are kept as written."""

    parts: List[str] = []
    index = 0
    while index < len(value):
        char = value[index]
        if char == "\\" and index + 1 < len(value) and value[index + 1] in _UNESCAPES:
            parts.append(_UNESCAPES[value[index + 1]])
            index += 2
            continue
        parts.append(char)
        index += 1
    return "".join(parts)


def new_keyfile() -> configparser.ConfigParser:
    """Return a parser with case-sensitive keys and no ``%`` interpolation."""

    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        delimiters=("=",),
        comment_prefixes=("#",),
        default_section=_NO_DEFAULTS_SECTION,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def _unindented(lines: Iterable[str]) -> Iterator[str]:
    # configparser would fold an indented line into the previous value
    for line in lines:
        yield line.lstrip(" \t")


def load_keyfile(path: Path) -> Optional[configparser.ConfigParser]:
    """Parse ``path``; return ``None`` when it is missing or unreadable."""

    if not path.is_file():
        logger.debug("key file not found", path=str(path))
        return None
    parser = new_keyfile()
    try:
        with path.open(encoding="utf-8") as handle:
            parser.read_file(_unindented(handle), source=str(path))
    except (OSError, UnicodeDecodeError, configparser.Error) as exc:
        logger.warning("ignoring unreadable key file", path=str(path), error=str(exc))
        return None
    return parser


def collect_comments(path: Path) -> CommentMap:
    """Map every group and key of ``path`` to the comment lines above it."""

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        return {}

    comments: CommentMap = {}
    group: Optional[str] = None
    pending: List[str] = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            pending.append(stripped)
        elif stripped.startswith("[") and stripped.endswith("]"):
            group = stripped[1:-1]
            comments[(group, None)] = pending
            pending = []
        elif "=" in stripped and group is not None:
            key = stripped.split("=", 1)[0].strip()
            comments[(group, key)] = pending
            pending = []
    if pending:
        comments[(None, None)] = pending
    return comments


def dump_keyfile(keyfile: configparser.ConfigParser, comments: CommentMap | None = None) -> str:
    """Serialise ``keyfile``, putting known comments back above their entries."""

    comments = comments or {}
    lines: List[str] = []
    for position, group in enumerate(keyfile.sections()):
        header_comments = comments.get((group, None))
        if header_comments is None and position:
            lines.append("")
        lines.extend(header_comments or [])
        lines.append(f"[{group}]")
        for key, value in keyfile.items(group):
            lines.extend(comments.get((group, key), []))
            lines.append(f"{key}={value}")
    lines.extend(comments.get((None, None), []))
    return "\n".join(lines) + "\n"
