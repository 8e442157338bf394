"""Hand a URL to the desktop's default handler without waiting for it."""

from __future__ import annotations

import os
import subprocess
import sys
from typing import Protocol

from .log import get_logger

logger = get_logger(__name__)


class OpenerError(RuntimeError):
    """Raised when the system URL opener cannot be started."""


class UrlOpener(Protocol):
    def __call__(self, url: str) -> None:
        ...


def _spawn(command: list[str]) -> None:
    subprocess.Popen(
        command,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


def _open_macos(url: str) -> None:
    _spawn(["open", url])


def _open_windows(url: str) -> None:
    os.startfile(url)  # type: ignore[attr-defined]


def _open_linux(url: str) -> None:
    _spawn(["xdg-open", url])


def open_url(url: str) -> None:
    """Start the platform opener for ``url``; the child is not awaited."""

    opener: UrlOpener
    if sys.platform.startswith("darwin"):
        opener = _open_macos
    elif os.name == "nt":
        opener = _open_windows
    else:
        opener = _open_linux
    logger.info("opening url", url=url)
    try:
        opener(url)
    except OSError as exc:
        raise OpenerError(f"Could not open {url!r} with the desktop URL handler.") from exc
