from __future__ import annotations

from pathlib import Path

import pytest

from desktop_webmail.config import AppContext
from desktop_webmail.models import Preference

GMAIL_TEMPLATE = "https://mail.google.com/mail/?view=cm&to=%t&su=%j"
GMAIL_INBOX = "https://mail.google.com/mail/"


@pytest.fixture()
def context(tmp_path: Path) -> AppContext:
    data_dir = tmp_path / "share"
    data_dir.mkdir()
    return AppContext(
        config_dir=tmp_path / "config",
        cache_dir=tmp_path / "cache",
        bundled_search_dirs=(data_dir,),
        sysconf_dir=tmp_path / "etc",
    )


@pytest.fixture()
def gmail_preference() -> Preference:
    return Preference(
        remember=True,
        default_provider="Gmail",
        default_url=GMAIL_TEMPLATE,
        default_inbox=GMAIL_INBOX,
    )


@pytest.fixture()
def write_keyfile():
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
