from __future__ import annotations

import os
import sys
from unittest import mock

import pytest

from desktop_webmail.config import AppContext
from desktop_webmail.controller import Resolver, Selection, SelectionCancelled
from desktop_webmail.opener import open_url
from desktop_webmail.preferences import PreferenceStore
from desktop_webmail.registry import ProviderRegistry

SOURCES = {
    "bundled": "[Gmail]\nICON=gmail\nURL=https://mail.google.com/mail/?view=cm&to=%t&su=%j\nINBOX=https://mail.google.com/mail/\n",
    "user": "[Fastmail]\nURL=https://app.fastmail.com/mail/compose?to=%t\nINBOX=https://app.fastmail.com/\n",
    "system": "[Gmail]\nURL=https://mail.google.com/a/corp/?to=%t\nINBOX=https://mail.google.com/a/corp/\n",
}


def _write_sources(context: AppContext, write_keyfile) -> None:
    write_keyfile(context.bundled_search_dirs[0] / "webmailers.ini", SOURCES["bundled"])
    write_keyfile(context.user_registry_path, SOURCES["user"])
    write_keyfile(context.system_registry_path, SOURCES["system"])


@pytest.fixture()
def linux(monkeypatch):
    monkeypatch.setattr(os, "name", "posix")
    monkeypatch.setattr(sys, "platform", "linux")


def test_first_run_selects_then_composes(context, write_keyfile, linux):
    _write_sources(context, write_keyfile)
    seen = {}

    def choose_first_gmail(registry, preference):
        seen["names"] = [provider.name for provider in registry.sorted_by_name()]
        return Selection(provider=registry.find("Gmail"), remember=True)

    resolver = Resolver(
        store=PreferenceStore(context.preference_path),
        load_registry=lambda: ProviderRegistry.load(context.registry_sources),
        select=choose_first_gmail,
        open_url=open_url,
    )
    with mock.patch("subprocess.Popen") as popen:
        resolver.resolve("mailto:bob@x.com?subject=Hi")
        popen.assert_called_once()
        args, _kwargs = popen.call_args
        assert args[0] == ["xdg-open", "https://mail.google.com/mail/?view=cm&to=bob@x.com&su=Hi"]

    assert seen["names"] == ["Fastmail", "Gmail", "Gmail"]

    def must_not_ask(registry, preference):
        raise AssertionError("preference should have been remembered")

    resolver.select = must_not_ask
    with mock.patch("subprocess.Popen") as popen:
        resolver.resolve(None)
        assert popen.call_args.args[0] == ["xdg-open", "https://mail.google.com/mail/"]


def test_cancelled_first_run_opens_nothing(context, write_keyfile, linux):
    _write_sources(context, write_keyfile)

    def cancel(registry, preference):
        raise SelectionCancelled()

    resolver = Resolver(
        store=PreferenceStore(context.preference_path),
        load_registry=lambda: ProviderRegistry.load(context.registry_sources),
        select=cancel,
        open_url=open_url,
    )
    with mock.patch("subprocess.Popen") as popen:
        result = resolver.resolve(None)
        popen.assert_not_called()
    assert result.cancelled is True
