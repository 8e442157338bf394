from __future__ import annotations

from pathlib import Path
from unittest import mock

import pytest

from desktop_webmail.models import Preference
from desktop_webmail.preferences import PreferenceStore, PreferenceWriteError


def test_missing_file_reads_defaults(tmp_path: Path) -> None:
    assert PreferenceStore(tmp_path / "absent.ini").read() == Preference()


def test_unparsable_file_reads_defaults(tmp_path: Path) -> None:
    path = tmp_path / "prefs.ini"
    path.write_text("remember=true\nthis is not a key file\n", encoding="utf-8")
    assert PreferenceStore(path).read() == Preference()


def test_partial_file_fills_defaults(tmp_path: Path) -> None:
    path = tmp_path / "prefs.ini"
    path.write_text("[Config]\nremember=true\ndefault-provider=Gmail\n", encoding="utf-8")
    preference = PreferenceStore(path).read()
    assert preference == Preference(remember=True, default_provider="Gmail")
    assert preference.is_complete() is False


def test_invalid_boolean_reads_as_false(tmp_path: Path) -> None:
    path = tmp_path / "prefs.ini"
    path.write_text("[Config]\nremember=perhaps\ndefault-url=https://x/\n", encoding="utf-8")
    preference = PreferenceStore(path).read()
    assert preference.remember is False
    assert preference.default_url == "https://x/"


def test_write_then_read_round_trip(tmp_path: Path, gmail_preference: Preference) -> None:
    store = PreferenceStore(tmp_path / "nested" / "prefs.ini")
    store.write(gmail_preference)
    assert store.read() == gmail_preference

    replaced = Preference(
        remember=False,
        default_provider="Yahoo",
        default_url="https://compose.mail.yahoo.com/?to=%t",
        default_inbox="https://mail.yahoo.com/",
    )
    store.write(replaced)
    assert store.read() == replaced


def test_write_uses_key_file_layout(tmp_path: Path, gmail_preference: Preference) -> None:
    path = tmp_path / "prefs.ini"
    PreferenceStore(path).write(gmail_preference)
    text = path.read_text(encoding="utf-8")
    assert "[Config]" in text
    assert "remember=true" in text
    assert "default-provider=Gmail" in text
    assert "default-url=https://mail.google.com/mail/?view=cm&to=%t&su=%j" in text
    assert "default-inbox=https://mail.google.com/mail/" in text


def test_write_keeps_unrelated_groups(tmp_path: Path, gmail_preference: Preference) -> None:
    path = tmp_path / "prefs.ini"
    path.write_text("[Window]\nwidth=400\n\n[Config]\nremember=false\nextra=kept\n", encoding="utf-8")
    PreferenceStore(path).write(gmail_preference)
    text = path.read_text(encoding="utf-8")
    assert "[Window]" in text
    assert "width=400" in text
    assert "extra=kept" in text
    assert PreferenceStore(path).read() == gmail_preference


def test_write_failure_is_reported(tmp_path: Path, gmail_preference: Preference) -> None:
    store = PreferenceStore(tmp_path / "prefs.ini")
    with mock.patch.object(Path, "write_text", side_effect=PermissionError("read-only")):
        with pytest.raises(PreferenceWriteError) as excinfo:
            store.write(gmail_preference)
    assert isinstance(excinfo.value.__cause__, PermissionError)
    assert store.read() == Preference()


@pytest.mark.parametrize(
    "preference",
    [
        Preference(True, "Gmail ", "https://x/?to=%t", "https://x/"),
        Preference(True, "Gmail", " https://x/?to=%t", "https://x/  "),
        Preference(False, "Gmail", "https://x/\n#frag", "https://x/\tinbox"),
        Preference(True, "back\\slash", "https://x/?to=%t\\n", " "),
    ],
)
def test_round_trip_keeps_whitespace_and_backslashes(tmp_path: Path, preference: Preference) -> None:
    store = PreferenceStore(tmp_path / "prefs.ini")
    store.write(preference)
    assert store.read() == preference
    assert len(store.path.read_text(encoding="utf-8").splitlines()) == 5


def test_escaped_values_use_key_file_sequences(tmp_path: Path) -> None:
    path = tmp_path / "prefs.ini"
    PreferenceStore(path).write(Preference(True, " Gmail ", "a\nb", "c\\d"))
    text = path.read_text(encoding="utf-8")
    assert "default-provider=\\sGmail\\s" in text
    assert "default-url=a\\nb" in text
    assert "default-inbox=c\\\\d" in text


def test_write_keeps_comments(tmp_path: Path, gmail_preference: Preference) -> None:
    path = tmp_path / "prefs.ini"
    path.write_text(
        "# desktop-webmail settings\n"
        "[Config]\n"
        "# set by the dialog\n"
        "remember=false\n"
        "\n"
        "# window geometry\n"
        "[Window]\n"
        "width=400\n"
        "# end of file\n",
        encoding="utf-8",
    )
    PreferenceStore(path).write(gmail_preference)
    lines = path.read_text(encoding="utf-8").splitlines()

    assert lines[:4] == ["# desktop-webmail settings", "[Config]", "# set by the dialog", "remember=true"]
    assert lines.index("# window geometry") == lines.index("[Window]") - 1
    assert lines[-1] == "# end of file"
    assert PreferenceStore(path).read() == gmail_preference
