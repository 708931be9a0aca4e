"""Tests for CredentialStore"""

import pytest
from PyQt6.QtCore import QSettings

from co_drawing.core.errors import ValidationError
from co_drawing.services.credential_store import CredentialStore, MemoryStore, QSettingsStore


def test_load_missing_returns_none():
    store = CredentialStore(MemoryStore())
    assert store.load() is None
    assert not store.has_credential


def test_whitespace_value_counts_as_missing():
    store = CredentialStore(MemoryStore({"credentials/api_key": "   "}))
    assert store.load() is None


def test_save_strips_and_persists():
    backend = MemoryStore()
    store = CredentialStore(backend)
    assert store.save("  abc123  ") == "abc123"
    assert store.get() == "abc123"
    assert backend.get("credentials/api_key") == "abc123"


@pytest.mark.parametrize("candidate", ["", "   ", None])
def test_blank_save_fails_and_keeps_previous(candidate):
    store = CredentialStore(MemoryStore())
    store.save("first")

    with pytest.raises(ValidationError, match="Please enter a valid API key"):
        store.save(candidate)

    assert store.get() == "first"
    assert store.last_error == "Please enter a valid API key"


def test_successful_save_clears_error():
    store = CredentialStore(MemoryStore())
    with pytest.raises(ValidationError):
        store.save("")
    store.save("key")
    assert store.last_error is None


def test_clear_removes_key():
    backend = MemoryStore()
    store = CredentialStore(backend)
    store.save("key")
    store.clear()
    assert store.get() is None
    assert backend.get("credentials/api_key") is None


def test_survives_restart_with_qsettings(qapp, tmp_path):
    path = str(tmp_path / "settings.ini")

    first = CredentialStore(QSettingsStore(QSettings(path, QSettings.Format.IniFormat)))
    first.save("persisted-key")

    second = CredentialStore(QSettingsStore(QSettings(path, QSettings.Format.IniFormat)))
    assert second.load() == "persisted-key"
