"""
CredentialStore - API key lifecycle

load-on-start, validate-on-save, persist-on-change. The storage medium
is behind the small KeyValueStore interface: QSettings in the app,
an in-memory dict in tests.
"""

import logging
from typing import Dict, Optional

from PyQt6.QtCore import QSettings

from ..config import Config
from ..core.errors import ValidationError


logger = logging.getLogger(__name__)


class KeyValueStore:
    """Minimal durable key-value interface."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str):
        raise NotImplementedError

    def remove(self, key: str):
        raise NotImplementedError


class QSettingsStore(KeyValueStore):
    """
    KeyValueStore backed by QSettings.

    Defaults to the per-user native settings for the application; pass a
    QSettings instance (e.g. an IniFormat file) to use another location.
    """

    def __init__(self, settings: Optional[QSettings] = None):
        self._settings = settings or QSettings(Config.APP_AUTHOR, Config.APP_NAME)

    def get(self, key: str) -> Optional[str]:
        value = self._settings.value(key, None)
        if value is None:
            return None
        return str(value)

    def set(self, key: str, value: str):
        self._settings.setValue(key, value)
        self._settings.sync()

    def remove(self, key: str):
        self._settings.remove(key)
        self._settings.sync()


class MemoryStore(KeyValueStore):
    """Process-local KeyValueStore."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value

    def remove(self, key: str):
        self._data.pop(key, None)


class CredentialStore:
    """
    Holds the generation service API key.

    No expiry and no remote validation: a key the service rejects only
    shows up as a ServiceError when a request is dispatched.

    Usage:
        store = CredentialStore(QSettingsStore())
        if store.load() is None:
            ...  # ask the user
        store.save(text)  # raises ValidationError on blank input
    """

    def __init__(self, backend: KeyValueStore, key: str = Config.CREDENTIAL_KEY):
        self._backend = backend
        self._key = key
        self._value: Optional[str] = None
        self.last_error: Optional[str] = None

    @property
    def has_credential(self) -> bool:
        return bool(self._value)

    def load(self) -> Optional[str]:
        """Read the persisted key into memory. Returns it or None."""
        stored = self._backend.get(self._key)
        self._value = stored.strip() if stored and stored.strip() else None
        logger.debug(f"Credential {'loaded' if self._value else 'not found'}")
        return self._value

    def get(self) -> Optional[str]:
        return self._value

    def save(self, candidate: str) -> str:
        """
        Validate and persist a new key.

        Args:
            candidate: Raw user input

        Returns:
            The stored (stripped) key

        Raises:
            ValidationError: If candidate is empty or whitespace-only.
                The previously stored key is left unchanged.
        """
        value = (candidate or "").strip()
        if not value:
            self.last_error = "Please enter a valid API key"
            raise ValidationError(self.last_error)

        self._backend.set(self._key, value)
        self._value = value
        self.last_error = None
        logger.info("API key saved")
        return value

    def clear(self):
        """Forget the key in memory and in storage."""
        self._backend.remove(self._key)
        self._value = None
        logger.info("API key removed")


__all__ = [
    'KeyValueStore',
    'QSettingsStore',
    'MemoryStore',
    'CredentialStore',
]
