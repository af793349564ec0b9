"""API-key resolution.

The key is looked up first in the project-scoped settings document
(``<root>/.codeguide/settings.json``) and then in a global configuration
store. Unreadable or malformed settings never abort resolution; they are
logged and treated as "not found".
"""

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from codeguide.config import (
    API_KEY_ENV_VAR,
    API_KEY_SETTING,
    APP_NAME,
    CONFIG_HOME_ENV_VAR,
    SETTINGS_DIRNAME,
    SETTINGS_FILENAME,
)
from codeguide.models import GLOBAL, PROJECT, Credential

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Settings documents
# ---------------------------------------------------------------------------


def read_setting(path: Path, key: str, log: logging.Logger = logger) -> str | None:
    """Return the non-empty string stored under *key* in the JSON file at *path*.

    Missing files, read errors, undecodable bytes, invalid JSON, non-object
    documents and non-string values all yield ``None``. A UTF-8 BOM is accepted.
    """
    try:
        raw = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        log.debug("Settings file not found: %s", path)
        return None
    except OSError as exc:
        log.warning("Could not read settings file %s: %s", path, exc)
        return None
    except UnicodeDecodeError as exc:
        log.warning("Ignoring settings file %s: not valid UTF-8 (%s)", path, exc.reason)
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        log.warning("Ignoring malformed settings file %s: %s", path, exc)
        return None

    if not isinstance(data, dict):
        log.warning("Ignoring settings file %s: top level is not an object", path)
        return None

    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        log.warning("Ignoring %r in %s: expected a string", key, path)
        return None

    value = value.strip()
    return value or None


def project_settings_path(root: Path) -> Path:
    """Return the project settings document path under *root*."""
    return Path(root) / SETTINGS_DIRNAME / SETTINGS_FILENAME


def user_config_home() -> Path:
    """Return the directory holding per-user codeguide settings.

    ``$CODEGUIDE_CONFIG_HOME`` wins, then ``$XDG_CONFIG_HOME/codeguide``,
    then ``~/.config/codeguide``.
    """
    override = os.environ.get(CONFIG_HOME_ENV_VAR)
    if override:
        return Path(override)
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_NAME


# ---------------------------------------------------------------------------
# Global stores
# ---------------------------------------------------------------------------


class ConfigStore(Protocol):
    """Key/value lookup owned by the host."""

    def get(self, key: str) -> str | None: ...


class UserSettingsStore:
    """Global store backed by the environment and the user settings file.

    ``CODEGUIDE_GEMINI_API_KEY`` overrides the file for the API-key setting.
    """

    def __init__(
        self,
        settings_path: Path | None = None,
        *,
        environ: dict[str, str] | None = None,
        log: logging.Logger = logger,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._settings_path = settings_path
        self._log = log

    @property
    def settings_path(self) -> Path:
        if self._settings_path is None:
            return user_config_home() / SETTINGS_FILENAME
        return self._settings_path

    def get(self, key: str) -> str | None:
        if key == API_KEY_SETTING:
            env_value = self._environ.get(API_KEY_ENV_VAR, "").strip()
            if env_value:
                self._log.debug("API key taken from $%s", API_KEY_ENV_VAR)
                return env_value
        return read_setting(self.settings_path, key, self._log)


class DictStore:
    """In-memory store, for hosts that already hold their settings."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class CredentialResolver:
    """Determine the API key for one invocation.

    Args:
        project_root: Root of the active project, if the caller knows it.
        default_root: Explicitly configured fallback directory used when
            *project_root* is unknown. There is no built-in default.
        global_store: Store queried when the project file yields nothing.
        key: Setting name holding the API key.
        log: Logger receiving diagnostics.
    """

    def __init__(
        self,
        project_root: Path | None = None,
        *,
        default_root: Path | None = None,
        global_store: ConfigStore | None = None,
        key: str = API_KEY_SETTING,
        log: logging.Logger = logger,
    ) -> None:
        self.project_root = project_root
        self.default_root = default_root
        self.global_store = global_store if global_store is not None else UserSettingsStore(log=log)
        self.key = key
        self._log = log

    def base_directory(self) -> Path | None:
        """Return the directory whose settings file is consulted, if any."""
        if self.project_root is not None:
            return Path(self.project_root)
        if self.default_root is not None:
            self._log.debug("Using configured default root: %s", self.default_root)
            return Path(self.default_root)
        return None

    def resolve(self) -> Credential | None:
        """Return the first non-empty credential found, or ``None``."""
        base = self.base_directory()
        if base is not None:
            path = project_settings_path(base)
            self._log.debug("Checking for settings file at %s", path)
            value = read_setting(path, self.key, self._log)
            if value:
                return Credential(value=value, source=PROJECT)

        value = self.global_store.get(self.key)
        if value and value.strip():
            return Credential(value=value.strip(), source=GLOBAL)

        self._log.debug("No API key found under %r", self.key)
        return None
