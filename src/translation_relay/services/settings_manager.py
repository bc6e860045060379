"""Settings Manager - Handles user settings, provider configuration and API keys."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from translation_relay.core import UserSettings

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "TRANSLATION_RELAY_HOME"

# Environment variables consulted when a provider's api_key is blank
API_KEY_ENV_VARS = {
    "deepl": "DEEPL_API_KEY",
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "libre": "LIBRETRANSLATE_API_KEY",
}


class SettingsManager:
    """
    Manages settings and API key configuration.

    Reads a .env file from the project root, then keeps three JSON files in
    the data directory (TRANSLATION_RELAY_HOME, default ~/.translation_relay):
    settings.json, providers.json and translation_cache.json.
    """

    SETTINGS_FILENAME = "settings.json"
    PROVIDERS_FILENAME = "providers.json"
    CACHE_FILENAME = "translation_cache.json"

    def __init__(self, project_root: Optional[Path] = None, data_dir: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
            data_dir: Directory for settings, provider config and cache.
                      If None, uses TRANSLATION_RELAY_HOME or ~/.translation_relay.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root
        self._data_dir = Path(data_dir) if data_dir is not None else None

    @property
    def data_dir(self) -> Path:
        if self._data_dir is not None:
            return self._data_dir
        home = os.getenv(HOME_ENV_VAR)
        if home and home.strip():
            return Path(home.strip()).expanduser()
        return Path.home() / ".translation_relay"

    @property
    def settings_path(self) -> Path:
        return self.data_dir / self.SETTINGS_FILENAME

    @property
    def providers_path(self) -> Path:
        return self.data_dir / self.PROVIDERS_FILENAME

    @property
    def cache_path(self) -> Path:
        return self.data_dir / self.CACHE_FILENAME

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)

    # ------------------------------------------------------------------
    # User settings
    # ------------------------------------------------------------------

    def load_settings(self) -> UserSettings:
        """Read settings.json; missing or unreadable files give defaults."""
        data = self._read_json(self.settings_path)
        if data is None:
            return UserSettings()
        return UserSettings.from_dict(data)

    def save_settings(self, settings: UserSettings) -> bool:
        return self._write_json(self.settings_path, settings.to_dict())

    # ------------------------------------------------------------------
    # Provider configuration
    # ------------------------------------------------------------------

    def load_provider_config(self, defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Read providers.json, creating it from defaults when it does not exist.

        Blank api_key values are filled from the provider's environment
        variable (see API_KEY_ENV_VARS). An unparsable file gives {}.
        """
        if not self.providers_path.exists():
            logger.info("No provider config found, creating default configuration")
            config = json.loads(json.dumps(defaults or {}))
            self._write_json(self.providers_path, config)
        else:
            config = self._read_json(self.providers_path)
            if config is None:
                logger.error("Failed to parse provider config file %s", self.providers_path)
                config = {}

        for provider_id in API_KEY_ENV_VARS:
            block = config.get(provider_id)
            if block is not None and not isinstance(block, dict):
                continue
            key = self.get_api_key(provider_id)
            if key and not (block or {}).get("api_key"):
                config.setdefault(provider_id, {})["api_key"] = key
        return config

    def get_api_key(self, provider_id: str) -> Optional[str]:
        """Get a provider's API key from the environment."""
        env_var = API_KEY_ENV_VARS.get(provider_id)
        key = os.getenv(env_var) if env_var else None
        return key.strip() if key and key.strip() else None

    def set_api_key(self, provider_id: str, api_key: str) -> bool:
        """Store an API key in providers.json and enable that provider."""
        config = self._read_json(self.providers_path) or {}
        block = config.get(provider_id)
        if not isinstance(block, dict):
            block = {}
        block["api_key"] = api_key
        block["enabled"] = True
        config[provider_id] = block
        saved = self._write_json(self.providers_path, config)
        if saved:
            logger.info("Updated API key for provider: %s", provider_id)
        return saved

    def set_provider_enabled(self, provider_id: str, enabled: bool) -> bool:
        """Persist a provider's enabled flag in providers.json."""
        config = self._read_json(self.providers_path) or {}
        block = config.get(provider_id)
        if not isinstance(block, dict):
            block = {}
        block["enabled"] = enabled
        config[provider_id] = block
        return self._write_json(self.providers_path, config)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_json(self, path: Path) -> Optional[Dict[str, Any]]:
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Error reading %s: %s", path, e)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", path)
            return None
        return data

    def _write_json(self, path: Path, data: Dict[str, Any]) -> bool:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.error("Error writing %s: %s", path, e)
            return False
        return True
