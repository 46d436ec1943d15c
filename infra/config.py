"""
Configuration Manager
---------------------
Client settings from YAML with environment variable overrides.

Rules:
- Credentials never in code
- Environment wins over the config file
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import logging
import os

import yaml

DEFAULT_BASE_URL = "http://engine.hotellook.com/api/v2/"
DEFAULT_DEMO_RESULTS = Path(__file__).resolve().parent.parent / "api" / "data" / "search_results_demo.json"

ENV_PREFIX = "HOTELLOOK"


@dataclass
class ClientConfig:
    """Configuration for the Hotellook API client."""
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    user_agent: str = "hotellook-client/1.0"
    demo_results_path: Path = DEFAULT_DEMO_RESULTS

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            self.base_url += "/"
        self.demo_results_path = Path(self.demo_results_path)


class ConfigManager:
    """
    Centralized configuration management.
    Loads configuration from YAML with environment variable overrides.
    """

    def __init__(self, config_path: str = "hotellook.yaml"):
        self._config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._logger = logging.getLogger("hotellook.infra.config")

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file."""
        if self._config_path.exists():
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            self._logger.info(f"Loaded config from {self._config_path}")
        else:
            self._logger.debug(f"Config file not found: {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.
        Supports dot notation: 'section.key'
        Environment variables override file config.
        """
        env_key = f"{ENV_PREFIX}_{key.upper().replace('.', '_')}"
        env_value = os.getenv(env_key)
        if env_value is not None:
            return env_value

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def client_config(self) -> ClientConfig:
        """Build the client settings from the 'client' section."""
        defaults = ClientConfig()
        return ClientConfig(
            base_url=str(self.get("client.base_url", defaults.base_url)),
            timeout_seconds=float(self.get("client.timeout_seconds", defaults.timeout_seconds)),
            user_agent=str(self.get("client.user_agent", defaults.user_agent)),
            demo_results_path=Path(self.get("client.demo_results_path", defaults.demo_results_path)),
        )


def load_credentials(config: Optional[ConfigManager] = None) -> Tuple[int, str]:
    """
    Load marker and token.

    HOTELLOOK_MARKER / HOTELLOOK_TOKEN win over the 'credentials' section.
    A missing marker comes back as 0, a missing token as "".
    """
    config = config or ConfigManager()
    marker = os.getenv(f"{ENV_PREFIX}_MARKER") or config.get("credentials.marker", 0)
    token = os.getenv(f"{ENV_PREFIX}_TOKEN") or config.get("credentials.token", "")

    try:
        marker = int(marker or 0)
    except (TypeError, ValueError):
        logging.getLogger("hotellook.infra.config").warning(
            f"Ignoring non-numeric marker: {marker!r}"
        )
        marker = 0

    return marker, str(token or "")
