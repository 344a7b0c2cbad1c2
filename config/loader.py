"""Configuration loader for the OAuth 2.0 client

Values are resolved in this order:
1. Environment variables (highest priority)
2. .env file (OAUTH2_ENV_FILE, or '.env' in the current directory)
3. Hardcoded defaults (lowest priority)
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_FILE_VAR = "OAUTH2_ENV_FILE"
TRUE_VALUES = ('true', '1', 'yes', 'on')


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


# Checked in order: bool must come before int
_PARSERS: Dict[type, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: int,
    float: float,
}


class ConfigLoader:
    """Reads typed settings from the environment after loading a .env file"""

    def __init__(self, env_path: Optional[str] = None):
        """Initialize the config loader

        Args:
            env_path: Path to a .env file. Defaults to '.env' in the current directory.
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self._load_env_file()

    def _load_env_file(self):
        if not self.env_path.exists():
            logger.debug(f"No .env file at {self.env_path}, reading the environment only")
            return
        # Existing environment variables are never overridden
        load_dotenv(dotenv_path=self.env_path, override=False)
        logger.debug(f"Loaded environment variables from {self.env_path}")

    def get(self, env_var: str, default: Any) -> Any:
        """Get a value converted to the type of its default

        Args:
            env_var: Environment variable name
            default: Value used when the variable is unset or unparseable

        Returns:
            The environment value coerced to type(default), or default
        """
        raw = os.getenv(env_var)
        if raw is None:
            return default

        for value_type, parse in _PARSERS.items():
            if isinstance(default, value_type):
                try:
                    return parse(raw)
                except ValueError:
                    logger.warning(
                        f"Invalid {value_type.__name__} for {env_var}: {raw!r}, using default {default!r}"
                    )
                    return default
        return raw

    def get_optional(self, env_var: str, default: Optional[str] = None) -> Optional[str]:
        """Get an optional string; blank values count as unset"""
        value = os.getenv(env_var)
        if value is None or value.strip() == "":
            return default
        return value

    def get_choice(self, env_var: str, choices: Iterable[str], default: str) -> str:
        """Get a lowercase value restricted to choices

        Unknown values are returned unchanged (lowercased) and logged, leaving
        the decision to reject them to the code that consumes the setting.
        """
        value = str(self.get(env_var, default)).strip().lower()
        if value not in choices:
            logger.warning(f"{env_var}={value!r} is not one of {sorted(choices)}")
        return value


_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader, honouring OAUTH2_ENV_FILE"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader(os.getenv(ENV_FILE_VAR))
    return _config_loader
