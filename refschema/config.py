"""
Registry configuration loader.

Sources, highest precedence first:
1. Environment variables (REFSCHEMA_EXTRA_KEYS, REFSCHEMA_REGISTER_BUILTINS)
2. JSON file named by REFSCHEMA_CONFIG_FILE
3. Built-in defaults

Usage:
    from refschema.config import load_config
    config = load_config()
    registry = SchemaRegistry(config)
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

EXTRA_KEY_POLICIES = ('forbid', 'ignore', 'allow')

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off'}

# Process-wide cache
_config_cache: Optional['RegistryConfig'] = None


@dataclass(frozen=True)
class RegistryConfig:
    """Options applied when a registry builds object validators."""

    extra_keys: str = 'forbid'
    register_builtins: bool = True

    def __post_init__(self):
        if self.extra_keys not in EXTRA_KEY_POLICIES:
            raise ConfigurationError(
                f"extra_keys must be one of {', '.join(EXTRA_KEY_POLICIES)}, got {self.extra_keys!r}"
            )


def get_config_path() -> Optional[Path]:
    """Path of the JSON config file, if one is configured."""
    raw = os.getenv('REFSCHEMA_CONFIG_FILE')
    if not raw:
        return None
    return Path(raw)


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _read_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed config file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    return data


def load_config() -> RegistryConfig:
    """
    Load registry configuration, caching the result.

    Raises:
        ConfigurationError: unreadable file or invalid value
    """
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    values: Dict[str, Any] = {}

    path = get_config_path()
    if path is not None:
        data = _read_file(path)
        if 'extra_keys' in data:
            values['extra_keys'] = data['extra_keys']
        if 'register_builtins' in data:
            values['register_builtins'] = data['register_builtins']
        logger.debug("Loaded registry config from %s", path)

    # Environment overrides the file
    if os.getenv('REFSCHEMA_EXTRA_KEYS'):
        values['extra_keys'] = os.getenv('REFSCHEMA_EXTRA_KEYS').strip().lower()
    if os.getenv('REFSCHEMA_REGISTER_BUILTINS'):
        values['register_builtins'] = os.getenv('REFSCHEMA_REGISTER_BUILTINS')

    if 'register_builtins' in values:
        values['register_builtins'] = _parse_bool('register_builtins', values['register_builtins'])

    _config_cache = RegistryConfig(**values)
    return _config_cache


def reload_config() -> RegistryConfig:
    """
    Drop the cached configuration and load it again.

    Only registries constructed afterwards see the new values. Registries
    already built, including the one behind the package facade, keep the
    configuration they were built with.
    """
    global _config_cache
    _config_cache = None
    return load_config()
