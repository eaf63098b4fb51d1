"""
Configuration Helper - Settings for snapshot comparison and version probing

Settings are layered: packaged defaults.yaml, an optional user YAML file,
NODECMP_* environment variables and finally explicit arguments.
"""

import os
import logging
from dataclasses import dataclass, asdict
from importlib import resources
from typing import Any, Dict, Optional

import yaml

from ..core.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_TIMEOUT = 'NODECMP_TIMEOUT'
ENV_CLIENT_VERSION = 'NODECMP_CLIENT_VERSION'


@dataclass
class NodecmpConfig:
    """Resolved runtime settings"""
    timeout: float = 60.0
    strict_timeout: float = 0.1
    client_version: str = "1.2.0"
    max_version_length: int = 1024

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


def _read_yaml(text: str, source: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"{source}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a mapping at top level")
    return data


def load_default_settings() -> Dict[str, Any]:
    """Load the defaults.yaml shipped inside the package"""
    content = resources.files('nodecmp').joinpath('defaults.yaml').read_text(encoding='utf-8')
    logger.debug("Loaded packaged defaults.yaml")
    return _read_yaml(content, 'defaults.yaml')


def load_settings_file(path: str) -> Dict[str, Any]:
    """Load a user supplied YAML settings file"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(e) from e
    logger.debug(f"Loaded settings from {path}")
    return _read_yaml(content, path)


def _settings_from_env() -> Dict[str, Any]:
    settings = {}
    if os.environ.get(ENV_TIMEOUT):
        settings['timeout'] = os.environ[ENV_TIMEOUT]
    if os.environ.get(ENV_CLIENT_VERSION):
        settings['client_version'] = os.environ[ENV_CLIENT_VERSION]
    return settings


def _positive_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e
    if number <= 0:
        raise ConfigError(f"{name} must be positive, got {value!r}")
    return number


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return value


def _client_version(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"client_version must be a non-empty string, got {value!r}")
    if not value.isascii():
        raise ConfigError(f"client_version must be ASCII, got {value!r}")
    return value


def create_config(config_file: Optional[str] = None,
                  timeout: Optional[float] = None,
                  client_version: Optional[str] = None,
                  strict: bool = False) -> NodecmpConfig:
    """
    Create the configuration for a comparison run.

    Args:
        config_file: Optional path to a YAML settings file
        timeout: Connect/read timeout in seconds, overrides all other sources
        client_version: Version string announced to peers
        strict: Use the strict timeout preset unless timeout is given

    Returns:
        NodecmpConfig object
    """
    settings = load_default_settings()
    if config_file:
        settings.update(load_settings_file(config_file))
    settings.update(_settings_from_env())

    if timeout is not None:
        settings['timeout'] = timeout
    elif strict:
        settings['timeout'] = settings.get('strict_timeout', NodecmpConfig.strict_timeout)
    if client_version is not None:
        settings['client_version'] = client_version

    config = NodecmpConfig(
        timeout=_positive_float('timeout', settings.get('timeout', NodecmpConfig.timeout)),
        strict_timeout=_positive_float('strict_timeout', settings.get('strict_timeout', NodecmpConfig.strict_timeout)),
        client_version=_client_version(settings.get('client_version', NodecmpConfig.client_version)),
        max_version_length=_positive_int('max_version_length', settings.get('max_version_length', NodecmpConfig.max_version_length)),
    )
    logger.debug(f"Resolved configuration: {config.to_dict()}")
    return config
