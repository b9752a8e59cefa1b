"""
Configuration file loading
"""
import configparser
import logging
import os
from pathlib import Path

CONFIG_PATH_ENV = 'NEOCAL_CONFIG_PATH'
DEFAULT_CONFIG_PATH = Path('.config') / 'neocal' / 'config.ini'
NEOCAL_SECTION = 'neocal'

Config = dict[str, dict[str, str]]


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded or is incomplete."""


def resolve_config_path() -> Path:
    """Return the configuration file location.

    The ``NEOCAL_CONFIG_PATH`` environment variable wins over the default
    location under the user's home directory.

    Raises:
        ConfigError: If no override is set and the home directory is unknown
    """
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()

    try:
        home = Path.home()
    except RuntimeError as e:
        raise ConfigError(f"Could not determine the home directory: {e}") from e
    return home / DEFAULT_CONFIG_PATH


def load_config(path: Path | str | None = None) -> Config:
    """Load the INI configuration into a plain section -> key -> value mapping.

    Args:
        path: Configuration file; defaults to ``resolve_config_path()``

    Returns:
        Mapping of section names to their key/value pairs

    Raises:
        ConfigError: If the file is missing, unreadable or malformed
    """
    config_path = Path(path) if path is not None else resolve_config_path()

    parser = configparser.ConfigParser(interpolation=None)
    try:
        with config_path.open('r', encoding='utf-8') as f:
            parser.read_file(f)
    except OSError as e:
        raise ConfigError(f"Unable to read config file {config_path}: {e.strerror or e}") from e
    except configparser.Error as e:
        raise ConfigError(f"Malformed config file {config_path}: {e}") from e

    logging.debug(f"Loaded config from {config_path} with sections {parser.sections()}")

    return {
        section: {key: value for key, value in parser.items(section)}
        for section in parser.sections()
    }
