"""Utility functions for application configuration management.

Configuration is an optional JSON document read once per invocation. Every
key is optional and every problem with the file (missing, unreadable, not
JSON, wrong value types) falls back to the built-in defaults:

    {
        "default_code_length": 4,
        "title_max_length": 60,
        "cleanup_days": 30,
        "code_strategy": "random",
        "hash_salt": "urlsh",
        "fetch_titles": true,
        "title_timeout": 3
    }

Functions:
    config_path() -> Path
        Return the configuration file path, from `URLSH_CONFIG` or the default
        '~/.config/urlsh/config.json'.

    store_path() -> Path
        Return the store file path, from `URLSH_STORE` or 'urls.json' in the
        current working directory.

    fallback_to_defaults(func) -> Callable[[Path | None], dict]
        Decorator: merge the loaded document over the defaults and absorb
        read or parse failures. Decorates `load_config()`.

    load_config(path: Path | None = None) -> dict
        Load the configuration document and return it as a Python dictionary.

Example:
    >>> from urlsh.utils.config import load_config
    >>> config = load_config()
    >>> config['default_code_length']
    4
"""

import os
import json
import functools
import logging
from pathlib import Path
from collections.abc import Callable

from urlsh.types import AppConfig
from urlsh.utils.constants import Defaults, ENV


logger = logging.getLogger(__name__)

DEFAULT_CONFIG: AppConfig = {
    'default_code_length': Defaults.CODE_LENGTH,
    'title_max_length': Defaults.TITLE_MAX_LENGTH,
    'cleanup_days': Defaults.CLEANUP_DAYS,
    'code_strategy': Defaults.CODE_STRATEGY,
    'hash_salt': Defaults.HASH_SALT,
    'fetch_titles': Defaults.FETCH_TITLES,
    'title_timeout': Defaults.TITLE_TIMEOUT,
}


def config_path() -> Path:
    """Return the configuration file path by reading 'URLSH_CONFIG'

    Example:
        >>> os.environ['URLSH_CONFIG'] = '/tmp/urlsh.json'
        >>> config_path()
        PosixPath('/tmp/urlsh.json')
    """
    return Path(os.environ.get(ENV.App.CONFIG) or Defaults.CONFIG_PATH).expanduser()


def store_path() -> Path:
    """Return the store file path by reading 'URLSH_STORE'

    Falls back to 'urls.json' in the current working directory.
    """
    return Path(os.environ.get(ENV.App.STORE) or Defaults.STORE_FILENAME).expanduser()


def _valid_value(key: str, value: object) -> bool:
    default = DEFAULT_CONFIG[key]
    # bool is a subclass of int: don't accept true/false for numeric settings
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(default, bool)
    if isinstance(default, int):
        return isinstance(value, int) and value > 0
    if isinstance(default, str):
        return isinstance(value, str) and bool(value)
    return False  # pragma: no cover


def fallback_to_defaults(func: Callable[[Path], dict]) -> Callable[[Path | None], AppConfig]:
    """Decorator: overlay the loaded configuration document on the defaults

    Behavior:
        - Resolve the path via `config_path()` when none is given.
        - A missing file yields the defaults (logged at DEBUG).
        - An unreadable file or invalid JSON yields the defaults (logged at WARNING).
        - Unknown keys are ignored; values of the wrong type or non-positive
          numbers are replaced by their default (logged at WARNING).

    Args:
        func (Callable[[Path], dict]):
            load_config()

    Returns:
        Callable[[Path | None], dict]:
            A function that always returns a complete configuration dictionary.
    """

    @functools.wraps(func)
    def wrapper(path: Path | None = None) -> AppConfig:
        path = Path(path) if path is not None else config_path()
        config = dict(DEFAULT_CONFIG)

        try:
            document = func(path)
        except FileNotFoundError:
            logger.debug('No configuration file found. Using defaults.', extra={'path': str(path)})
            return config
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            logger.warning('Failed to read configuration file. Using defaults.', extra={'path': str(path), 'error': str(e)})
            return config

        if not isinstance(document, dict):
            logger.warning('Configuration file is not a JSON object. Using defaults.', extra={'path': str(path)})
            return config

        for key, value in document.items():
            if key not in DEFAULT_CONFIG:
                logger.debug('Ignoring unknown configuration key.', extra={'key': key})
            elif not _valid_value(key, value):
                logger.warning('Invalid configuration value. Using default.', extra={'key': key, 'value': value})
            else:
                config[key] = value

        logger.debug('Loaded configuration file.', extra={'path': str(path)})
        return config

    return wrapper


@fallback_to_defaults
def load_config(path: Path) -> dict:
    """Load the configuration document at `path`

    Args:
        path (Path):
            Location of the JSON configuration file. Defaults to `config_path()`.

    Returns:
        dict: The complete configuration (document values over defaults).

    Example:
        >>> config = load_config(Path('/tmp/urlsh.json'))
        >>> config['cleanup_days']
        30
    """
    with path.open('r', encoding='utf-8') as f:
        return json.load(f)
