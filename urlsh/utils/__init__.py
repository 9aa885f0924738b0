from urlsh.utils.config import config_path, store_path, load_config
from urlsh.utils.helpers import utcnow, to_timestamp, from_timestamp, display_time
from urlsh.utils.shortener import (
    ShortcodeGenerator,
    RandomShortcodeGenerator,
    HashShortcodeGenerator,
    generator_for,
)
from urlsh.utils.validators import is_valid_url, is_valid_custom_shortcode
from urlsh.utils.title import fetch_title
from urlsh.utils.prompt import confirm
from urlsh.utils.logging import initialize_logging


__all__ = [
    'config_path',
    'store_path',
    'load_config',
    'utcnow',
    'to_timestamp',
    'from_timestamp',
    'display_time',
    'ShortcodeGenerator',
    'RandomShortcodeGenerator',
    'HashShortcodeGenerator',
    'generator_for',
    'is_valid_url',
    'is_valid_custom_shortcode',
    'fetch_title',
    'confirm',
    'initialize_logging',
]
