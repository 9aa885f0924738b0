from enum import StrEnum


class Shortcode:
    """Shortcode length limits and escalation thresholds."""

    DEFAULT_LENGTH = 4
    CUSTOM_MIN_LENGTH = 3
    CUSTOM_MAX_LENGTH = 20
    # Consecutive collisions tolerated before a generated code grows by one character
    MAX_COLLISIONS = 10
    # (store size strictly above, minimum generated length)
    ESCALATION = ((1_000, 5), (10_000, 6))


class Defaults:
    """Default values for the optional configuration document."""

    CODE_LENGTH = Shortcode.DEFAULT_LENGTH
    TITLE_MAX_LENGTH = 60
    CLEANUP_DAYS = 30
    CODE_STRATEGY = 'random'
    HASH_SALT = 'urlsh'
    FETCH_TITLES = True
    TITLE_TIMEOUT = 3  # seconds
    STORE_FILENAME = 'urls.json'
    CONFIG_PATH = '~/.config/urlsh/config.json'


class Title:
    """Title scraping limits."""

    READ_BYTES = 8192
    ELLIPSIS = '...'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        STORE = 'URLSH_STORE'
        CONFIG = 'URLSH_CONFIG'
        LOG_LEVEL = 'LOG_LEVEL'
        LOG_FORMAT = 'LOG_FORMAT'


VERSION = '1.2.0'

# Error codes
UNKNOWN_ERROR = 'UNKNOWN_ERROR'
INVALID_URL = 'INVALID_URL'
INVALID_SHORTCODE = 'INVALID_SHORTCODE'
SHORTCODE_TAKEN = 'SHORTCODE_TAKEN'
SHORTCODE_NOT_FOUND = 'SHORTCODE_NOT_FOUND'
STORE_UNWRITABLE = 'STORE_UNWRITABLE'
