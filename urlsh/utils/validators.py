"""Input validation helpers

Functions:
    is_valid_url(url) -> bool
        True iff `url` is an absolute http(s) URL with a non-empty host.
    is_valid_custom_shortcode(shortcode) -> bool
        True iff `shortcode` may be used as a custom code.
"""

import re
import urllib.parse

from urlsh.utils.constants import Shortcode


CUSTOM_SHORTCODE_PATTERN = re.compile(
    rf'[A-Za-z0-9_-]{{{Shortcode.CUSTOM_MIN_LENGTH},{Shortcode.CUSTOM_MAX_LENGTH}}}'
)


def is_valid_url(url: object) -> bool:
    """Check whether `url` is an absolute URL with scheme http or https

    Example:
        >>> is_valid_url('https://example.com/page')
        True
        >>> is_valid_url('ftp://example.com')
        False
        >>> is_valid_url('example.com')
        False
    """
    if not isinstance(url, str) or not url:
        return False
    try:
        components = urllib.parse.urlparse(url)
        hostname = components.hostname
    except ValueError:
        return False
    return components.scheme in {'http', 'https'} and bool(hostname)


def is_valid_custom_shortcode(shortcode: str) -> bool:
    """Check that a custom shortcode is 3-20 characters from [A-Za-z0-9_-]

    Example:
        >>> is_valid_custom_shortcode('docs')
        True
        >>> is_valid_custom_shortcode('ab')
        False
    """
    return CUSTOM_SHORTCODE_PATTERN.fullmatch(shortcode) is not None
