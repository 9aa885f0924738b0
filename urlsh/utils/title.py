"""Best-effort HTML title scraping

The title is cached on an entry when it is created. Fetching is bounded by a
short timeout and never fails: any network, decoding or parsing problem
yields an empty string.
"""

import re
import logging
import http.client
import urllib.request

from urlsh.utils.constants import Defaults, Title, VERSION


logger = logging.getLogger(__name__)

TITLE_PATTERN = re.compile(r'<title[^>]*>([^<]+)</title>', re.IGNORECASE)


def truncate_title(title: str, max_length: int) -> str:
    """Trim whitespace and cut `title` to `max_length` characters plus an ellipsis

    Example:
        >>> truncate_title('  Example Domain  ', 60)
        'Example Domain'
        >>> truncate_title('abcdef', 3)
        'abc...'
    """
    title = title.strip()
    if len(title) > max_length:
        return title[:max_length] + Title.ELLIPSIS
    return title


def extract_title(html: str) -> str:
    """Return the raw contents of the first <title> element, or ''"""
    match = TITLE_PATTERN.search(html)
    return match.group(1) if match else ''


def fetch_title(url: str, max_length: int = Defaults.TITLE_MAX_LENGTH, timeout: float = Defaults.TITLE_TIMEOUT) -> str:
    """Fetch `url` and return its HTML title, truncated to `max_length`

    Only the first few kilobytes of the response body are read.

    Args:
        url (str):
            Page to fetch. Must already be validated as an http(s) URL.
        max_length (int):
            Maximum number of title characters kept before the ellipsis.
        timeout (float):
            Socket timeout in seconds.

    Returns:
        str: Page title, or '' when unavailable.

    Example:
        >>> fetch_title('https://example.com')
        'Example Domain'
    """
    request = urllib.request.Request(url, headers={'User-Agent': f'urlsh/{VERSION}'})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:  # noqa: S310
            body = response.read(Title.READ_BYTES)
            charset = response.headers.get_content_charset() or 'utf-8'
        html = body.decode(charset, errors='replace')
    except (OSError, ValueError, LookupError, http.client.HTTPException) as e:
        # URLError, HTTPError and timeouts are OSErrors. Malformed responses raise HTTPException
        logger.debug('Title fetch failed.', extra={'url': url, 'error': str(e)})
        return ''

    title = truncate_title(extract_title(html), max_length)
    logger.debug('Fetched page title.', extra={'url': url, 'title': title})
    return title
