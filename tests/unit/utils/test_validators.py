"""Unit tests for URL and custom shortcode validation in validators.py."""

import pytest

from urlsh.utils.validators import is_valid_url, is_valid_custom_shortcode


@pytest.mark.parametrize(
    'url',
    [
        'http://example.com',
        'https://example.com/path?query=1#fragment',
        'https://sub.example.co.uk:8443/a/b',
        'HTTPS://EXAMPLE.COM',
        'http://127.0.0.1:8000/',
    ],
)
def test_valid_urls(url):
    assert is_valid_url(url) is True


@pytest.mark.parametrize(
    'url',
    [
        '',
        'example.com',
        '/relative/path',
        'ftp://example.com/file',
        'mailto:someone@example.com',
        'https://',
        'http:///path-only',
        'javascript:alert(1)',
        'http://[::1',
        None,
        42,
    ],
)
def test_invalid_urls(url):
    assert is_valid_url(url) is False


@pytest.mark.parametrize('shortcode', ['abc', 'docs', 'my-link_2', 'A' * 20])
def test_valid_custom_shortcodes(shortcode):
    assert is_valid_custom_shortcode(shortcode) is True


@pytest.mark.parametrize('shortcode', ['', 'ab', 'A' * 21, 'has space', 'slash/code', 'ünï'])
def test_invalid_custom_shortcodes(shortcode):
    assert is_valid_custom_shortcode(shortcode) is False
