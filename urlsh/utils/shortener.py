"""Shortcode generation strategies

This module provides two interchangeable shortcode generators behind a common
interface, so the assignment engine never cares how a code was produced:

    RandomShortcodeGenerator:
        Draws every character independently from a cryptographically strong
        source. Uses an alphabet without visually ambiguous characters
        (no 0/O, 1/l/I) since codes are read and typed by humans.

    HashShortcodeGenerator:
        Derives the code from an xxhash digest of the target URL, encoded in
        Base62. The same URL, salt and attempt always produce the same code.

Functions:
    encode_base62(number, length) -> str:
        Encode a non-negative integer as a fixed-length Base62 string.

    generator_for(strategy, salt) -> ShortcodeGenerator:
        Build the generator named by the `code_strategy` config value.

Example:
    >>> from urlsh.utils.shortener import RandomShortcodeGenerator, HashShortcodeGenerator
    >>> RandomShortcodeGenerator().generate(4)
    'k7Hq'
    >>> HashShortcodeGenerator(salt='my_secret').generate(6, target='https://example.com')
    'Qx81bT'
"""

import secrets
import string
from abc import ABC, abstractmethod

import xxhash
from beartype import beartype

from urlsh.exceptions import BadConfigurationError


# Human-friendly alphabet: no 0/O, 1/l/I
ALPHABET = '23456789abcdefghijkmnpqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ'
# 26 lowercase + 26 uppercase + 10 digits
BASE62_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(BASE62_ALPHABET)


def encode_base62(number: int, length: int) -> str:
    """Encode a non-negative integer into an exactly `length`-character Base62 string.

    The number is wrapped modulo BASE**length, so large digests are truncated
    to their least significant digits and small numbers are left-padded.

    Args:
        number (int):
            Non-negative integer to encode.
        length (int):
            Exact length of the output.

    Returns:
        str: Base62 string, most significant digit first.

    Example:
        >>> encode_base62(0, 4)
        'aaaa'
        >>> encode_base62(61, 2)
        'a9'
    """
    if number < 0:
        raise ValueError(f'Number must be a non-negative integer (given value: {number}).')

    # Custom base62 encoding algorithm:
    # 1- Encode the wrapped number into base62 (least significant digit first)
    # 2- Reverse so the most significant digit comes first
    number %= BASE**length
    return ''.join(reversed([BASE62_ALPHABET[(number // BASE**i) % BASE] for i in range(length)]))


class ShortcodeGenerator(ABC):
    """Interface for shortcode generation strategies.

    Methods:
        generate(length: int, target: str = '', attempt: int = 0) -> str:
            Return a code of exactly `length` characters. `attempt` counts
            the collisions already seen for `target` within one assignment.
    """

    @abstractmethod
    def generate(self, length: int, target: str = '', attempt: int = 0) -> str:
        """Generate a shortcode of exactly `length` characters.

        Args:
            length (int):
                Number of characters in the code.
            target (str):
                URL being shortened. Ignored by random strategies.
            attempt (int):
                Zero-based retry counter within the current assignment.

        Returns:
            str: the generated shortcode.
        """
        pass

    @staticmethod
    def _check_length(length: int) -> None:
        if length < 1:
            raise ValueError(f'Shortcode length must be a positive integer (given value: {length}).')


class RandomShortcodeGenerator(ShortcodeGenerator):
    """Generate shortcodes from a cryptographically strong random source."""

    alphabet = ALPHABET

    @beartype
    def generate(self, length: int, target: str = '', attempt: int = 0) -> str:
        self._check_length(length)
        return ''.join(secrets.choice(self.alphabet) for _ in range(length))


class HashShortcodeGenerator(ShortcodeGenerator):
    """Generate deterministic shortcodes from an xxhash digest of the target URL.

    The digest input is `<salt>:<attempt>:<target>`, so a collision retry
    for the same URL yields a different, still reproducible, code.

    NOTE:
        - This is obfuscation, not encryption: anyone knowing the salt can
          recompute a URL's code.
        - Codes are Base62 ([a-zA-Z0-9]) and may contain ambiguous characters.
    """

    @beartype
    def __init__(self, salt: str = 'urlsh'):
        if not salt:
            raise ValueError(f'Salt must be a non-empty string (given value: {salt!r}).')
        self.salt = salt

    @beartype
    def generate(self, length: int, target: str = '', attempt: int = 0) -> str:
        self._check_length(length)
        if attempt < 0:
            raise ValueError(f'Attempt must be a non-negative integer (given value: {attempt}).')
        digest = xxhash.xxh3_128_intdigest(f'{self.salt}:{attempt}:{target}'.encode('utf-8'))
        return encode_base62(digest, length)


def generator_for(strategy: str, salt: str = 'urlsh') -> ShortcodeGenerator:
    """Build the shortcode generator for a `code_strategy` configuration value

    Args:
        strategy (str):
            'random' or 'hash'.
        salt (str):
            Salt for the hash strategy.

    Returns:
        ShortcodeGenerator: generator instance.

    Raises:
        BadConfigurationError:
            If the strategy name is unknown.
    """
    if strategy == 'random':
        return RandomShortcodeGenerator()
    if strategy == 'hash':
        return HashShortcodeGenerator(salt=salt)
    raise BadConfigurationError(f"Unknown code strategy '{strategy}' (expected 'random' or 'hash').")
