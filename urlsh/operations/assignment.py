"""Shortcode assignment

Decides whether a target URL reuses an existing shortcode or gets a new one,
either a caller-supplied custom code or a generated one.

Generated code length policy:
    - Start from the configured default length (4).
    - Stores holding more than 1,000 entries mint codes of at least 5 characters,
      more than 10,000 entries at least 6. The length is chosen once per call.
    - Within a call, every 10 consecutive collisions grow the length by one
      character and reset the collision counter. There is no hard cap.

Example:
    >>> from urlsh.models import StoreModel
    >>> from urlsh.utils.shortener import RandomShortcodeGenerator
    >>> store = StoreModel()
    >>> first = assign_code(store, 'https://example.com', generator=RandomShortcodeGenerator())
    >>> first.created, len(first.shortcode)
    (True, 4)
    >>> again = assign_code(store, 'https://example.com', generator=RandomShortcodeGenerator())
    >>> again.created, again.shortcode == first.shortcode
    (False, True)
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from urlsh.models import ShortURLModel, StoreModel
from urlsh.types import TitleFetcher
from urlsh.exceptions import InvalidURLError, InvalidShortcodeError
from urlsh.dao.exceptions import ShortURLAlreadyExistsError
from urlsh.utils.constants import Defaults, Shortcode
from urlsh.utils.helpers import utcnow
from urlsh.utils.shortener import ShortcodeGenerator
from urlsh.utils.validators import is_valid_url, is_valid_custom_shortcode


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assignment:
    """Result of assigning a shortcode to a target URL.

    Attributes:
        shortcode (str):
            The assigned shortcode.
        entry (ShortURLModel):
            The entry stored under the shortcode.
        created (bool):
            False when the target was already shortened and its code reused.
    """
    shortcode: str
    entry: ShortURLModel
    created: bool


def initial_length(store_size: int, default_length: int = Shortcode.DEFAULT_LENGTH) -> int:
    """Return the generated code length for a store holding `store_size` entries

    Example:
        >>> initial_length(1000)
        4
        >>> initial_length(1001)
        5
        >>> initial_length(10001)
        6
    """
    length = default_length
    for threshold, minimum in Shortcode.ESCALATION:
        if store_size > threshold:
            length = max(length, minimum)
    return length


def generate_unique_shortcode(
    store: StoreModel,
    generator: ShortcodeGenerator,
    target: str = '',
    default_length: int = Shortcode.DEFAULT_LENGTH,
) -> str:
    """Draw shortcodes until one is free in `store`

    Args:
        store (StoreModel):
            Store whose codes must be avoided.
        generator (ShortcodeGenerator):
            Code generation strategy.
        target (str):
            URL being shortened (used by deterministic strategies).
        default_length (int):
            Configured base length before escalation.

    Returns:
        str: a shortcode not present in `store`.
    """
    length = initial_length(len(store), default_length)
    collisions = 0
    # Total attempts for `target`; deterministic generators need a fresh input on every draw
    attempt = 0

    while True:
        shortcode = generator.generate(length, target=target, attempt=attempt)
        attempt += 1
        if shortcode not in store:
            return shortcode

        collisions += 1
        if collisions >= Shortcode.MAX_COLLISIONS:
            logger.debug('Too many shortcode collisions. Growing shortcode length.', extra={'length': length + 1})
            length += 1
            collisions = 0


def assign_code(
    store: StoreModel,
    target: str,
    custom_code: Optional[str] = None,
    *,
    generator: ShortcodeGenerator,
    default_length: int = Defaults.CODE_LENGTH,
    fetch_title: Optional[TitleFetcher] = None,
    title_max_length: int = Defaults.TITLE_MAX_LENGTH,
    now: Optional[datetime] = None,
) -> Assignment:
    """Assign a shortcode to `target`, inserting a new entry into `store` when needed

    This function follows this procedure:
    - Step 1: Validate the target URL
    - Step 2: Reuse the code of an entry with exactly the same target
    - Step 3: Validate and reserve a custom code, or generate a unique one
    - Step 4: Fetch the page title (best effort) and insert the new entry

    Args:
        store (StoreModel):
            Loaded store; mutated in place when a new entry is created.
        target (str):
            URL to shorten. Compared byte-for-byte, without normalization.
        custom_code (Optional[str]):
            Explicit shortcode requested by the caller.
        generator (ShortcodeGenerator):
            Code generation strategy for non-custom codes.
        default_length (int):
            Base length of generated codes.
        fetch_title (Optional[TitleFetcher]):
            Collaborator returning the page title; failures yield no title.
        title_max_length (int):
            Maximum title length passed to `fetch_title`.
        now (Optional[datetime]):
            Creation time. Defaults to the current UTC time.

    Returns:
        Assignment: the assigned shortcode, its entry, and whether it was created.

    Raises:
        InvalidURLError:
            If `target` is not an absolute http(s) URL.
        InvalidShortcodeError:
            If `custom_code` is not 3-20 characters from [A-Za-z0-9_-].
        ShortURLAlreadyExistsError:
            If `custom_code` is already in use.
    """
    # 1- Validate the target URL
    if not is_valid_url(target):
        raise InvalidURLError(f'Invalid URL: {target!r}. Expected an absolute http(s) URL.')

    # 2- Duplicate detection
    existing = store.find_by_target(target)
    if existing is not None:
        logger.debug('Target already shortened. Reusing shortcode.', extra={'shortcode': existing.shortcode})
        return Assignment(shortcode=existing.shortcode, entry=existing, created=False)

    # 3- Custom or generated shortcode
    if custom_code is not None:
        if not is_valid_custom_shortcode(custom_code):
            raise InvalidShortcodeError(
                f'Custom code must be {Shortcode.CUSTOM_MIN_LENGTH}-{Shortcode.CUSTOM_MAX_LENGTH} '
                'characters from letters, digits, - and _.'
            )
        if custom_code in store:
            raise ShortURLAlreadyExistsError(f"Code '{custom_code}' already taken.")
        shortcode = custom_code
    else:
        shortcode = generate_unique_shortcode(store, generator, target=target, default_length=default_length)

    # 4- Fetch title and insert the entry
    title = ''
    if fetch_title is not None:
        try:
            title = fetch_title(target, title_max_length) or ''
        except Exception:
            logger.warning('Title fetcher raised. Storing entry without a title.', exc_info=True, extra={'url': target})

    entry = ShortURLModel(
        target=target,
        shortcode=shortcode,
        created_at=now or utcnow(),
        title=title,
    )
    store.items[shortcode] = entry
    logger.info('Assigned shortcode.', extra={'shortcode': shortcode, 'custom': custom_code is not None})
    return Assignment(shortcode=shortcode, entry=entry, created=True)
