"""Conversion between StoreModel and the persisted JSON document

Document layout:

    {
        "items": {
            "<shortcode>": {
                "url": "https://example.com",
                "created_at": "2026-01-01T00:00:00+00:00",
                "clicks": 0,
                "title": "Example Domain",                  (omitted when empty)
                "last_click": "2026-01-02T00:00:00+00:00"   (omitted when absent)
            }
        },
        "stats": {
            "total_clicks": 0,
            "total_urls": 1
        }
    }

`stats` is recomputed from `items` on every save and ignored on load.

Entries written by older versions may lack `created_at` or carry the zero
time there. They are kept and dated UNKNOWN_CREATED_AT (the Unix epoch).
"""

import logging
from datetime import datetime, UTC

from urlsh.models import ShortURLModel, StoreModel
from urlsh.types import EntryDocument, StoreDocument
from urlsh.dao.exceptions import StoreUnreadableError
from urlsh.utils.helpers import to_timestamp, from_timestamp


logger = logging.getLogger(__name__)

UNKNOWN_CREATED_AT = datetime(1970, 1, 1, tzinfo=UTC)


def compute_stats(store: StoreModel) -> dict[str, int]:
    """Derive the persisted aggregate counters from the store's items"""
    return {
        'total_clicks': sum(entry.clicks for entry in store.items.values()),
        'total_urls': len(store.items),
    }


def entry_to_document(entry: ShortURLModel) -> EntryDocument:
    document = {
        'url': entry.target,
        'created_at': to_timestamp(entry.created_at),
        'clicks': entry.clicks,
    }
    if entry.title:
        document['title'] = entry.title
    if entry.last_click is not None:
        document['last_click'] = to_timestamp(entry.last_click)
    return document


def _is_zero_time(value: object) -> bool:
    return isinstance(value, str) and value.startswith('0001-01-01')


def _timestamp_or_none(value: object) -> datetime | None:
    if not value or not isinstance(value, str):
        return None
    try:
        return from_timestamp(value)
    except ValueError:
        return None


def entry_from_document(shortcode: str, document: EntryDocument) -> ShortURLModel:
    """Build a ShortURLModel from one persisted item

    Only the URL is required. Damaged optional fields are repaired with a
    WARNING instead of discarding the entry:
        - a missing, zero or unparseable `created_at` becomes UNKNOWN_CREATED_AT;
        - non-integer or negative `clicks` become 0;
        - a non-string `title` becomes '';
        - an unparseable `last_click` becomes None.

    Raises:
        StoreUnreadableError:
            If the item isn't a JSON object or has no usable URL.
    """
    if not isinstance(document, dict):
        raise StoreUnreadableError(f"Malformed entry for code '{shortcode}'.")
    target = document.get('url')
    if not isinstance(target, str) or not target:
        raise StoreUnreadableError(f"Malformed entry for code '{shortcode}'.")

    repaired = []

    created_at = _timestamp_or_none(document.get('created_at'))
    if created_at is None:
        created_at = UNKNOWN_CREATED_AT
        repaired.append('created_at')

    clicks = document.get('clicks', 0)
    if not isinstance(clicks, int) or isinstance(clicks, bool) or clicks < 0:
        clicks = 0
        repaired.append('clicks')

    title = document.get('title') or ''
    if not isinstance(title, str):
        title = ''
        repaired.append('title')

    raw_last_click = document.get('last_click')
    last_click = _timestamp_or_none(raw_last_click)
    if last_click is None and raw_last_click and not _is_zero_time(raw_last_click):
        repaired.append('last_click')

    if repaired:
        logger.warning('Repaired malformed store entry.', extra={'shortcode': shortcode, 'fields': repaired})

    return ShortURLModel(
        target=target,
        shortcode=shortcode,
        created_at=created_at,
        clicks=clicks,
        title=title,
        last_click=last_click,
    )


def store_to_document(store: StoreModel) -> StoreDocument:
    return {
        'items': {shortcode: entry_to_document(entry) for shortcode, entry in store.items.items()},
        'stats': compute_stats(store),
    }


def store_from_document(document: object) -> StoreModel:
    """Build a StoreModel from a parsed JSON document

    A document without `items` (or with `"items": null`) is an empty store.
    Items that can't be turned into an entry are skipped with a WARNING; the
    remaining entries are kept.

    Raises:
        StoreUnreadableError:
            If the document itself or its `items` is not a JSON object.
    """
    if not isinstance(document, dict):
        raise StoreUnreadableError('Store document is not a JSON object.')

    items = document.get('items') or {}
    if not isinstance(items, dict):
        raise StoreUnreadableError("Store document 'items' is not a JSON object.")

    store = StoreModel()
    for shortcode, item in items.items():
        try:
            store.items[shortcode] = entry_from_document(shortcode, item)
        except StoreUnreadableError as e:
            logger.warning('Skipped unreadable store entry.', extra={'shortcode': shortcode, 'error': str(e)})
    return store
