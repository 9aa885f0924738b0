"""Entry lifecycle operations

Every operation takes the loaded StoreModel explicitly and mutates it in
place; persisting the result is the caller's job.

Functions:
    expand(store, shortcode, now=None) -> ShortURLModel
        Record a click and return the updated entry.
    list_entries(store) -> list[tuple[str, ShortURLModel]]
        All entries, newest first.
    compute_store_stats(store) -> StoreStats
        Aggregate statistics over all entries.
    clean(store, days=30, now=None) -> int
        Remove never-clicked entries older than `days`.
    delete(store, shortcode) -> ShortURLModel
        Remove one entry.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from urlsh.models import ShortURLModel, StoreModel
from urlsh.dao.exceptions import ShortURLNotFoundError
from urlsh.utils.constants import Defaults
from urlsh.utils.helpers import utcnow


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreStats:
    """Aggregate statistics over a store.

    Attributes:
        total_urls (int):
            Number of entries.
        total_clicks (int):
            Sum of clicks across entries.
        average_clicks (Optional[float]):
            Mean clicks per entry. None for an empty store.
        most_clicked (Optional[ShortURLModel]):
            Entry with the most clicks; ties go to the lowest shortcode.
            None for an empty store.
        oldest (Optional[datetime]):
            Earliest creation time. None for an empty store.
        newest (Optional[datetime]):
            Latest creation time. None for an empty store.
    """
    total_urls: int
    total_clicks: int
    average_clicks: Optional[float] = None
    most_clicked: Optional[ShortURLModel] = None
    oldest: Optional[datetime] = None
    newest: Optional[datetime] = None


def _get(store: StoreModel, shortcode: str) -> ShortURLModel:
    entry = store.items.get(shortcode)
    if entry is None:
        raise ShortURLNotFoundError(f"Code '{shortcode}' not found.")
    return entry


def expand(store: StoreModel, shortcode: str, now: Optional[datetime] = None) -> ShortURLModel:
    """Look up `shortcode`, count a click and return the updated entry

    Raises:
        ShortURLNotFoundError:
            If the shortcode doesn't exist. The store is left untouched.

    Example:
        >>> entry = expand(store, 'aB3x')
        >>> entry.clicks
        1
    """
    entry = _get(store, shortcode)
    entry = replace(entry, clicks=entry.clicks + 1, last_click=now or utcnow())
    store.items[shortcode] = entry
    logger.debug('Expanded shortcode.', extra={'shortcode': shortcode, 'clicks': entry.clicks})
    return entry


def list_entries(store: StoreModel) -> list[tuple[str, ShortURLModel]]:
    """Return (shortcode, entry) pairs ordered by creation time, newest first"""
    return sorted(store.items.items(), key=lambda item: item[1].created_at, reverse=True)


def compute_store_stats(store: StoreModel) -> StoreStats:
    """Aggregate statistics over every entry in `store`

    The most clicked entry is the one with the highest click count; among
    equal counts the lexicographically lowest shortcode wins, so the result
    never depends on mapping iteration order.
    """
    entries = list(store.items.values())
    total_clicks = sum(entry.clicks for entry in entries)
    if not entries:
        return StoreStats(total_urls=0, total_clicks=0)

    return StoreStats(
        total_urls=len(entries),
        total_clicks=total_clicks,
        average_clicks=total_clicks / len(entries),
        most_clicked=min(entries, key=lambda entry: (-entry.clicks, entry.shortcode)),
        oldest=min(entry.created_at for entry in entries),
        newest=max(entry.created_at for entry in entries),
    )


def clean(store: StoreModel, days: int = Defaults.CLEANUP_DAYS, now: Optional[datetime] = None) -> int:
    """Remove entries never clicked and created more than `days` days ago

    Args:
        store (StoreModel):
            Store to clean in place.
        days (int):
            Retention window in days.
        now (Optional[datetime]):
            Reference time. Defaults to the current UTC time.

    Returns:
        int: number of removed entries.
    """
    cutoff = (now or utcnow()) - timedelta(days=days)
    stale = [code for code, entry in store.items.items() if entry.clicks == 0 and entry.created_at < cutoff]
    for shortcode in stale:
        del store.items[shortcode]

    logger.info('Cleaned unused short URLs.', extra={'removed': len(stale), 'cutoff': cutoff.isoformat()})
    return len(stale)


def delete(store: StoreModel, shortcode: str) -> ShortURLModel:
    """Remove `shortcode` from `store` and return the removed entry

    Raises:
        ShortURLNotFoundError:
            If the shortcode doesn't exist.
    """
    entry = _get(store, shortcode)
    del store.items[shortcode]
    logger.info('Deleted short URL.', extra={'shortcode': shortcode})
    return entry
