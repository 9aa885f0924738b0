from datetime import datetime, timedelta, UTC
from collections.abc import Callable

import pytest

from urlsh.models import ShortURLModel, StoreModel


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_entry(now: datetime) -> Callable[..., ShortURLModel]:
    """Build ShortURLModel instances created `age_days` before `now`."""

    def _make_entry(shortcode: str, target: str | None = None, age_days: float = 0, **kwargs) -> ShortURLModel:
        return ShortURLModel(
            target=target or f'https://example.com/{shortcode}',
            shortcode=shortcode,
            created_at=now - timedelta(days=age_days),
            **kwargs,
        )

    return _make_entry


@pytest.fixture
def store(make_entry: Callable[..., ShortURLModel]) -> StoreModel:
    """Small in-memory store with a mix of clicked and unclicked entries."""
    entries = [
        make_entry('aaaa', 'https://example.com/a', age_days=3, clicks=2, title='A page'),
        make_entry('bbbb', 'https://example.com/b', age_days=1),
        make_entry('cccc', 'https://example.com/c', age_days=2, clicks=5),
    ]
    return StoreModel(items={entry.shortcode: entry for entry in entries})
