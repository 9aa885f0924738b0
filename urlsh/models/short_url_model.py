from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Attributes:
        target (str):
            The original long URL, stored exactly as it was given.
        shortcode (str):
            The unique short identifier representing the shortened URL.
        created_at (datetime):
            Moment the mapping was created (timezone-aware, UTC).
        clicks (int):
            Number of times the shortcode has been expanded.
        title (str):
            Cached HTML title of the target page. Empty when unavailable.
        last_click (Optional[datetime]):
            Moment of the most recent expansion. None until the first one.

    Example:
        >>> from datetime import datetime, UTC
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="aB3x",
        ...     created_at=datetime.now(UTC),
        ... )
        >>> url.clicks
        0
        >>> url.last_click is None
        True
    """
    target: str
    shortcode: str
    created_at: datetime
    clicks: int = 0
    title: str = ''
    last_click: Optional[datetime] = None
