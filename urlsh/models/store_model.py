from dataclasses import dataclass, field

from urlsh.models.short_url_model import ShortURLModel


@dataclass
class StoreModel:
    """Represent the whole persisted collection of short URLs.

    Aggregate statistics are not kept here: they are derived from `items`
    whenever the store is serialized.

    Attributes:
        items (dict[str, ShortURLModel]):
            Mapping of shortcode to short URL entry.

    Example:
        >>> store = StoreModel()
        >>> len(store)
        0
        >>> 'aB3x' in store
        False
    """
    items: dict[str, ShortURLModel] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, shortcode: object) -> bool:
        return shortcode in self.items

    def find_by_target(self, target: str) -> ShortURLModel | None:
        """Return the entry whose target equals `target` exactly, or None."""
        for entry in self.items.values():
            if entry.target == target:
                return entry
        return None
