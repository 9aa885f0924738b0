from typing import Any
from collections.abc import Callable


# Type aliases for Python dictionaries
type StoreDocument = dict[str, Any]
type EntryDocument = dict[str, Any]
type AppConfig = dict[str, Any]

# Type aliases for collaborators
type TitleFetcher = Callable[[str, int], str]
