"""Abstract base class for short URL store data access objects (DAOs).

This class establishes a consistent contract for all store DAO implementations,
regardless of the underlying storage mechanism (e.g., a JSON file, SQLite).

Responsibilities:
    - Load the whole store once per invocation.
    - Save the whole store back after a mutation.
    - Standardize error handling across storage implementations.

Example:
    Typical usage with a storage-specific implementation:

        >>> from urlsh.dao.file import ShortURLFileDAO
        >>> from urlsh.operations import expand

        >>> dao = ShortURLFileDAO('urls.json')
        >>> store = dao.load()
        >>> entry = expand(store, 'aB3x')
        >>> dao.save(store)
        <ShortURLFileDAO>

NOTE:
    - Stores are not locked. Two concurrent invocations may lose updates
      (the last save wins).
"""

from abc import ABC, abstractmethod

from urlsh.models import StoreModel


class ShortURLBaseDAO(ABC):
    """Interface for short URL store data access objects (DAOs).

    Methods:
        load(**kwargs) -> StoreModel:
            Load the whole store. Never raises: an unreadable store is
            reported as an empty one.

        save(store: StoreModel, **kwargs) -> ShortURLBaseDAO:
            Persist the whole store, replacing the previous document.
            Raises StoreUnwritableError on write failure.

    Subclassing:
        Storage-specific implementations (e.g., ShortURLFileDAO) must extend
        this class and implement all abstract methods.
    """

    @abstractmethod
    def load(self, **kwargs) -> StoreModel:
        """Load the store from the backing storage.

        Args:
            **kwargs:
                Additional keyword arguments, used by the storage.

        Returns:
            StoreModel: the loaded store, or an empty store when the
            backing storage is missing or unreadable.
        """
        pass

    @abstractmethod
    def save(self, store: StoreModel, **kwargs) -> 'ShortURLBaseDAO':
        """Persist the whole store to the backing storage.

        Args:
            store (StoreModel):
                The store to persist.

            **kwargs:
                Additional keyword arguments, used by the storage.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            StoreUnwritableError:
                If the store cannot be written.
        """
        pass
