"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a shortcode is not present in the store.

    ShortURLAlreadyExistsError:
        Raised when a custom shortcode is already taken.

    DataStoreError:
        Raised when the backing store cannot be read or written.

    StoreUnreadableError:
        Raised when the store file exists but cannot be read or parsed.

    StoreUnwritableError:
        Raised when the store file cannot be written.

Example:
    >>> from urlsh.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc1' not found.")
    Traceback (most recent call last):
        ...
    urlsh.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc1' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a shortcode is not present in the store."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when a custom shortcode already exists in the store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. permission issues, full disk, corrupt document, etc.
    """

    pass


class StoreUnreadableError(DataStoreError):
    """Exception raised when the store document cannot be read or parsed.

    NOTE: never surfaced to callers; ShortURLFileDAO.load() recovers with an empty store.
    """

    pass


class StoreUnwritableError(DataStoreError):
    """Exception raised when the store document cannot be written."""

    pass
