import functools
from typing import TypeVar, Any
from collections.abc import Callable

from urlsh.dao.exceptions import StoreUnwritableError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_file_error[F](method: F) -> F:
    """Wrap file-writing DAO methods to handle OS errors

    Args:
        method (Callable[..., Any]):
            DAO method performing file operations which may raise OSError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises StoreUnwritableError on file system errors.

    Example:
        >>> @handle_file_error
        ... def save(self, store):
        ...     self.path.write_text('{}')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OSError as e:
            raise StoreUnwritableError(f"Can't write store file {self.path}: {e.strerror or e}.") from e

    return wrapper
