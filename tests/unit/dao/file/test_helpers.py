"""Unit tests for handle_file_error decorator.

Test coverage includes:
    1. Normal function execution
    2. OS error handling (converted into StoreUnwritableError)
    3. Function metadata preservation
"""

from pathlib import Path

import pytest

from urlsh.dao.file.helpers import handle_file_error
from urlsh.dao.exceptions import StoreUnwritableError


class DummyDAO:
    def __init__(self):
        self.path = Path('/tmp/urls.json')

    @handle_file_error
    def ok(self):
        return 'OK'

    @handle_file_error
    def fail(self):
        raise PermissionError(13, 'Permission denied')

    @handle_file_error
    def fail_with_other_error(self):
        raise KeyError('not an OSError')


def test_decorator_allows_normal_execution():
    assert DummyDAO().ok() == 'OK'


def test_decorator_transforms_os_error():
    with pytest.raises(StoreUnwritableError, match="Can't write store file /tmp/urls.json: Permission denied.") as exc_info:
        DummyDAO().fail()
    assert isinstance(exc_info.value.__cause__, PermissionError)


def test_decorator_lets_other_errors_through():
    with pytest.raises(KeyError):
        DummyDAO().fail_with_other_error()


def test_decorator_preserves_function_metadata():
    @handle_file_error
    def sample_function():
        """This is a sample docstring."""
        return 'OK'

    assert sample_function.__name__ == 'sample_function'
    assert 'sample docstring' in sample_function.__doc__
