"""Data Access Object (DAO) implementation for a flat JSON store file

This module provides a file-based implementation of ShortURLBaseDAO. The
whole store is the unit of persistence: every save rewrites the complete
document, there is no append log or incremental update.

Responsibilities:
    - Read and parse the store document, recovering to an empty store on any failure;
    - Back up a damaged document before the first save replaces it;
    - Recompute aggregate stats and write the document atomically;
    - Raise StoreUnwritableError when the document can't be written.

Classes:
    ShortURLFileDAO:
        DAO for loading and saving a StoreModel as a JSON file.

Example:
    >>> from urlsh.dao.file import ShortURLFileDAO

    >>> dao = ShortURLFileDAO('urls.json')
    >>> store = dao.load()
    >>> len(store)
    0
    >>> dao.save(store)
    <ShortURLFileDAO>
"""

import os
import json
import logging
import shutil
import tempfile
from pathlib import Path

from beartype import beartype

from urlsh.models import StoreModel
from urlsh.dao.base import ShortURLBaseDAO
from urlsh.dao.exceptions import StoreUnreadableError
from urlsh.dao.file.helpers import handle_file_error
from urlsh.dao.file.document import store_from_document, store_to_document


logger = logging.getLogger(__name__)


class ShortURLFileDAO(ShortURLBaseDAO):
    """JSON file-based Data Access Object (DAO) for the short URL store

    Attributes:
        path (Path):
            Location of the store document.
        backup_pending (bool):
            Set by load() when the document couldn't be read in full.

    Methods:
        load(**kwargs) -> StoreModel:
            Read the store document. Missing, unreadable or malformed
            documents yield an empty store.

        save(store: StoreModel, **kwargs) -> ShortURLFileDAO:
            Write the store document, replacing the previous one.
            Raises StoreUnwritableError on file system errors.
    """

    @beartype
    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self.backup_pending = False

    def __repr__(self) -> str:
        return f'<ShortURLFileDAO path={str(self.path)!r}>'

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(f'{self.path.name}.bak')

    def load(self, **kwargs) -> StoreModel:
        """Load the store document from disk

        Never raises: the tool treats "no readable store" as "start empty".
        When the document is unreadable, or some of its items had to be
        skipped, the next save() first copies the old file to `backup_path`.

        Returns:
            StoreModel:
                The loaded store, or an empty store on any read or parse failure.
        """
        try:
            return self._read()
        except FileNotFoundError:
            logger.debug('Store file not found. Starting with an empty store.', extra={'path': str(self.path)})
        except (OSError, ValueError, StoreUnreadableError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            logger.warning('Failed to load store. Starting with an empty store.', extra={'path': str(self.path), 'error': str(e)})
            self.backup_pending = True
        return StoreModel()

    def _read(self) -> StoreModel:
        with self.path.open('r', encoding='utf-8') as f:
            document = json.load(f)
        store = store_from_document(document)
        if len(store) < len(document.get('items') or {}):
            self.backup_pending = True
        logger.debug('Loaded store.', extra={'path': str(self.path), 'totalUrls': len(store)})
        return store

    @handle_file_error
    @beartype
    def save(self, store: StoreModel, **kwargs) -> 'ShortURLFileDAO':
        """Write the whole store document to disk

        The document is written to a temporary file next to the target and
        then moved over it, so a failed write never leaves a truncated store.
        A document that load() couldn't read in full is copied to
        `backup_path` before it is replaced.

        Args:
            store (StoreModel):
                Store to persist. Its stats are recomputed from its items.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLFileDAO: self (for method chaining)

        Raises:
            StoreUnwritableError:
                If the directory or file can't be written.
        """
        document = store_to_document(store)
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        if self.backup_pending and self.path.is_file():
            shutil.copy2(self.path, self.backup_path)
            logger.warning('Backed up damaged store file.', extra={'path': str(self.path), 'backup': str(self.backup_path)})
        self.backup_pending = False

        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f'.{self.path.name}.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
                f.write('\n')
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug('Saved store.', extra={'path': str(self.path), **document['stats']})
        return self
