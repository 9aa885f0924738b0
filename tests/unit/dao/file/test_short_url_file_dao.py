"""Unit tests for the ShortURLFileDAO

Test coverage includes:

1. Loading behavior
   - Valid documents load into a StoreModel.
   - Missing, unreadable, non-JSON and malformed documents yield an empty store.
   - Stale persisted stats are ignored.

2. Saving behavior
   - The document contains every item plus stats recomputed from the items.
   - Parent directories are created and no temporary files are left behind.
   - Write failures raise StoreUnwritableError and leave the old document intact.
   - Invalid parameter types raise BeartypeCallHintParamViolation.

3. Round trip
   - save() followed by load() reproduces the same items.

4. Damaged documents
   - Readable entries survive next to unreadable ones.
   - The first save after a damaged load backs up the old file to urls.json.bak.
"""

import os
import json
from datetime import datetime, UTC

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from urlsh.models import StoreModel
from urlsh.dao.base import ShortURLBaseDAO
from urlsh.dao.file import ShortURLFileDAO
from urlsh.dao.file.document import UNKNOWN_CREATED_AT
from urlsh.dao.exceptions import StoreUnwritableError
from urlsh.operations import expand, delete


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def store_file(tmp_path):
    return tmp_path / 'urls.json'


@pytest.fixture
def dao(store_file) -> ShortURLFileDAO:
    return ShortURLFileDAO(store_file)


@pytest.fixture
def document() -> dict:
    # fmt: off
    return {
        'items': {
            'aB3x': {
                'url': 'https://example.com/a',
                'created_at': '2026-10-01T10:00:00Z',
                'clicks': 4,
                'title': 'Example A',
                'last_click': '2026-10-02T10:00:00Z',
            },
            'docs': {
                'url': 'https://example.com/docs',
                'created_at': '2026-10-03T10:00:00+00:00',
                'clicks': 0,
            },
        },
        'stats': {'total_clicks': 999, 'total_urls': 999},
    }
    # fmt: on


# -------------------------------
# 1. Loading behavior
# -------------------------------


def test_dao_implements_base_interface(dao):
    assert isinstance(dao, ShortURLBaseDAO)


def test_load(dao, store_file, document):
    store_file.write_text(json.dumps(document), encoding='utf-8')
    store = dao.load()

    assert set(store.items) == {'aB3x', 'docs'}
    entry = store.items['aB3x']
    assert entry.shortcode == 'aB3x'
    assert entry.target == 'https://example.com/a'
    assert entry.created_at == datetime(2026, 10, 1, 10, 0, 0, tzinfo=UTC)
    assert entry.clicks == 4
    assert entry.title == 'Example A'
    assert entry.last_click == datetime(2026, 10, 2, 10, 0, 0, tzinfo=UTC)

    docs = store.items['docs']
    assert docs.title == ''
    assert docs.last_click is None


def test_load_missing_file(dao):
    assert dao.load() == StoreModel()


@pytest.mark.parametrize(
    'content',
    [
        '',
        '{"items": ',
        '[]',
        '{"items": []}',
        '{"items": {"abcd": "https://example.com"}}',
        '{"items": {"abcd": {"created_at": "2026-10-01T10:00:00Z", "clicks": 0}}}',
    ],
)
def test_load_unreadable_document_yields_empty_store(dao, store_file, content):
    store_file.write_text(content, encoding='utf-8')
    assert dao.load() == StoreModel()


def test_load_binary_garbage_yields_empty_store(dao, store_file):
    store_file.write_bytes(b'\xff\xfe\x00garbage')
    assert dao.load() == StoreModel()


def test_load_directory_yields_empty_store(tmp_path):
    assert ShortURLFileDAO(tmp_path).load() == StoreModel()


def test_load_null_items(dao, store_file):
    store_file.write_text('{"items": null, "stats": {"total_clicks": 0, "total_urls": 0}}', encoding='utf-8')
    assert dao.load() == StoreModel()


def test_load_zero_last_click(dao, store_file):
    """Zero timestamps written by older versions mean 'never clicked'."""
    store_file.write_text(
        json.dumps(
            {
                'items': {
                    'abcd': {
                        'url': 'https://example.com',
                        'created_at': '2026-10-01T10:00:00Z',
                        'clicks': 0,
                        'last_click': '0001-01-01T00:00:00Z',
                    }
                }
            }
        ),
        encoding='utf-8',
    )
    assert dao.load().items['abcd'].last_click is None


# -------------------------------
# 2. Saving behavior
# -------------------------------


def test_save_writes_items_and_recomputed_stats(dao, store_file, store):
    assert dao.save(store) is dao

    document = json.loads(store_file.read_text(encoding='utf-8'))
    assert document['stats'] == {'total_clicks': 7, 'total_urls': 3}
    assert document['items']['aaaa'] == {
        'url': 'https://example.com/a',
        'created_at': '2026-10-16T12:00:00+00:00',
        'clicks': 2,
        'title': 'A page',
    }
    assert document['items']['bbbb'] == {
        'url': 'https://example.com/b',
        'created_at': '2026-10-18T12:00:00+00:00',
        'clicks': 0,
    }


def test_save_empty_store(dao, store_file):
    dao.save(StoreModel())
    assert json.loads(store_file.read_text(encoding='utf-8')) == {
        'items': {},
        'stats': {'total_clicks': 0, 'total_urls': 0},
    }


def test_save_creates_parent_directories(tmp_path, store):
    path = tmp_path / 'nested' / 'dir' / 'urls.json'
    ShortURLFileDAO(path).save(store)
    assert path.exists()


def test_save_leaves_no_temporary_files(dao, tmp_path, store):
    dao.save(store)
    dao.save(store)
    assert [p.name for p in tmp_path.iterdir()] == ['urls.json']


def test_save_overwrites_wholesale(dao, store_file, store):
    dao.save(store)
    delete(store, 'aaaa')
    dao.save(store)

    document = json.loads(store_file.read_text(encoding='utf-8'))
    assert set(document['items']) == {'bbbb', 'cccc'}
    assert document['stats'] == {'total_clicks': 5, 'total_urls': 2}


def test_save_failure_raises_store_unwritable_error(dao, store_file, store, monkeypatch):
    store_file.write_text('{"items": {}}', encoding='utf-8')

    def fail_replace(src, dst):
        raise PermissionError(13, 'Permission denied')

    monkeypatch.setattr(os, 'replace', fail_replace)

    with pytest.raises(StoreUnwritableError, match="Can't write store file"):
        dao.save(store)

    # Previous document untouched, temporary file cleaned up
    assert store_file.read_text(encoding='utf-8') == '{"items": {}}'
    assert [p.name for p in store_file.parent.iterdir()] == ['urls.json']


def test_save_into_file_path_parent_raises_store_unwritable_error(tmp_path, store):
    blocker = tmp_path / 'blocker'
    blocker.write_text('not a directory', encoding='utf-8')

    with pytest.raises(StoreUnwritableError):
        ShortURLFileDAO(blocker / 'urls.json').save(store)


@pytest.mark.parametrize('bad_store', [None, {}, 'store', {'items': {}}])
def test_save_invalid_store_type(dao, bad_store):
    with pytest.raises(BeartypeCallHintParamViolation):
        dao.save(bad_store)


# -------------------------------
# 3. Round trip
# -------------------------------


def test_round_trip(dao, store, now):
    expand(store, 'bbbb', now=now)
    dao.save(store)
    loaded = dao.load()

    assert loaded == store
    assert loaded.items['bbbb'].last_click == now


def test_round_trip_of_loaded_document(dao, store_file, document):
    store_file.write_text(json.dumps(document), encoding='utf-8')
    first = dao.load()
    dao.save(first)
    second = dao.load()

    assert second == first
    assert json.loads(store_file.read_text(encoding='utf-8'))['stats'] == {'total_clicks': 4, 'total_urls': 2}


def test_round_trip_keeps_unicode(dao, make_entry):
    entry = make_entry('uni', 'https://example.com/ü', title='Überschrift – ★')
    dao.save(StoreModel(items={'uni': entry}))
    assert dao.load().items['uni'] == entry


# -------------------------------
# 4. Damaged documents
# -------------------------------


def test_load_keeps_readable_entries_next_to_damaged_ones(dao, store_file, document):
    document['items']['bad1'] = {'created_at': '2026-10-01T10:00:00Z', 'clicks': 0}
    document['items']['odd1'] = {'url': 'https://example.com/odd', 'clicks': -1}
    store_file.write_text(json.dumps(document), encoding='utf-8')

    store = dao.load()

    assert set(store.items) == {'aB3x', 'docs', 'odd1'}
    assert store.items['odd1'].clicks == 0
    assert store.items['odd1'].created_at == UNKNOWN_CREATED_AT
    assert dao.backup_pending is True


def test_save_after_partial_load_keeps_good_entries(dao, store_file, make_entry):
    items = {f'c{i:03}': {'url': f'https://example.com/{i}', 'created_at': '2026-10-01T10:00:00Z', 'clicks': i} for i in range(50)}
    items['odd1'] = {'url': 'https://example.com/odd', 'clicks': 0}
    store_file.write_text(json.dumps({'items': items}), encoding='utf-8')

    store = dao.load()
    store.items['new1'] = make_entry('new1')
    dao.save(store)

    saved = json.loads(store_file.read_text(encoding='utf-8'))
    assert len(saved['items']) == 52
    assert saved['stats']['total_urls'] == 52
    assert ShortURLFileDAO(store_file).load().items['c049'].clicks == 49


def test_save_backs_up_unreadable_document(dao, store_file, store):
    store_file.write_text('{"items": ', encoding='utf-8')

    assert dao.load() == StoreModel()
    dao.save(store)

    assert dao.backup_path == store_file.with_name('urls.json.bak')
    assert dao.backup_path.read_text(encoding='utf-8') == '{"items": '
    assert set(json.loads(store_file.read_text(encoding='utf-8'))['items']) == {'aaaa', 'bbbb', 'cccc'}


def test_save_backs_up_document_with_skipped_entries(dao, store_file, document):
    document['items']['bad1'] = None
    original = json.dumps(document)
    store_file.write_text(original, encoding='utf-8')

    dao.save(dao.load())

    assert dao.backup_path.read_text(encoding='utf-8') == original
    assert dao.backup_pending is False


def test_backup_is_taken_once(dao, store_file, store):
    store_file.write_text('[]', encoding='utf-8')
    dao.load()
    dao.save(store)
    dao.backup_path.write_text('kept', encoding='utf-8')
    dao.save(store)

    assert dao.backup_path.read_text(encoding='utf-8') == 'kept'


def test_no_backup_for_healthy_or_missing_documents(dao, store):
    dao.load()
    dao.save(store)
    dao.load()
    dao.save(store)

    assert not dao.backup_path.exists()
