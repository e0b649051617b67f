# tests/test_store.py
import json

import pytest

from storeapi.database import JsonStore, StorageError


def test_missing_file_reads_as_empty(store):
    assert not store.path.exists()
    assert store.read() == {"products": [], "users": []}


def test_missing_collections_default_to_empty(store):
    store.path.write_text('{"products": [{"id": 1}]}', encoding="utf-8")
    assert store.read() == {"products": [{"id": 1}], "users": []}


def test_non_object_document_reads_as_empty(store):
    store.path.write_text("[1, 2]", encoding="utf-8")
    assert store.read() == {"products": [], "users": []}


def test_write_is_indented_and_keeps_unicode(store):
    store.write({"products": [{"id": 1, "name": "Cadeira Gamer Ergonômica"}], "users": []})
    raw = store.path.read_text(encoding="utf-8")
    assert "Ergonômica" in raw
    assert '\n  "products"' in raw
    assert json.loads(raw)["products"][0]["id"] == 1


def test_write_failure_raises_storage_error(tmp_path):
    with pytest.raises(StorageError):
        JsonStore(tmp_path / "missing-dir" / "data.json").write({"products": [], "users": []})


@pytest.mark.parametrize("records,expected", [
    ([], 1),
    ([{"id": 1}, {"id": 2}], 3),
    ([{"id": 7}, {"id": 3}], 8),
    ([{"name": "no id"}, {"id": 4}], 5),
])
def test_next_id(records, expected):
    assert JsonStore.next_id(records) == expected
