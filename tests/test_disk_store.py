from __future__ import annotations

import json
from datetime import date as Date

import pytest

from app import register_entity_types
from models.user import User
from persistence import ConstraintViolation, CorruptCollection, Datastore, DiskJsonCollections, DiskJsonDocumentStore


def test_disk_store_missing_and_empty_files_load_empty(tmp_path):
    store = DiskJsonDocumentStore(tmp_path / "missing.json")
    assert store.load() == {}

    empty = tmp_path / "empty.json"
    empty.write_text("  \n", encoding="utf-8")
    assert DiskJsonDocumentStore(empty).load() == {}


def test_disk_store_writes_atomically(tmp_path):
    path = tmp_path / "nested" / "doc.json"
    store = DiskJsonDocumentStore(path)
    store.save({"b": 1, "a": {"x": None}})

    assert store.load() == {"b": 1, "a": {"x": None}}
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": {"x": None}, "b": 1}
    assert not (path.parent / "doc.json.tmp").exists()


@pytest.mark.parametrize("content", [b"{not json", b"[1, 2, 3]", b'{"a": "\xff\xfe"}'])
def test_corrupt_collection_is_not_treated_as_empty(tmp_path, content):
    path = tmp_path / "users.json"
    path.write_bytes(content)

    with pytest.raises(CorruptCollection):
        DiskJsonDocumentStore(path).load()
    assert path.read_bytes() == content


def test_users_survive_reopening_the_datastore(disk_datastore, sandbox_project):
    user = User(first_name="Paula", email_address="paula@example.com", birthday=Date(1984, 3, 17), gender=2)
    disk_datastore.save(user)

    collection = sandbox_project / "data" / "collections" / "users.json"
    on_disk = json.loads(collection.read_text(encoding="utf-8"))
    assert list(on_disk) == [user.identifier.value]
    assert on_disk[user.identifier.value]["emailAddress"] == "paula@example.com"

    reopened = Datastore(DiskJsonCollections(sandbox_project / "data"))
    register_entity_types(reopened)

    found = reopened.find_by_identifier(User, user.identifier)
    assert found == user
    assert found is not None
    assert found.birthday == Date(1984, 3, 17)
    assert found.gender == 2

    with pytest.raises(ConstraintViolation):
        reopened.save(User(email_address="paula@example.com"))


def test_collection_names_are_sanitized(tmp_path):
    engine = DiskJsonCollections(tmp_path)
    assert engine.open_collection("a/b").path == tmp_path / "collections" / "a_b.json"
    assert engine.open_collection("  ").path == tmp_path / "collections" / "default.json"
