"""
Tests for the storage layer
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from tableplan.core.errors import StoreFailureError
from tableplan.schemas.table import SectionRef, TableDoc
from tableplan.services.repositories import FirestoreTableRepo, store_errors

def test_sql_errors_become_store_failures():
    db = MagicMock()

    with pytest.raises(StoreFailureError) as exc_info:
        with store_errors("save table", db):
            raise OperationalError("INSERT INTO tables", {}, Exception("disk I/O error"))

    assert exc_info.value.message == "Failed to save table"
    assert exc_info.value.status_code == 500
    db.rollback.assert_called_once()

def test_other_errors_propagate_unchanged():
    with pytest.raises(KeyError):
        with store_errors("load table"):
            raise KeyError("id")

def make_snapshot(doc_id, data):
    snapshot = MagicMock()
    snapshot.id = doc_id
    snapshot.exists = data is not None
    snapshot.to_dict.return_value = data
    return snapshot

def test_firestore_get_maps_document():
    fs = MagicMock()
    fs.collection.return_value.document.return_value.get.return_value = make_snapshot("t1", {
        "table_name": "4 A",
        "section": {"id": "s1", "name": "Main Hall"},
        "items": ["soup"],
        "parent_table": "t0",
    })

    table = FirestoreTableRepo(fs).get("t1")

    fs.collection.assert_called_with("tables")
    assert table == TableDoc(
        id="t1",
        table_name="4 A",
        section=SectionRef(id="s1", name="Main Hall"),
        items=["soup"],
        parent_table="t0",
    )

def test_firestore_get_missing_document():
    fs = MagicMock()
    fs.collection.return_value.document.return_value.get.return_value = make_snapshot("t1", None)

    assert FirestoreTableRepo(fs).get("t1") is None

def test_firestore_save_new_table_assigns_id():
    fs = MagicMock()
    fs.collection.return_value.document.return_value.id = "generated"

    saved = FirestoreTableRepo(fs).save(TableDoc(table_name="1"))

    assert saved.id == "generated"
    written = fs.collection.return_value.document.return_value.set.call_args[0][0]
    assert written["table_name"] == "1"
    assert written["section"] is None

def test_firestore_delete_children_batches_deletes():
    fs = MagicMock()
    children = [make_snapshot("c1", {}), make_snapshot("c2", {})]
    fs.collection.return_value.where.return_value.get.return_value = children

    removed = FirestoreTableRepo(fs).delete_children("p1")

    assert removed == 2
    fs.collection.return_value.where.assert_called_with("parent_table", "==", "p1")
    assert fs.batch.return_value.delete.call_count == 2
    fs.batch.return_value.commit.assert_called_once()

def test_firestore_delete_children_commits_in_chunks():
    fs = MagicMock()
    children = [make_snapshot(f"c{i}", {}) for i in range(1001)]
    fs.collection.return_value.where.return_value.get.return_value = children

    removed = FirestoreTableRepo(fs).delete_children("p1")

    assert removed == 1001
    assert fs.batch.call_count == 3
    assert fs.batch.return_value.commit.call_count == 3
    assert fs.batch.return_value.delete.call_count == 1001

def test_firestore_delete_children_without_children():
    fs = MagicMock()
    fs.collection.return_value.where.return_value.get.return_value = []

    assert FirestoreTableRepo(fs).delete_children("p1") == 0
    fs.batch.assert_not_called()
