"""
Repository layer abstracting storage (SQLAlchemy vs Firebase Firestore).

Both backends expose the same document operations on sections and tables:
get by id, filtered and sorted finds, save (insert or overwrite), delete and
delete-many. Nothing here spans more than one document write.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from google.api_core.exceptions import GoogleAPICallError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tableplan.core.config import settings
from tableplan.core.errors import StoreFailureError
from tableplan.models import Section, Table
from tableplan.schemas.section import SectionDoc, TableNameEntry
from tableplan.schemas.table import SectionRef, TableDoc
from tableplan.services.firebase_client import get_firestore_client

logger = logging.getLogger(__name__)

FIRESTORE_BATCH_LIMIT = 500


def use_firestore() -> bool:
    return settings.USE_FIREBASE is True


@contextmanager
def store_errors(action: str, db: Optional[Session] = None):
    """Surface backend errors as StoreFailureError, rolling back the SQL session"""
    try:
        yield
    except SQLAlchemyError as e:
        if db is not None:
            db.rollback()
        logger.error(f"Store failure while trying to {action}: {e}")
        raise StoreFailureError(f"Failed to {action}") from e
    except GoogleAPICallError as e:
        logger.error(f"Firestore failure while trying to {action}: {e}")
        raise StoreFailureError(f"Failed to {action}") from e


# -------- SQL repositories --------

def _section_from_row(row: Section) -> SectionDoc:
    return SectionDoc(
        id=row.id,
        name=row.name,
        table_names=[TableNameEntry(**entry) for entry in (row.table_names or [])],
    )


def _table_from_row(row: Table) -> TableDoc:
    section = None
    if row.section_id:
        section = SectionRef(id=row.section_id, name=row.section_name or "")
    return TableDoc(
        id=row.id,
        table_name=row.table_name,
        section=section,
        items=list(row.items or []),
        parent_table=row.parent_table_id,
    )


class SqlSectionRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, section_id: str) -> Optional[SectionDoc]:
        with store_errors("load section", self.db):
            row = self.db.query(Section).filter(Section.id == section_id).populate_existing().first()
        return _section_from_row(row) if row else None

    def list_all(self) -> List[SectionDoc]:
        with store_errors("list sections", self.db):
            rows = self.db.query(Section).order_by(Section.created_at, Section.id).all()
        return [_section_from_row(row) for row in rows]

    def save(self, section: SectionDoc) -> SectionDoc:
        table_names = [entry.model_dump() for entry in section.table_names]
        with store_errors("save section", self.db):
            row = None
            if section.id:
                row = self.db.query(Section).filter(Section.id == section.id).first()
            if row is None:
                row = Section(id=section.id) if section.id else Section()
                self.db.add(row)
            row.name = section.name
            # JSON columns only track reassignment, never in-place edits
            row.table_names = table_names
            self.db.commit()
            self.db.refresh(row)
        return _section_from_row(row)


class SqlTableRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, table_id: str) -> Optional[TableDoc]:
        with store_errors("load table", self.db):
            row = self.db.query(Table).filter(Table.id == table_id).populate_existing().first()
        return _table_from_row(row) if row else None

    def list_all(self) -> List[TableDoc]:
        with store_errors("list tables", self.db):
            rows = self.db.query(Table).order_by(Table.created_at, Table.id).all()
        return [_table_from_row(row) for row in rows]

    def list_children(self, parent_id: str) -> List[TableDoc]:
        """Subparts of a table sorted by name"""
        with store_errors("list subtables", self.db):
            rows = self.db.query(Table).filter(
                Table.parent_table_id == parent_id
            ).order_by(Table.table_name).all()
        return [_table_from_row(row) for row in rows]

    def find_by_section_and_name(self, section_id: str, table_name: str) -> List[TableDoc]:
        with store_errors("find table", self.db):
            rows = self.db.query(Table).filter(
                Table.section_id == section_id,
                Table.table_name == table_name
            ).order_by(Table.created_at, Table.id).all()
        return [_table_from_row(row) for row in rows]

    def save(self, table: TableDoc) -> TableDoc:
        with store_errors("save table", self.db):
            row = None
            if table.id:
                row = self.db.query(Table).filter(Table.id == table.id).first()
            if row is None:
                row = Table(id=table.id) if table.id else Table()
                self.db.add(row)
            row.table_name = table.table_name
            row.section_id = table.section.id if table.section else None
            row.section_name = table.section.name if table.section else None
            row.items = list(table.items)
            row.parent_table_id = table.parent_table
            self.db.commit()
            self.db.refresh(row)
        return _table_from_row(row)

    def delete(self, table_id: str) -> Optional[TableDoc]:
        """Delete a table and return what was removed"""
        with store_errors("delete table", self.db):
            row = self.db.query(Table).filter(Table.id == table_id).first()
            if row is None:
                return None
            deleted = _table_from_row(row)
            self.db.delete(row)
            self.db.commit()
        return deleted

    def delete_children(self, parent_id: str) -> int:
        with store_errors("delete subtables", self.db):
            count = self.db.query(Table).filter(
                Table.parent_table_id == parent_id
            ).delete(synchronize_session=False)
            self.db.commit()
        return count


# -------- Firestore repositories --------
# Collections "sections/{id}" and "tables/{id}"; tables carry section as a map

def _section_from_doc(doc) -> SectionDoc:
    data = doc.to_dict() or {}
    return SectionDoc(
        id=doc.id,
        name=data.get("name", ""),
        table_names=[TableNameEntry(**entry) for entry in data.get("table_names", [])],
    )


def _table_from_doc(doc) -> TableDoc:
    data = doc.to_dict() or {}
    section = data.get("section")
    return TableDoc(
        id=doc.id,
        table_name=data.get("table_name", ""),
        section=SectionRef(**section) if section else None,
        items=data.get("items", []),
        parent_table=data.get("parent_table"),
    )


def _table_to_data(table: TableDoc) -> Dict[str, Any]:
    return {
        "table_name": table.table_name,
        "section": table.section.model_dump() if table.section else None,
        "items": list(table.items),
        "parent_table": table.parent_table,
    }


class FirestoreSectionRepo:
    def __init__(self, fs=None):
        self.fs = fs or get_firestore_client()

    @property
    def collection(self):
        return self.fs.collection("sections")

    def get(self, section_id: str) -> Optional[SectionDoc]:
        with store_errors("load section"):
            doc = self.collection.document(section_id).get()
        return _section_from_doc(doc) if doc.exists else None

    def list_all(self) -> List[SectionDoc]:
        with store_errors("list sections"):
            docs = self.collection.get()
        return [_section_from_doc(d) for d in docs]

    def save(self, section: SectionDoc) -> SectionDoc:
        data = {
            "name": section.name,
            "table_names": [entry.model_dump() for entry in section.table_names],
        }
        with store_errors("save section"):
            ref = self.collection.document(section.id) if section.id else self.collection.document()
            ref.set(data)
        return section.model_copy(update={"id": ref.id})


class FirestoreTableRepo:
    def __init__(self, fs=None):
        self.fs = fs or get_firestore_client()

    @property
    def collection(self):
        return self.fs.collection("tables")

    def get(self, table_id: str) -> Optional[TableDoc]:
        with store_errors("load table"):
            doc = self.collection.document(table_id).get()
        return _table_from_doc(doc) if doc.exists else None

    def list_all(self) -> List[TableDoc]:
        with store_errors("list tables"):
            docs = self.collection.get()
        return [_table_from_doc(d) for d in docs]

    def list_children(self, parent_id: str) -> List[TableDoc]:
        with store_errors("list subtables"):
            docs = self.collection.where("parent_table", "==", parent_id).order_by("table_name").get()
        return [_table_from_doc(d) for d in docs]

    def find_by_section_and_name(self, section_id: str, table_name: str) -> List[TableDoc]:
        with store_errors("find table"):
            docs = self.collection.where("section.id", "==", section_id).where("table_name", "==", table_name).get()
        return [_table_from_doc(d) for d in docs]

    def save(self, table: TableDoc) -> TableDoc:
        with store_errors("save table"):
            if table.id:
                ref = self.collection.document(table.id)
                ref.set(_table_to_data(table), merge=True)
            else:
                ref = self.collection.document()
                ref.set({**_table_to_data(table), "created_at": datetime.utcnow().isoformat()})
        return table.model_copy(update={"id": ref.id})

    def delete(self, table_id: str) -> Optional[TableDoc]:
        with store_errors("delete table"):
            ref = self.collection.document(table_id)
            doc = ref.get()
            if not doc.exists:
                return None
            ref.delete()
        return _table_from_doc(doc)

    def delete_children(self, parent_id: str) -> int:
        with store_errors("delete subtables"):
            docs = self.collection.where("parent_table", "==", parent_id).get()
            # Firestore caps a write batch at FIRESTORE_BATCH_LIMIT operations
            for start in range(0, len(docs), FIRESTORE_BATCH_LIMIT):
                batch = self.fs.batch()
                for d in docs[start:start + FIRESTORE_BATCH_LIMIT]:
                    batch.delete(d.reference)
                batch.commit()
        return len(docs)


def get_repositories(db: Optional[Session] = None) -> Tuple[Any, Any]:
    """Return the (sections, tables) repositories for the configured backend"""
    if use_firestore():
        fs = get_firestore_client()
        return FirestoreSectionRepo(fs), FirestoreTableRepo(fs)
    return SqlSectionRepo(db), SqlTableRepo(db)
