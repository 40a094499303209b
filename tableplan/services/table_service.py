"""
Table lifecycle service keeping sections and tables in sync

Sections hold a denormalized index of their top-level tables
(`table_names`) and tables hold a back-reference to their section. Every
mutation below updates the table document first and the section document
second; there is no transaction spanning the two writes.
"""

import logging
import threading
import weakref
from typing import Any, Dict, List, Optional

from tableplan.core.config import settings
from tableplan.core.errors import InconsistentError, NotFoundError
from tableplan.schemas.section import SectionDoc, TableNameEntry
from tableplan.schemas.table import SectionRef, SplitResult, TableDoc
from tableplan.services.naming import allocate_table_names, next_subpart_names, uses_room_prefix
from tableplan.services.partition import partition_items, validate_count

logger = logging.getLogger(__name__)

# section id -> lock held for the duration of a create-batch; an entry lives
# only while some request holds its lock
_section_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_section_locks_guard = threading.Lock()


def _section_lock(section_id: str) -> threading.Lock:
    with _section_locks_guard:
        lock = _section_locks.get(section_id)
        if lock is None:
            lock = threading.Lock()
            _section_locks[section_id] = lock
        return lock


class TableService:
    """Create, split, rename, reassign and delete tables"""

    def __init__(self, sections, tables):
        self.sections = sections
        self.tables = tables

    # -------- lookups --------

    def get_table(self, table_id: str) -> TableDoc:
        table = self.tables.get(table_id)
        if not table:
            raise NotFoundError("Table")
        return table

    def list_tables(self) -> List[TableDoc]:
        return self.tables.list_all()

    def get_table_by_section_and_name(self, section_id: str, table_name: str) -> TableDoc:
        matches = self.tables.find_by_section_and_name(section_id, table_name)
        if not matches:
            raise NotFoundError("Table")
        if len(matches) > 1:
            logger.warning(
                f"{len(matches)} tables named {table_name!r} in section {section_id}, returning the first"
            )
        return matches[0]

    def _get_section(self, section_id: str) -> SectionDoc:
        section = self.sections.get(section_id)
        if not section:
            raise NotFoundError("Section")
        return section

    # -------- create --------

    def create_tables(self, section_id: str, count: Any) -> List[TableDoc]:
        """Generate `count` numbered tables under a section and index them"""
        section = self._get_section(section_id)
        count = validate_count(count, "number of tables")

        if not settings.SERIALIZE_SECTION_BATCHES:
            return self._create_batch(section, count)

        with _section_lock(section_id):
            # Re-read under the lock so a batch that just finished is seen
            section = self._get_section(section_id)
            return self._create_batch(section, count)

    def _create_batch(self, section: SectionDoc, count: int) -> List[TableDoc]:
        prefix = None
        if uses_room_prefix(section.name, settings.ROOM_SECTION_NAME):
            prefix = settings.ROOM_TABLE_PREFIX

        existing = [entry.table_name for entry in section.table_names]
        names = allocate_table_names(existing, count, prefix=prefix)

        ref = SectionRef(id=section.id, name=section.name)
        table_names = list(section.table_names)
        created = []
        for name in names:
            table = self.tables.save(TableDoc(table_name=name, section=ref))
            created.append(table)
            table_names.append(TableNameEntry(table_name=table.table_name, table_id=table.id))

        self.sections.save(section.model_copy(update={"table_names": table_names}))
        logger.info(f"Created {len(created)} tables in section {section.id}: {', '.join(names)}")
        return created

    # -------- split --------

    def split_table(self, table_id: str, parts: Any) -> SplitResult:
        """Divide a table's items into lettered subpart tables.

        The parent keeps its own items; each subpart gets a contiguous slice.
        Letters continue after any subparts created by earlier splits.
        """
        parent = self.get_table(table_id)
        parts = validate_count(parts, "number of subparts")

        siblings = self.tables.list_children(parent.id)
        names = next_subpart_names(parent.table_name, [s.table_name for s in siblings], parts)
        windows = partition_items(parent.items, parts)

        subparts = []
        for name, items in zip(names, windows):
            subpart = TableDoc(
                table_name=name,
                section=parent.section.model_copy() if parent.section else None,
                items=items,
                parent_table=parent.id,
            )
            subparts.append(self.tables.save(subpart))

        logger.info(f"Split table {parent.id} into {', '.join(names)}")
        return SplitResult(table_id=parent.id, subparts=subparts)

    def clear_subtables(self, parent_id: str, section_id: str) -> int:
        """Remove every subpart of a table, checking it belongs to the section"""
        parent = self.tables.get(parent_id)
        if not parent:
            raise NotFoundError("Parent table")

        if not parent.section or parent.section.id != section_id:
            raise InconsistentError("Parent table does not belong to the specified section")

        removed = self.tables.delete_children(parent.id)
        logger.info(f"Cleared {removed} subtables of table {parent.id}")
        return removed

    # -------- update --------

    def update_table(
        self,
        table_id: str,
        table_name: Optional[str] = None,
        section_id: Optional[str] = None
    ) -> TableDoc:
        """Rename a table and/or point it at another section.

        Reassignment only rewrites the table's back-reference: the previous
        section keeps its index entry and the new section gains none.
        """
        table = self.get_table(table_id)
        changes: Dict[str, Any] = {}

        if table_name is not None:
            changes["table_name"] = table_name

        current_section_id = table.section.id if table.section else None
        if section_id and section_id != current_section_id:
            target = self._get_section(section_id)
            changes["section"] = SectionRef(id=target.id, name=target.name)
            logger.info(f"Reassigning table {table.id} from section {current_section_id} to {target.id}")

        updated = self.tables.save(table.model_copy(update=changes))

        if updated.section:
            self._sync_index_entry(updated)

        return updated

    def set_items(self, table_id: str, items: List[Any]) -> TableDoc:
        table = self.get_table(table_id)
        return self.tables.save(table.model_copy(update={"items": list(items)}))

    def _sync_index_entry(self, table: TableDoc) -> None:
        section = self.sections.get(table.section.id)
        if not section:
            logger.warning(f"Table {table.id} references missing section {table.section.id}")
            return

        changed = False
        table_names = []
        for entry in section.table_names:
            if entry.table_id == table.id and entry.table_name != table.table_name:
                entry = TableNameEntry(table_name=table.table_name, table_id=table.id)
                changed = True
            table_names.append(entry)

        if changed:
            self.sections.save(section.model_copy(update={"table_names": table_names}))

    # -------- delete --------

    def delete_table(self, table_id: str) -> TableDoc:
        """Delete a table and drop it from its section's index"""
        deleted = self.tables.delete(table_id)
        if not deleted:
            raise NotFoundError("Table")

        if deleted.section:
            section = self.sections.get(deleted.section.id)
            if section:
                table_names = [e for e in section.table_names if e.table_id != deleted.id]
                self.sections.save(section.model_copy(update={"table_names": table_names}))

        logger.info(f"Deleted table {deleted.id} ({deleted.table_name})")
        return deleted
