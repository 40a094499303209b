"""
Request-scoped service dependencies
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from tableplan.core.db import get_db
from tableplan.services.repositories import get_repositories
from tableplan.services.section_service import SectionService
from tableplan.services.table_service import TableService

def get_table_service(db: Session = Depends(get_db)) -> TableService:
    sections, tables = get_repositories(db)
    return TableService(sections, tables)

def get_section_service(db: Session = Depends(get_db)) -> SectionService:
    sections, _ = get_repositories(db)
    return SectionService(sections)
