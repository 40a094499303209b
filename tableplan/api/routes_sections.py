"""
Section API routes
"""

from fastapi import APIRouter, Depends

from tableplan.api.deps import get_section_service, get_table_service
from tableplan.schemas.section import SectionCreate
from tableplan.schemas.table import TablesCreate
from tableplan.services.section_service import SectionService
from tableplan.services.table_service import TableService
from tableplan.utils.responses import success_response

router = APIRouter()

@router.post("/sections")
def create_section(
    payload: SectionCreate,
    service: SectionService = Depends(get_section_service)
):
    """Create an empty section"""
    section = service.create_section(payload.name)
    return success_response(
        message="Section created successfully",
        data=section,
        status_code=201
    )

@router.get("/sections")
def list_sections(service: SectionService = Depends(get_section_service)):
    sections = service.list_sections()
    return success_response(message="Sections retrieved", data=sections)

@router.get("/sections/{section_id}")
def get_section(
    section_id: str,
    service: SectionService = Depends(get_section_service)
):
    section = service.get_section(section_id)
    return success_response(message="Section retrieved", data=section)

@router.post("/sections/{section_id}/tables")
def create_tables(
    section_id: str,
    payload: TablesCreate,
    service: TableService = Depends(get_table_service)
):
    """Generate numbered tables in a section"""
    tables = service.create_tables(section_id, payload.number_of_tables)
    return success_response(
        message=f"{len(tables)} tables created",
        data=tables,
        status_code=201
    )
