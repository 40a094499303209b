"""
Table API routes
"""

from fastapi import APIRouter, Depends

from tableplan.api.deps import get_table_service
from tableplan.schemas.table import TableDivide, TableItemsUpdate, TableUpdate
from tableplan.services.table_service import TableService
from tableplan.utils.responses import success_response

router = APIRouter()

@router.get("/tables")
def list_tables(service: TableService = Depends(get_table_service)):
    """List every table, subparts included"""
    return success_response(message="Tables retrieved", data=service.list_tables())

@router.get("/tables/by-section-and-name/{section_id}/{name}")
def get_table_by_section_and_name(
    section_id: str,
    name: str,
    service: TableService = Depends(get_table_service)
):
    table = service.get_table_by_section_and_name(section_id, name)
    return success_response(message="Table retrieved", data=table)

@router.get("/tables/{table_id}")
def get_table(
    table_id: str,
    service: TableService = Depends(get_table_service)
):
    return success_response(message="Table retrieved", data=service.get_table(table_id))

@router.post("/tables/{table_id}/divide")
def divide_table(
    table_id: str,
    payload: TableDivide,
    service: TableService = Depends(get_table_service)
):
    """Split a table's items into lettered subparts"""
    result = service.split_table(table_id, payload.number_of_subparts)
    return success_response(
        message=f"Table divided into {len(result.subparts)} subparts",
        data=result
    )

@router.delete("/tables/{parent_id}/{section_id}/subtables")
def clear_subtables(
    parent_id: str,
    section_id: str,
    service: TableService = Depends(get_table_service)
):
    removed = service.clear_subtables(parent_id, section_id)
    return success_response(
        message="Subtables deleted successfully",
        data={"deleted_count": removed}
    )

@router.patch("/tables/{table_id}")
def update_table(
    table_id: str,
    payload: TableUpdate,
    service: TableService = Depends(get_table_service)
):
    """Rename a table and/or move it to another section"""
    table = service.update_table(
        table_id,
        table_name=payload.table_name,
        section_id=payload.section_id
    )
    return success_response(message="Table updated successfully", data=table)

@router.put("/tables/{table_id}/items")
def replace_table_items(
    table_id: str,
    payload: TableItemsUpdate,
    service: TableService = Depends(get_table_service)
):
    table = service.set_items(table_id, payload.items)
    return success_response(message="Table items updated", data=table)

@router.delete("/tables/{table_id}")
def delete_table(
    table_id: str,
    service: TableService = Depends(get_table_service)
):
    deleted = service.delete_table(table_id)
    return success_response(
        message="Table deleted successfully",
        data={"id": deleted.id, "table_name": deleted.table_name}
    )
