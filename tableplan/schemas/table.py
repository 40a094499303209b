"""
Table-related Pydantic schemas
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field, StrictInt

class SectionRef(BaseModel):
    """Back-reference from a table to its section"""
    id: str
    name: str

class TableDoc(BaseModel):
    """Table document as stored and returned"""
    id: Optional[str] = None
    table_name: str
    section: Optional[SectionRef] = None
    items: List[Any] = Field(default_factory=list)
    parent_table: Optional[str] = None

class SplitResult(BaseModel):
    """Parent id and the subparts produced by a split"""
    table_id: str
    subparts: List[TableDoc]

class TablesCreate(BaseModel):
    """Bulk table generation request"""
    number_of_tables: StrictInt

class TableDivide(BaseModel):
    """Table subdivision request"""
    number_of_subparts: StrictInt

class TableUpdate(BaseModel):
    """Rename and/or reassign a table"""
    table_name: Optional[str] = None
    section_id: Optional[str] = None

class TableItemsUpdate(BaseModel):
    """Replace the item list of a table"""
    items: List[Any]
