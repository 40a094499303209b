"""
Section-related Pydantic schemas
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class TableNameEntry(BaseModel):
    """One entry of a section's table index"""
    table_name: str
    table_id: str

class SectionCreate(BaseModel):
    """Schema for creating a section"""
    name: str = Field(..., min_length=1, max_length=255)

class SectionDoc(BaseModel):
    """Section document as stored and returned"""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    name: str
    table_names: List[TableNameEntry] = Field(default_factory=list)
