"""
Pydantic schemas package
"""

from .common import *
from .section import *
from .table import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "TableNameEntry",
    "SectionCreate",
    "SectionDoc",
    "SectionRef",
    "TableDoc",
    "SplitResult",
    "TablesCreate",
    "TableDivide",
    "TableUpdate",
    "TableItemsUpdate",
]
