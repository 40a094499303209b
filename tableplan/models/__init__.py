"""
Database models package
"""

from .section import Section
from .table import Table

__all__ = ["Section", "Table"]
