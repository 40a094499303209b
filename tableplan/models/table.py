"""
Table model
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON

from tableplan.core.db import Base

class Table(Base):
    __tablename__ = "tables"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    table_name = Column(String(100), nullable=False)

    # Denormalized back-reference to the owning section, linked by id only
    section_id = Column(String(36), nullable=True, index=True)
    section_name = Column(String(255), nullable=True)

    items = Column(JSON, nullable=False, default=list)
    parent_table_id = Column(String(36), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
