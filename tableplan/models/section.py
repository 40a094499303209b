"""
Section model
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON

from tableplan.core.db import Base

class Section(Base):
    __tablename__ = "sections"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)

    # Ordered list of {"table_name": ..., "table_id": ...}, mirrors live tables
    table_names = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)
