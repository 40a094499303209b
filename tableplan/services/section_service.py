"""
Section service
"""

import logging
from typing import List

from tableplan.core.errors import InvalidArgumentError, NotFoundError
from tableplan.schemas.section import SectionDoc

logger = logging.getLogger(__name__)

class SectionService:
    """Service for section operations"""

    def __init__(self, sections):
        self.sections = sections

    def create_section(self, name: str) -> SectionDoc:
        if not name or not name.strip():
            raise InvalidArgumentError("Section name is required")

        section = self.sections.save(SectionDoc(name=name.strip()))
        logger.info(f"Created section {section.id} ({section.name})")
        return section

    def get_section(self, section_id: str) -> SectionDoc:
        section = self.sections.get(section_id)
        if not section:
            raise NotFoundError("Section")
        return section

    def list_sections(self) -> List[SectionDoc]:
        return self.sections.list_all()
