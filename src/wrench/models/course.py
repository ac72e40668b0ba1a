"""Course database model.

Sections (each an ordered list of chapters) and prerequisite test ids are kept
as JSON documents on the course row.
"""

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Integer, String
from .base import Base


class CourseModel(Base):
    """Course database model."""

    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_id = Column(String, unique=True, index=True, nullable=False)
    community_id = Column(
        String, ForeignKey("communities.community_id", ondelete="CASCADE"), index=True
    )
    title = Column(String, nullable=False)
    category = Column(String, nullable=False, default="")
    description = Column(String, nullable=False, default="")
    required_starting_level = Column(Integer, nullable=False)
    required_passed_test_ids = Column(JSON, nullable=False, default=list)
    sections = Column(JSON, nullable=False, default=list)
    is_published = Column(Boolean, nullable=False, default=False)
    created_at = Column(String, nullable=False)  # ISO format string
