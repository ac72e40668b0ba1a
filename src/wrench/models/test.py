from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String
from .base import Base


class TestModel(Base):
    __test__ = False
    __tablename__ = "tests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    test_id = Column(String, unique=True, index=True, nullable=False)
    community_id = Column(
        String, ForeignKey("communities.community_id", ondelete="CASCADE"), index=True
    )
    course_id = Column(String, ForeignKey("courses.course_id", ondelete="CASCADE"), index=True)
    title = Column(String, nullable=False)
    passing_score = Column(Float, nullable=False)
    questions = Column(JSON, nullable=False, default=list)
    created_at = Column(String, nullable=False)  # ISO format string
