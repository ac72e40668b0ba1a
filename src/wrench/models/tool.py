from sqlalchemy import Column, ForeignKey, Integer, String
from .base import Base


class ToolModel(Base):
    __tablename__ = "tools"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tool_id = Column(String, unique=True, index=True, nullable=False)
    community_id = Column(
        String, ForeignKey("communities.community_id", ondelete="CASCADE"), index=True
    )
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    link = Column(String, nullable=False, default="")
    created_at = Column(String, nullable=False)  # ISO format string
