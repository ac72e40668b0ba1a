from sqlalchemy import Column, ForeignKey, Integer, String
from .base import Base


class AnnouncementModel(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    announcement_id = Column(String, unique=True, index=True, nullable=False)
    community_id = Column(
        String, ForeignKey("communities.community_id", ondelete="CASCADE"), index=True
    )
    title = Column(String, nullable=False)
    message = Column(String, nullable=False)
    created_at = Column(String, nullable=False)  # ISO format string
