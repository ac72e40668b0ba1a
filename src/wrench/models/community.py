from sqlalchemy import JSON, Column, Integer, String
from sqlalchemy.orm import relationship
from .base import Base


class CommunityModel(Base):
    __tablename__ = "communities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    community_id = Column(String, unique=True, index=True, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)  # always lowercase
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    branding = Column(JSON, nullable=False, default=dict)
    status = Column(String, nullable=False)  # 'active' or 'archived'
    created_at = Column(String, nullable=False)  # ISO format string

    memberships = relationship(
        "CommunityMembershipModel",
        back_populates="community",
        cascade="all, delete-orphan",
    )
