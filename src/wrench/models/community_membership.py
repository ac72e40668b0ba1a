from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class CommunityMembershipModel(Base):
    __tablename__ = "community_memberships"
    __table_args__ = (
        UniqueConstraint(
            "community_id",
            "user_id",
            name="uq_community_memberships_community_user",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    membership_id = Column(String, unique=True, index=True, nullable=False)
    community_id = Column(
        String, ForeignKey("communities.community_id", ondelete="CASCADE"), index=True
    )
    user_id = Column(String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True)
    role = Column(String, nullable=False)  # 'admin' or 'learner'
    joined_at = Column(String, nullable=False)  # ISO format string

    community = relationship("CommunityModel", back_populates="memberships")
