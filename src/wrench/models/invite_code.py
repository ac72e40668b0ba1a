"""Invite code database model.

This module defines the InviteCode database model using SQLAlchemy.
"""

from sqlalchemy import Column, Integer, String
from .base import Base


class InviteCodeModel(Base):
    """Invite code database model."""

    __tablename__ = "invite_codes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    invite_id = Column(String, unique=True, index=True, nullable=False)
    code = Column(String, unique=True, index=True, nullable=False)
    uses_remaining = Column(Integer, nullable=False)  # 0 means exhausted
    created_by = Column(String, nullable=False)  # admin user_id
    created_at = Column(String, nullable=False)  # ISO format string
