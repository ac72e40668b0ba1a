"""User database model.

This module defines the User database model using SQLAlchemy.
"""

from sqlalchemy import Column, Integer, String
from .base import Base


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, nullable=False)
    username_key = Column(String, unique=True, index=True, nullable=False)  # lowercased
    email = Column(String, nullable=False)
    email_key = Column(String, unique=True, index=True, nullable=False)  # lowercased
    name = Column(String, nullable=False)
    role = Column(String, nullable=False)  # 'admin' or 'learner'
    level = Column(Integer, nullable=False)  # 1 beginner, 2 intermediate, 3 advanced
    token = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(String, nullable=False)  # ISO format string
