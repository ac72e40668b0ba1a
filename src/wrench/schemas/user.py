"""User schema definitions.

This module defines the user record, its redacted public projection and the
login/signup request and response shapes.
"""

from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Platform-wide role. Also used as the per-community role."""

    ADMIN = "admin"
    LEARNER = "learner"


class SkillLevel(IntEnum):
    """Ordered skill levels: beginner < intermediate < advanced."""

    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class User(BaseModel):
    """Full user record, including credentials. Never returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    username: str
    email: str
    name: str
    role: UserRole
    level: SkillLevel
    token: str
    password_hash: str
    created_at: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserProfile(BaseModel):
    """Redacted projection of a user: no password hash, no token."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    username: str
    email: str
    name: str
    role: UserRole
    level: SkillLevel


class LoginRequest(BaseModel):
    username: str
    password: str


class SignupRequest(BaseModel):
    username: str
    password: str
    email: str
    name: str
    level: SkillLevel = SkillLevel.BEGINNER
    role: UserRole = UserRole.LEARNER
    admin_invite_code: Optional[str] = Field(
        default=None,
        description="Required when role is admin.",
    )
    community_slug: Optional[str] = Field(
        default=None,
        description="Community to join; the default community when omitted.",
    )


class LoginResult(BaseModel):
    """Returned by login and signup."""

    token: str
    role: UserRole
    name: str
    username: str
    level: SkillLevel

    @classmethod
    def from_user(cls, user: User) -> "LoginResult":
        return cls(
            token=user.token,
            role=user.role,
            name=user.name,
            username=user.username,
            level=user.level,
        )


class BootstrapInfo(BaseModel):
    platform_name: str
    has_default_admin: bool
