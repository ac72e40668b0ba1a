"""Community (tenant) and membership schema definitions."""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from wrench.schemas.user import UserRole


class CommunityStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


class CommunityInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    community_id: str
    slug: str
    name: str
    description: str
    branding: Dict[str, str] = Field(default_factory=dict)
    status: CommunityStatus
    created_at: str


class MembershipInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    membership_id: str
    community_id: str
    user_id: str
    role: UserRole
    joined_at: str


class CreateCommunityRequest(BaseModel):
    slug: str
    name: str
    description: str = ""
    branding: Dict[str, str] = Field(default_factory=dict)
    status: CommunityStatus = CommunityStatus.ACTIVE


class CreateMembershipRequest(BaseModel):
    community_slug: str
    username: str
    role: UserRole = UserRole.LEARNER
