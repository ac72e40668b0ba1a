"""Read-only aggregate views for learners and administrators."""

from typing import List

from pydantic import BaseModel

from wrench.schemas.assessment import AttemptInfo, InviteCodeInfo, TestInfo
from wrench.schemas.community import CommunityInfo, MembershipInfo
from wrench.schemas.course import AnnouncementInfo, CourseAccess, CourseInfo, ToolInfo
from wrench.schemas.user import UserProfile


class Dashboard(BaseModel):
    user: UserProfile
    active_community: CommunityInfo
    courses: List[CourseAccess]
    attempts: List[AttemptInfo]
    announcements: List[AnnouncementInfo]


class AdminOverview(BaseModel):
    communities: List[CommunityInfo]
    memberships: List[MembershipInfo]
    users: List[UserProfile]
    courses: List[CourseInfo]
    tests: List[TestInfo]
    tools: List[ToolInfo]
    invite_codes: List[InviteCodeInfo]
