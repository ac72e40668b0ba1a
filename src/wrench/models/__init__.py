"""SQLAlchemy models for the WRENCH store."""

from .announcement import AnnouncementModel
from .community import CommunityModel
from .community_membership import CommunityMembershipModel
from .course import CourseModel
from .invite_code import InviteCodeModel
from .test import TestModel
from .test_attempt import TestAttemptModel
from .tool import ToolModel
from .user import UserModel

__all__ = [
    "AnnouncementModel",
    "CommunityModel",
    "CommunityMembershipModel",
    "CourseModel",
    "InviteCodeModel",
    "TestModel",
    "TestAttemptModel",
    "ToolModel",
    "UserModel",
]
