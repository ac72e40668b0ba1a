"""Course catalog utilities.

Courses, tools and announcements all belong to exactly one community.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session

from wrench.models.announcement import AnnouncementModel
from wrench.models.course import CourseModel
from wrench.models.tool import ToolModel
from wrench.schemas.course import (
    AnnouncementInfo,
    CourseInfo,
    CreateAnnouncementRequest,
    CreateCourseRequest,
    CreateToolRequest,
    ToolInfo,
)
from wrench.schemas.user import User
from wrench.utils.community_manager import CommunityManager

logger = logging.getLogger(__name__)


class CourseManager:
    """Manages courses and the tools and announcements published alongside them."""

    def __init__(self, db: Session):
        self.db = db

    def add_course(self, req: CreateCourseRequest) -> CourseInfo:
        """Create a course in a community.

        Prerequisite test ids are stored as given. Tests are created after
        their course, so the ids need not exist yet; ids of tests from other
        communities are kept but can never be satisfied.

        Raises:
            CommunityNotFoundError: If the community does not exist.
        """
        community = CommunityManager(self.db).get_by_slug(req.community_slug)
        model = CourseModel(
            course_id=str(uuid.uuid4()),
            community_id=community.community_id,
            title=req.title,
            category=req.category,
            description=req.description,
            required_starting_level=int(req.required_starting_level),
            required_passed_test_ids=list(req.required_passed_test_ids),
            sections=[section.model_dump() for section in req.sections],
            is_published=req.is_published,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.flush()
        logger.info("Created course '%s' in community %s", model.title, community.slug)
        return CourseInfo.model_validate(model)

    def get_course(self, course_id: str, community_id: str) -> Optional[CourseInfo]:
        """Return the course only if it belongs to the given community."""
        model = (
            self.db.query(CourseModel)
            .filter(
                CourseModel.course_id == course_id,
                CourseModel.community_id == community_id,
            )
            .first()
        )
        if model:
            return CourseInfo.model_validate(model)
        return None

    def courses_in(self, community_id: str) -> List[CourseInfo]:
        models = (
            self.db.query(CourseModel)
            .filter(CourseModel.community_id == community_id)
            .order_by(CourseModel.id)
            .all()
        )
        return [CourseInfo.model_validate(m) for m in models]

    def courses_visible(self, user: User, community_id: str) -> List[CourseInfo]:
        """Published courses of a community; administrators also see drafts."""
        courses = self.courses_in(community_id)
        if user.is_admin:
            return courses
        return [course for course in courses if course.is_published]

    def list_courses(self) -> List[CourseInfo]:
        models = self.db.query(CourseModel).order_by(CourseModel.id).all()
        return [CourseInfo.model_validate(m) for m in models]

    def add_tool(self, req: CreateToolRequest) -> ToolInfo:
        community = CommunityManager(self.db).get_by_slug(req.community_slug)
        model = ToolModel(
            tool_id=str(uuid.uuid4()),
            community_id=community.community_id,
            name=req.name,
            description=req.description,
            link=req.link,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.flush()
        logger.info("Created tool '%s' in community %s", model.name, community.slug)
        return ToolInfo.model_validate(model)

    def tools_in(self, community_id: str) -> List[ToolInfo]:
        models = (
            self.db.query(ToolModel)
            .filter(ToolModel.community_id == community_id)
            .order_by(ToolModel.id)
            .all()
        )
        return [ToolInfo.model_validate(m) for m in models]

    def list_tools(self) -> List[ToolInfo]:
        models = self.db.query(ToolModel).order_by(ToolModel.id).all()
        return [ToolInfo.model_validate(m) for m in models]

    def add_announcement(self, req: CreateAnnouncementRequest) -> AnnouncementInfo:
        community = CommunityManager(self.db).get_by_slug(req.community_slug)
        model = AnnouncementModel(
            announcement_id=str(uuid.uuid4()),
            community_id=community.community_id,
            title=req.title,
            message=req.message,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.flush()
        logger.info("Posted announcement '%s' in community %s", model.title, community.slug)
        return AnnouncementInfo.model_validate(model)

    def announcements_in(self, community_id: str) -> List[AnnouncementInfo]:
        """Announcements of a community, newest first."""
        models = (
            self.db.query(AnnouncementModel)
            .filter(AnnouncementModel.community_id == community_id)
            .order_by(AnnouncementModel.created_at.desc(), AnnouncementModel.id.desc())
            .all()
        )
        return [AnnouncementInfo.model_validate(m) for m in models]
