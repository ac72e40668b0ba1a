"""Course, tool and announcement schema definitions.

Courses hold an ordered list of sections, each an ordered list of chapters.
Prerequisites are ids of tests that must have been passed in the same
community.
"""

import uuid
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from wrench.schemas.user import SkillLevel


def _new_id() -> str:
    return str(uuid.uuid4())


class Chapter(BaseModel):
    chapter_id: str = Field(default_factory=_new_id)
    title: str
    content_markdown: str = ""
    tool_ids: List[str] = Field(default_factory=list)


class Section(BaseModel):
    section_id: str = Field(default_factory=_new_id)
    title: str
    chapters: List[Chapter] = Field(default_factory=list)


class CourseInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_id: str
    community_id: str
    title: str
    category: str
    description: str
    required_starting_level: SkillLevel
    required_passed_test_ids: List[str] = Field(default_factory=list)
    sections: List[Section] = Field(default_factory=list)
    is_published: bool
    created_at: str


class CreateCourseRequest(BaseModel):
    community_slug: str
    title: str
    category: str = ""
    description: str = ""
    required_starting_level: SkillLevel = SkillLevel.BEGINNER
    required_passed_test_ids: List[str] = Field(default_factory=list)
    sections: List[Section] = Field(default_factory=list)
    is_published: bool = False


class CourseAccess(BaseModel):
    """A course together with the derived unlock decision for one user."""

    course: CourseInfo
    unlocked: bool
    reason: str


class ToolInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tool_id: str
    community_id: str
    name: str
    description: str
    link: str
    created_at: str


class CreateToolRequest(BaseModel):
    community_slug: str
    name: str
    description: str = ""
    link: str = ""


class AnnouncementInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    announcement_id: str
    community_id: str
    title: str
    message: str
    created_at: str


class CreateAnnouncementRequest(BaseModel):
    community_slug: str
    title: str
    message: str
