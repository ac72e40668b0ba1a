import os

# Keep password hashing cheap in tests; read when wrench.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import Callable, List, Optional

import pytest
from sqlalchemy.orm import sessionmaker

from wrench import config
from wrench.core.database import create_session_factory
from wrench.core.platform import LearningPlatform
from wrench.schemas.assessment import CreateTestRequest, TestInfo, TestQuestion
from wrench.schemas.community import CommunityInfo, CreateCommunityRequest, CreateMembershipRequest
from wrench.schemas.course import CourseInfo, CreateCourseRequest
from wrench.schemas.user import LoginResult, SignupRequest, SkillLevel, UserRole


@pytest.fixture
def session_factory() -> sessionmaker:
    return create_session_factory("sqlite://")


@pytest.fixture
def platform(session_factory: sessionmaker) -> LearningPlatform:
    """A freshly seeded platform with its own in-memory store."""
    instance = LearningPlatform(session_factory)
    instance.seed_defaults()
    return instance


@pytest.fixture
def admin_token(platform: LearningPlatform) -> str:
    return platform.login(config.DEFAULT_ADMIN_USERNAME, config.DEFAULT_ADMIN_PASSWORD).token


@pytest.fixture
def signup_learner(platform: LearningPlatform) -> Callable[..., LoginResult]:
    def _signup(
        username: str,
        level: SkillLevel = SkillLevel.BEGINNER,
        community_slug: Optional[str] = None,
    ) -> LoginResult:
        return platform.signup(
            SignupRequest(
                username=username,
                password="pass123",
                email=f"{username}@example.com",
                name=username.title(),
                level=level,
                role=UserRole.LEARNER,
                community_slug=community_slug,
            )
        )

    return _signup


@pytest.fixture
def make_community(platform: LearningPlatform, admin_token: str) -> Callable[[str], CommunityInfo]:
    def _make(slug: str) -> CommunityInfo:
        return platform.create_community(
            admin_token, CreateCommunityRequest(slug=slug, name=slug.upper())
        )

    return _make


@pytest.fixture
def join(platform: LearningPlatform, admin_token: str) -> Callable[[str, str], None]:
    def _join(community_slug: str, username: str) -> None:
        platform.add_membership(
            admin_token,
            CreateMembershipRequest(community_slug=community_slug, username=username),
        )

    return _join


@pytest.fixture
def make_course(platform: LearningPlatform, admin_token: str) -> Callable[..., CourseInfo]:
    def _make(
        community_slug: str = config.DEFAULT_COMMUNITY_SLUG,
        title: str = "Fundamentals",
        level: SkillLevel = SkillLevel.BEGINNER,
        prerequisites: Optional[List[str]] = None,
        published: bool = True,
    ) -> CourseInfo:
        return platform.create_course(
            admin_token,
            CreateCourseRequest(
                community_slug=community_slug,
                title=title,
                category="General",
                description=f"{title} course",
                required_starting_level=level,
                required_passed_test_ids=prerequisites or [],
                is_published=published,
            ),
        )

    return _make


def question(correct: int = 0) -> TestQuestion:
    return TestQuestion(prompt="Pick one", options=["A", "B", "C"], correct_option_index=correct)


@pytest.fixture
def make_test(platform: LearningPlatform, admin_token: str) -> Callable[..., TestInfo]:
    def _make(
        course: CourseInfo,
        community_slug: str = config.DEFAULT_COMMUNITY_SLUG,
        passing_score: float = 100,
        questions: Optional[List[TestQuestion]] = None,
    ) -> TestInfo:
        return platform.create_test(
            admin_token,
            CreateTestRequest(
                community_slug=community_slug,
                course_id=course.course_id,
                title=f"{course.title} test",
                passing_score=passing_score,
                questions=[question(0)] if questions is None else questions,
            ),
        )

    return _make
