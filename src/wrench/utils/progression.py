"""Course unlock decisions.

An unlock decision depends on the user's role, skill level and the tests they
have passed inside one community. Decisions are computed on every call and
never stored: attempts and memberships can change between reads.
"""

from typing import List, Set, Tuple

from sqlalchemy.orm import Session

from wrench.models.test import TestModel
from wrench.models.test_attempt import TestAttemptModel
from wrench.schemas.course import CourseAccess, CourseInfo
from wrench.schemas.user import User
from wrench.utils.course_manager import CourseManager

ADMIN_ACCESS = "Admin access"
UNLOCKED = "Unlocked"
MISSING_PREREQUISITES = "Requires passing prerequisite tests"


class ProgressionGate:
    """Derives which courses a user may open in a community."""

    def __init__(self, db: Session):
        self.db = db

    def passed_test_ids(self, user: User, community_id: str) -> Set[str]:
        """Ids of tests of ``community_id`` that the user has passed at least once.

        A pass recorded against a test of another community never counts here.
        """
        rows = (
            self.db.query(TestAttemptModel.test_id)
            .join(TestModel, TestModel.test_id == TestAttemptModel.test_id)
            .filter(
                TestAttemptModel.user_id == user.user_id,
                TestAttemptModel.passed.is_(True),
                TestModel.community_id == community_id,
            )
            .distinct()
            .all()
        )
        return {row.test_id for row in rows}

    @staticmethod
    def _evaluate(course: CourseInfo, user: User, passed: Set[str]) -> Tuple[bool, str]:
        if user.is_admin:
            return True, ADMIN_ACCESS
        if user.level < course.required_starting_level:
            return False, f"Requires {course.required_starting_level.label} level"
        missing = set(course.required_passed_test_ids) - passed
        if missing:
            return False, MISSING_PREREQUISITES
        return True, UNLOCKED

    def can_access(self, course: CourseInfo, user: User, community_id: str) -> Tuple[bool, str]:
        """Return ``(unlocked, reason)`` for one course.

        Administrators bypass every check. Otherwise the user's level must
        reach the course's starting level and every prerequisite test must
        have been passed within ``community_id``.
        """
        if user.is_admin:
            return True, ADMIN_ACCESS
        return self._evaluate(course, user, self.passed_test_ids(user, community_id))

    def access_list(self, user: User, community_id: str) -> List[CourseAccess]:
        """Every course the user can see in the community with its unlock decision."""
        courses = CourseManager(self.db).courses_visible(user, community_id)
        passed = set() if user.is_admin else self.passed_test_ids(user, community_id)
        results = []
        for course in courses:
            unlocked, reason = self._evaluate(course, user, passed)
            results.append(CourseAccess(course=course, unlocked=unlocked, reason=reason))
        return results
