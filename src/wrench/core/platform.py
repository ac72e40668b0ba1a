"""The platform aggregate.

``LearningPlatform`` owns the store and is the only way to reach it. Each
operation runs in its own transaction under one lock, so concurrent signups
cannot both take the last use of an invite code and concurrent submissions
cannot lose an attempt. Reads take the same lock because the whole store sits
behind a single SQLite connection; they never see half-applied changes.

Operations that need a bearer token authenticate it here. The managers in
``wrench.utils`` never check authorization themselves.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy.orm import Session, sessionmaker

from wrench import config
from wrench.core.database import create_session_factory
from wrench.core.exceptions import ForbiddenError, UnauthenticatedError
from wrench.schemas.assessment import (
    AttemptInfo,
    CreateTestRequest,
    InviteCodeInfo,
    SubmitTestRequest,
    TestInfo,
)
from wrench.schemas.community import (
    CommunityInfo,
    CreateCommunityRequest,
    CreateMembershipRequest,
    MembershipInfo,
)
from wrench.schemas.course import (
    AnnouncementInfo,
    CourseAccess,
    CourseInfo,
    CreateAnnouncementRequest,
    CreateCourseRequest,
    CreateToolRequest,
    ToolInfo,
)
from wrench.schemas.overview import AdminOverview, Dashboard
from wrench.schemas.user import (
    BootstrapInfo,
    LoginResult,
    SignupRequest,
    SkillLevel,
    User,
    UserRole,
)
from wrench.utils.assessment_manager import AssessmentManager
from wrench.utils.community_manager import CommunityManager
from wrench.utils.course_manager import CourseManager
from wrench.utils.invite_manager import InviteManager
from wrench.utils.overview_manager import OverviewManager
from wrench.utils.progression import ProgressionGate
from wrench.utils.user_manager import UserManager

logger = logging.getLogger(__name__)


class LearningPlatform:
    """Process-lifetime store plus every operation the API exposes."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        """Initialize the platform.

        Args:
            session_factory: Session factory of the store. A fresh store at
                ``config.DATABASE_URL`` is created when omitted.
        """
        self._session_factory = session_factory or create_session_factory()
        self._lock = threading.RLock()

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        """Hold the store lock for one unit of work.

        Commits on success; on any exception, rolls back and re-raises.
        """
        with self._lock:
            db = self._session_factory()
            try:
                yield db
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    # --- Seeding ---

    def seed_defaults(self) -> None:
        """Create the default community and administrator if they are missing."""
        with self._transaction() as db:
            communities = CommunityManager(db)
            community = communities.find_by_slug(config.DEFAULT_COMMUNITY_SLUG)
            if community is None:
                community = communities.create_community(
                    CreateCommunityRequest(
                        slug=config.DEFAULT_COMMUNITY_SLUG,
                        name=config.DEFAULT_COMMUNITY_NAME,
                        description=config.DEFAULT_COMMUNITY_DESCRIPTION,
                        branding=config.DEFAULT_COMMUNITY_BRANDING,
                    )
                )

            users = UserManager(db)
            if users.get_model_by_username(config.DEFAULT_ADMIN_USERNAME) is None:
                admin = users.create_user(
                    username=config.DEFAULT_ADMIN_USERNAME,
                    password=config.DEFAULT_ADMIN_PASSWORD,
                    email=config.DEFAULT_ADMIN_EMAIL,
                    name=config.DEFAULT_ADMIN_NAME,
                    role=UserRole.ADMIN,
                    level=SkillLevel.ADVANCED,
                )
                communities.add_membership(community.community_id, admin.user_id, UserRole.ADMIN)
                logger.info("Seeded default admin: %s", admin.username)

    # --- Caller-level authorization ---

    @staticmethod
    def _authenticate(db: Session, token: Optional[str]) -> User:
        user = UserManager(db).resolve(token)
        if user is None:
            raise UnauthenticatedError("unauthorized")
        return user

    @classmethod
    def _require_admin(cls, db: Session, token: Optional[str]) -> User:
        user = cls._authenticate(db, token)
        if not user.is_admin:
            raise ForbiddenError("forbidden")
        return user

    @staticmethod
    def _active_community(db: Session, user: User, slug: Optional[str]) -> CommunityInfo:
        community = CommunityManager(db).accessible_community(user, slug)
        if community is None:
            raise ForbiddenError("no access to community")
        return community

    # --- Public operations ---

    def bootstrap_info(self) -> BootstrapInfo:
        with self._transaction() as db:
            return BootstrapInfo(
                platform_name=config.PLATFORM_NAME,
                has_default_admin=UserManager(db).has_admin(),
            )

    def login(self, username: str, password: str) -> LoginResult:
        with self._transaction() as db:
            return LoginResult.from_user(UserManager(db).login(username, password))

    def signup(self, req: SignupRequest) -> LoginResult:
        with self._transaction() as db:
            return LoginResult.from_user(UserManager(db).signup(req))

    def resolve(self, token: Optional[str]) -> Optional[User]:
        with self._transaction() as db:
            return UserManager(db).resolve(token)

    # --- Learner operations ---

    def dashboard(self, token: Optional[str], community_slug: Optional[str] = None) -> Dashboard:
        with self._transaction() as db:
            user = self._authenticate(db, token)
            community = self._active_community(db, user, community_slug)
            return OverviewManager(db).dashboard(user, community)

    def list_courses(
        self, token: Optional[str], community_slug: Optional[str] = None
    ) -> List[CourseAccess]:
        with self._transaction() as db:
            user = self._authenticate(db, token)
            community = self._active_community(db, user, community_slug)
            return ProgressionGate(db).access_list(user, community.community_id)

    def list_tests(self, token: Optional[str], community_slug: Optional[str] = None) -> List[TestInfo]:
        with self._transaction() as db:
            user = self._authenticate(db, token)
            community = self._active_community(db, user, community_slug)
            return AssessmentManager(db).tests_in(community.community_id)

    def list_tools(self, token: Optional[str], community_slug: Optional[str] = None) -> List[ToolInfo]:
        with self._transaction() as db:
            user = self._authenticate(db, token)
            community = self._active_community(db, user, community_slug)
            return CourseManager(db).tools_in(community.community_id)

    def list_announcements(
        self, token: Optional[str], community_slug: Optional[str] = None
    ) -> List[AnnouncementInfo]:
        with self._transaction() as db:
            user = self._authenticate(db, token)
            community = self._active_community(db, user, community_slug)
            return CourseManager(db).announcements_in(community.community_id)

    def my_communities(self, token: Optional[str]) -> List[CommunityInfo]:
        with self._transaction() as db:
            user = self._authenticate(db, token)
            return CommunityManager(db).communities_for(user)

    def submit_test(
        self,
        token: Optional[str],
        payload: SubmitTestRequest,
        community_slug: Optional[str] = None,
    ) -> AttemptInfo:
        with self._transaction() as db:
            user = self._authenticate(db, token)
            community = self._active_community(db, user, community_slug)
            return AssessmentManager(db).submit_test(user, payload, community.community_id)

    # --- Admin operations ---

    def admin_overview(self, token: Optional[str]) -> AdminOverview:
        with self._transaction() as db:
            self._require_admin(db, token)
            return OverviewManager(db).admin_overview()

    def create_invite_code(self, token: Optional[str], uses: int) -> InviteCodeInfo:
        with self._transaction() as db:
            admin = self._require_admin(db, token)
            return InviteManager(db).create(uses, admin.user_id)

    def create_tool(self, token: Optional[str], req: CreateToolRequest) -> ToolInfo:
        with self._transaction() as db:
            self._require_admin(db, token)
            return CourseManager(db).add_tool(req)

    def create_course(self, token: Optional[str], req: CreateCourseRequest) -> CourseInfo:
        with self._transaction() as db:
            self._require_admin(db, token)
            return CourseManager(db).add_course(req)

    def create_test(self, token: Optional[str], req: CreateTestRequest) -> TestInfo:
        with self._transaction() as db:
            self._require_admin(db, token)
            return AssessmentManager(db).add_test(req)

    def create_announcement(
        self, token: Optional[str], req: CreateAnnouncementRequest
    ) -> AnnouncementInfo:
        with self._transaction() as db:
            self._require_admin(db, token)
            return CourseManager(db).add_announcement(req)

    def create_community(self, token: Optional[str], req: CreateCommunityRequest) -> CommunityInfo:
        with self._transaction() as db:
            self._require_admin(db, token)
            return CommunityManager(db).create_community(req)

    def add_membership(self, token: Optional[str], req: CreateMembershipRequest) -> MembershipInfo:
        with self._transaction() as db:
            self._require_admin(db, token)
            return CommunityManager(db).add_member(req.community_slug, req.username, req.role)
