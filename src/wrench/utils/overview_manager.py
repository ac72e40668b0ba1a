"""Read-only views composed from the other managers."""

from sqlalchemy.orm import Session

from wrench.schemas.community import CommunityInfo
from wrench.schemas.overview import AdminOverview, Dashboard
from wrench.schemas.user import User, UserProfile
from wrench.utils.assessment_manager import AssessmentManager
from wrench.utils.community_manager import CommunityManager
from wrench.utils.course_manager import CourseManager
from wrench.utils.invite_manager import InviteManager
from wrench.utils.progression import ProgressionGate
from wrench.utils.user_manager import UserManager


class OverviewManager:
    def __init__(self, db: Session):
        self.db = db

    def dashboard(self, user: User, community: CommunityInfo) -> Dashboard:
        """The learner's view of one community.

        Attempts are limited to tests of that community, newest first, and
        announcements are newest first.
        """
        return Dashboard(
            user=UserProfile.model_validate(user.model_dump()),
            active_community=community,
            courses=ProgressionGate(self.db).access_list(user, community.community_id),
            attempts=AssessmentManager(self.db).attempts_for(user, community.community_id),
            announcements=CourseManager(self.db).announcements_in(community.community_id),
        )

    def admin_overview(self) -> AdminOverview:
        """Everything across all communities.

        No authorization happens here; callers must restrict it to admins.
        """
        community_manager = CommunityManager(self.db)
        course_manager = CourseManager(self.db)
        assessment_manager = AssessmentManager(self.db)
        return AdminOverview(
            communities=community_manager.list_communities(),
            memberships=community_manager.list_memberships(),
            users=UserManager(self.db).list_users(),
            courses=course_manager.list_courses(),
            tests=assessment_manager.list_tests(),
            tools=course_manager.list_tools(),
            invite_codes=InviteManager(self.db).list_invite_codes(),
        )
