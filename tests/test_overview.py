import pytest

from wrench.core.exceptions import CommunityNotFoundError, ForbiddenError, UnauthenticatedError
from wrench.schemas.assessment import SubmitTestRequest
from wrench.schemas.course import CreateAnnouncementRequest, CreateToolRequest


def test_dashboard_profile_is_redacted(platform, signup_learner) -> None:
    token = signup_learner("tech1").token
    dashboard = platform.dashboard(token)
    profile = dashboard.user.model_dump()
    assert profile["username"] == "tech1"
    assert "token" not in profile
    assert "password_hash" not in profile


def test_dashboard_attempts_limited_to_community(
    platform, signup_learner, make_community, join, make_course, make_test
) -> None:
    token = signup_learner("tech1").token
    make_community("hvac")
    join("hvac", "tech1")
    auto_test = make_test(make_course(title="Auto"))
    hvac_test = make_test(make_course(community_slug="hvac", title="HVAC"), community_slug="hvac")

    platform.submit_test(token, SubmitTestRequest(test_id=auto_test.test_id, selected_option_indexes=[0]))
    platform.submit_test(
        token, SubmitTestRequest(test_id=hvac_test.test_id, selected_option_indexes=[0]), "hvac"
    )

    auto = platform.dashboard(token, "automotive")
    assert [a.test_id for a in auto.attempts] == [auto_test.test_id]
    hvac = platform.dashboard(token, "hvac")
    assert [a.test_id for a in hvac.attempts] == [hvac_test.test_id]
    assert [c.course.title for c in hvac.courses] == ["HVAC"]


def test_announcements_newest_first(platform, admin_token, signup_learner) -> None:
    token = signup_learner("tech1").token
    for title in ("first", "second", "third"):
        platform.create_announcement(
            admin_token,
            CreateAnnouncementRequest(community_slug="automotive", title=title, message="hi"),
        )

    assert [a.title for a in platform.dashboard(token).announcements] == ["third", "second", "first"]
    assert [a.title for a in platform.list_announcements(token)] == ["third", "second", "first"]


def test_tools_listed_per_community(platform, admin_token, signup_learner, make_community) -> None:
    token = signup_learner("tech1").token
    make_community("hvac")
    platform.create_tool(
        admin_token,
        CreateToolRequest(community_slug="automotive", name="Scanner", link="https://example.com/obd"),
    )
    platform.create_tool(admin_token, CreateToolRequest(community_slug="hvac", name="Gauge"))

    assert [t.name for t in platform.list_tools(token)] == ["Scanner"]
    with pytest.raises(CommunityNotFoundError):
        platform.create_tool(admin_token, CreateToolRequest(community_slug="marine", name="Hull"))


def test_admin_overview_spans_communities(
    platform, admin_token, signup_learner, make_community, make_course, make_test
) -> None:
    signup_learner("tech1")
    make_community("hvac")
    make_test(make_course(title="Auto"))
    make_course(community_slug="hvac", title="HVAC", published=False)
    platform.create_tool(admin_token, CreateToolRequest(community_slug="hvac", name="Gauge"))
    platform.create_invite_code(admin_token, 3)

    overview = platform.admin_overview(admin_token)
    assert [c.slug for c in overview.communities] == ["automotive", "hvac"]
    assert [u.username for u in overview.users] == ["wrenchadmin", "tech1"]
    assert [c.title for c in overview.courses] == ["Auto", "HVAC"]
    assert len(overview.tests) == 1
    assert [t.name for t in overview.tools] == ["Gauge"]
    assert [i.uses_remaining for i in overview.invite_codes] == [3]
    assert len(overview.memberships) == 2
    for user in overview.users:
        assert "token" not in user.model_dump()


def test_learner_operations_need_a_token(platform) -> None:
    with pytest.raises(UnauthenticatedError):
        platform.dashboard(None)
    with pytest.raises(UnauthenticatedError):
        platform.list_courses("bogus")
    with pytest.raises(UnauthenticatedError):
        platform.submit_test(None, SubmitTestRequest(test_id="x", selected_option_indexes=[]))


def test_unjoined_community_is_forbidden(platform, signup_learner, make_community) -> None:
    make_community("hvac")
    token = signup_learner("tech1").token
    with pytest.raises(ForbiddenError):
        platform.list_tools(token, "hvac")
