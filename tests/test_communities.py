import pytest

from wrench import config
from wrench.core.exceptions import (
    CommunityNotFoundError,
    ForbiddenError,
    MembershipAlreadyExistsError,
    SlugAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)
from wrench.schemas.community import CommunityStatus, CreateCommunityRequest, CreateMembershipRequest
from wrench.schemas.user import UserRole


def test_create_community_normalizes_slug(platform, admin_token) -> None:
    community = platform.create_community(
        admin_token,
        CreateCommunityRequest(
            slug="HVAC",
            name="HVAC",
            description="HVAC campus",
            branding={"primaryColor": "#0f766e"},
            status=CommunityStatus.ACTIVE,
        ),
    )
    assert community.slug == "hvac"
    assert community.branding == {"primaryColor": "#0f766e"}
    assert community.status == CommunityStatus.ACTIVE


def test_slug_uniqueness_ignores_case(platform, admin_token, make_community) -> None:
    make_community("HVAC")
    with pytest.raises(SlugAlreadyExistsError):
        make_community("hvac")
    with pytest.raises(SlugAlreadyExistsError):
        make_community("Automotive")


def test_empty_slug_rejected(platform, admin_token) -> None:
    with pytest.raises(ValidationError):
        platform.create_community(admin_token, CreateCommunityRequest(slug="", name="Nameless"))
    with pytest.raises(ValidationError):
        platform.create_community(admin_token, CreateCommunityRequest(slug="   ", name="Blank"))


def test_membership_is_unique_per_pair(platform, signup_learner, make_community, join) -> None:
    signup_learner("tech1")
    make_community("hvac")
    join("hvac", "tech1")
    with pytest.raises(MembershipAlreadyExistsError):
        join("hvac", "TECH1")


def test_add_member_requires_community_and_user(platform, admin_token, make_community) -> None:
    make_community("hvac")
    with pytest.raises(CommunityNotFoundError):
        platform.add_membership(
            admin_token, CreateMembershipRequest(community_slug="marine", username="wrenchadmin")
        )
    with pytest.raises(UserNotFoundError):
        platform.add_membership(
            admin_token, CreateMembershipRequest(community_slug="hvac", username="ghost")
        )


def test_add_member_keeps_requested_role(platform, admin_token, signup_learner, make_community) -> None:
    signup_learner("tech1")
    make_community("hvac")
    membership = platform.add_membership(
        admin_token,
        CreateMembershipRequest(community_slug="HVAC", username="tech1", role=UserRole.ADMIN),
    )
    assert membership.role == UserRole.ADMIN


def test_signup_accepts_case_insensitive_community_slug(platform, signup_learner) -> None:
    token = signup_learner("tech1", community_slug="Automotive").token
    communities = platform.my_communities(token)
    assert [c.slug for c in communities] == ["automotive"]
    assert platform.dashboard(token, "automotive").active_community.slug == "automotive"


def test_signup_defaults_to_default_community(platform, signup_learner) -> None:
    token = signup_learner("tech1", community_slug="  ").token
    assert [c.slug for c in platform.my_communities(token)] == [config.DEFAULT_COMMUNITY_SLUG]


def test_signup_to_unknown_community_creates_nothing(platform, admin_token, signup_learner) -> None:
    with pytest.raises(CommunityNotFoundError):
        signup_learner("tech1", community_slug="marine")
    usernames = [u.username for u in platform.admin_overview(admin_token).users]
    assert "tech1" not in usernames
    # the username is free again
    assert signup_learner("tech1").username == "tech1"


def test_accessible_community_resolution(platform, signup_learner, make_community, join) -> None:
    token = signup_learner("tech1").token
    make_community("hvac")
    make_community("marine")

    # no slug: first community in registry order
    assert platform.dashboard(token).active_community.slug == "automotive"

    # explicit slug without membership: no access
    with pytest.raises(ForbiddenError):
        platform.dashboard(token, "hvac")
    # unknown slug: no access either
    with pytest.raises(ForbiddenError):
        platform.dashboard(token, "nowhere")

    join("hvac", "tech1")
    assert platform.dashboard(token, "HVAC").active_community.slug == "hvac"
    assert [c.slug for c in platform.my_communities(token)] == ["automotive", "hvac"]


def test_first_community_follows_registry_order(platform, signup_learner, make_community, join) -> None:
    make_community("hvac")
    make_community("marine")
    token = signup_learner("tech1", community_slug="marine").token
    join("hvac", "tech1")
    # joined marine first, but hvac was registered first
    assert platform.dashboard(token).active_community.slug == "hvac"


def test_blank_slug_is_not_a_fallback(platform, signup_learner) -> None:
    token = signup_learner("tech1").token
    with pytest.raises(ForbiddenError):
        platform.dashboard(token, "")
