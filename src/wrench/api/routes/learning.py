"""Learner routes.

All endpoints need a bearer token. The active community comes from the
optional ``X-Community`` header and defaults to the user's first community.
"""

from typing import List

from fastapi import APIRouter, status

from wrench.core.dependencies import CommunitySlugDep, PlatformDep, TokenDep
from wrench.schemas.assessment import AttemptInfo, SubmitTestRequest, TestInfo
from wrench.schemas.community import CommunityInfo
from wrench.schemas.course import AnnouncementInfo, CourseAccess, ToolInfo
from wrench.schemas.overview import Dashboard

router = APIRouter(prefix="/api", tags=["Learning"])


@router.get("/dashboard", response_model=Dashboard, summary="Learner dashboard")
def dashboard(platform: PlatformDep, token: TokenDep, community: CommunitySlugDep) -> Dashboard:
    return platform.dashboard(token, community)


@router.get("/courses", response_model=List[CourseAccess], summary="Courses with access")
def list_courses(
    platform: PlatformDep, token: TokenDep, community: CommunitySlugDep
) -> List[CourseAccess]:
    return platform.list_courses(token, community)


@router.get("/tests", response_model=List[TestInfo], summary="Tests")
def list_tests(platform: PlatformDep, token: TokenDep, community: CommunitySlugDep) -> List[TestInfo]:
    return platform.list_tests(token, community)


@router.get("/tools", response_model=List[ToolInfo], summary="Tools")
def list_tools(platform: PlatformDep, token: TokenDep, community: CommunitySlugDep) -> List[ToolInfo]:
    return platform.list_tools(token, community)


@router.get("/announcements", response_model=List[AnnouncementInfo], summary="Announcements")
def list_announcements(
    platform: PlatformDep, token: TokenDep, community: CommunitySlugDep
) -> List[AnnouncementInfo]:
    return platform.list_announcements(token, community)


@router.get("/communities", response_model=List[CommunityInfo], summary="My communities")
def my_communities(platform: PlatformDep, token: TokenDep) -> List[CommunityInfo]:
    return platform.my_communities(token)


@router.post(
    "/tests/submit",
    response_model=AttemptInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a test",
)
def submit_test(
    req: SubmitTestRequest,
    platform: PlatformDep,
    token: TokenDep,
    community: CommunitySlugDep,
) -> AttemptInfo:
    return platform.submit_test(token, req, community)
