"""Administrator routes.

Every endpoint needs the bearer token of a user whose platform role is admin.
"""

from fastapi import APIRouter, status

from wrench.core.dependencies import PlatformDep, TokenDep
from wrench.schemas.assessment import CreateInviteCodeRequest, CreateTestRequest, InviteCodeInfo, TestInfo
from wrench.schemas.community import (
    CommunityInfo,
    CreateCommunityRequest,
    CreateMembershipRequest,
    MembershipInfo,
)
from wrench.schemas.course import (
    AnnouncementInfo,
    CourseInfo,
    CreateAnnouncementRequest,
    CreateCourseRequest,
    CreateToolRequest,
    ToolInfo,
)
from wrench.schemas.overview import AdminOverview

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/overview", response_model=AdminOverview, summary="Cross-community overview")
def overview(platform: PlatformDep, token: TokenDep) -> AdminOverview:
    return platform.admin_overview(token)


@router.post(
    "/invite-codes",
    response_model=InviteCodeInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Create an admin invite code",
)
def create_invite_code(
    req: CreateInviteCodeRequest, platform: PlatformDep, token: TokenDep
) -> InviteCodeInfo:
    return platform.create_invite_code(token, req.uses)


@router.post("/tools", response_model=ToolInfo, status_code=status.HTTP_201_CREATED)
def create_tool(req: CreateToolRequest, platform: PlatformDep, token: TokenDep) -> ToolInfo:
    return platform.create_tool(token, req)


@router.post("/courses", response_model=CourseInfo, status_code=status.HTTP_201_CREATED)
def create_course(req: CreateCourseRequest, platform: PlatformDep, token: TokenDep) -> CourseInfo:
    return platform.create_course(token, req)


@router.post("/tests", response_model=TestInfo, status_code=status.HTTP_201_CREATED)
def create_test(req: CreateTestRequest, platform: PlatformDep, token: TokenDep) -> TestInfo:
    return platform.create_test(token, req)


@router.post("/announcements", response_model=AnnouncementInfo, status_code=status.HTTP_201_CREATED)
def create_announcement(
    req: CreateAnnouncementRequest, platform: PlatformDep, token: TokenDep
) -> AnnouncementInfo:
    return platform.create_announcement(token, req)


@router.post("/communities", response_model=CommunityInfo, status_code=status.HTTP_201_CREATED)
def create_community(
    req: CreateCommunityRequest, platform: PlatformDep, token: TokenDep
) -> CommunityInfo:
    return platform.create_community(token, req)


@router.post("/memberships", response_model=MembershipInfo, status_code=status.HTTP_201_CREATED)
def add_membership(
    req: CreateMembershipRequest, platform: PlatformDep, token: TokenDep
) -> MembershipInfo:
    return platform.add_membership(token, req)
