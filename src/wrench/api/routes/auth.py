"""Authentication routes.

This module handles HTTP endpoints for platform bootstrap info, login and
signup. None of them require a bearer token.
"""

from fastapi import APIRouter, status

from wrench.core.dependencies import PlatformDep
from wrench.schemas.user import BootstrapInfo, LoginRequest, LoginResult, SignupRequest

router = APIRouter(prefix="/api", tags=["Auth"])


@router.get("/bootstrap", response_model=BootstrapInfo, summary="Platform info")
def bootstrap(platform: PlatformDep) -> BootstrapInfo:
    return platform.bootstrap_info()


@router.post("/auth/login", response_model=LoginResult, summary="Log in")
def login(req: LoginRequest, platform: PlatformDep) -> LoginResult:
    """Login with username and password.

    Every successful login issues a new token; the previous one stops working.
    """
    return platform.login(req.username, req.password)


@router.post(
    "/auth/signup",
    response_model=LoginResult,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
)
def signup(req: SignupRequest, platform: PlatformDep) -> LoginResult:
    """Register a new user.

    Registration requirements:
    - Admin: requires an active invite code
    - Learner: no code needed
    """
    return platform.signup(req)
