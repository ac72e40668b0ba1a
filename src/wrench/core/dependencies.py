"""Dependency injection module for FastAPI.

The platform is a process-wide singleton: its store only lives as long as the
process, so every request must see the same instance.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from wrench.core.platform import LearningPlatform

# Singleton for LearningPlatform (process-lifetime store)
_platform_instance: Optional[LearningPlatform] = None

# Missing credentials are reported by the platform, not by FastAPI
security = HTTPBearer(auto_error=False)


def get_platform() -> LearningPlatform:
    """Get the LearningPlatform singleton, seeding it on first use.

    Returns:
        LearningPlatform instance (singleton).
    """
    global _platform_instance
    if _platform_instance is None:
        _platform_instance = LearningPlatform()
        _platform_instance.seed_defaults()
    return _platform_instance


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Extract the bearer token from the Authorization header, if present."""
    if credentials is None:
        return None
    return credentials.credentials


def get_community_slug(x_community: Optional[str] = Header(default=None)) -> Optional[str]:
    """Active community requested through the ``X-Community`` header."""
    if x_community is None or not x_community.strip():
        return None
    return x_community.strip()


# Type aliases for dependency injection
PlatformDep = Annotated[LearningPlatform, Depends(get_platform)]
TokenDep = Annotated[Optional[str], Depends(get_bearer_token)]
CommunitySlugDep = Annotated[Optional[str], Depends(get_community_slug)]
