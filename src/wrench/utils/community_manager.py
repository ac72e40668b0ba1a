"""Community (tenant) management utilities."""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session

from wrench.core.exceptions import (
    CommunityNotFoundError,
    MembershipAlreadyExistsError,
    SlugAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)
from wrench.models.community import CommunityModel
from wrench.models.community_membership import CommunityMembershipModel
from wrench.models.user import UserModel
from wrench.schemas.community import CommunityInfo, CreateCommunityRequest, MembershipInfo
from wrench.schemas.user import User, UserRole

logger = logging.getLogger(__name__)


class CommunityManager:
    """Manages communities, memberships and active-community resolution."""

    def __init__(self, db: Session):
        self.db = db

    def _get_model_by_slug(self, slug: str) -> Optional[CommunityModel]:
        return (
            self.db.query(CommunityModel)
            .filter(CommunityModel.slug == slug.lower())
            .first()
        )

    def find_by_slug(self, slug: str) -> Optional[CommunityInfo]:
        """Look up a community by slug, ignoring case."""
        model = self._get_model_by_slug(slug)
        if model:
            return CommunityInfo.model_validate(model)
        return None

    def get_by_slug(self, slug: str) -> CommunityInfo:
        """Like ``find_by_slug`` but raises CommunityNotFoundError."""
        community = self.find_by_slug(slug)
        if community is None:
            raise CommunityNotFoundError(slug)
        return community

    def create_community(self, req: CreateCommunityRequest) -> CommunityInfo:
        """Create a community.

        The slug is stored lowercase and is unique ignoring case.

        Raises:
            ValidationError: If the slug is empty.
            SlugAlreadyExistsError: If the slug is already in use.
        """
        slug = req.slug.strip().lower()
        if not slug:
            raise ValidationError("slug cannot be empty")
        if self._get_model_by_slug(slug) is not None:
            raise SlugAlreadyExistsError(slug)

        model = CommunityModel(
            community_id=str(uuid.uuid4()),
            slug=slug,
            name=req.name,
            description=req.description,
            branding=dict(req.branding),
            status=req.status.value,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.flush()
        logger.info("Created community: %s", slug)
        return CommunityInfo.model_validate(model)

    def add_membership(
        self, community_id: str, user_id: str, role: UserRole
    ) -> CommunityMembershipModel:
        """Add a membership row to the session without committing."""
        membership = CommunityMembershipModel(
            membership_id=str(uuid.uuid4()),
            community_id=community_id,
            user_id=user_id,
            role=UserRole(role).value,
            joined_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(membership)
        self.db.flush()
        return membership

    def add_member(self, community_slug: str, username: str, role: UserRole) -> MembershipInfo:
        """Grant a user membership in a community.

        Raises:
            CommunityNotFoundError: If the community does not exist.
            UserNotFoundError: If the user does not exist.
            MembershipAlreadyExistsError: If the user is already a member.
        """
        community = self._get_model_by_slug(community_slug)
        if community is None:
            raise CommunityNotFoundError(community_slug)
        user = (
            self.db.query(UserModel)
            .filter(UserModel.username_key == username.lower())
            .first()
        )
        if user is None:
            raise UserNotFoundError(username)

        existing = (
            self.db.query(CommunityMembershipModel)
            .filter(
                CommunityMembershipModel.community_id == community.community_id,
                CommunityMembershipModel.user_id == user.user_id,
            )
            .first()
        )
        if existing:
            raise MembershipAlreadyExistsError(community.slug, user.username)

        membership = self.add_membership(community.community_id, user.user_id, role)
        logger.info("Added %s to community %s as %s", user.username, community.slug, membership.role)
        return MembershipInfo.model_validate(membership)

    def _member_community_ids(self, user_id: str) -> List[str]:
        rows = (
            self.db.query(CommunityMembershipModel.community_id)
            .filter(CommunityMembershipModel.user_id == user_id)
            .all()
        )
        return [row.community_id for row in rows]

    def communities_for(self, user: User) -> List[CommunityInfo]:
        """All communities the user belongs to, in registry order."""
        community_ids = self._member_community_ids(user.user_id)
        if not community_ids:
            return []
        models = (
            self.db.query(CommunityModel)
            .filter(CommunityModel.community_id.in_(community_ids))
            .order_by(CommunityModel.id)
            .all()
        )
        return [CommunityInfo.model_validate(m) for m in models]

    def accessible_community(
        self, user: User, slug: Optional[str] = None
    ) -> Optional[CommunityInfo]:
        """Resolve the community a user is acting in.

        With a slug, that community is returned only if the user is a member
        of it. Without one, the first community (in registry order) the user
        belongs to is returned. ``None`` means no access, not an error.
        """
        communities = self.communities_for(user)
        if not communities:
            return None
        if slug is not None:
            key = slug.lower()
            for community in communities:
                if community.slug == key:
                    return community
            return None
        return communities[0]

    def list_communities(self) -> List[CommunityInfo]:
        models = self.db.query(CommunityModel).order_by(CommunityModel.id).all()
        return [CommunityInfo.model_validate(m) for m in models]

    def list_memberships(self) -> List[MembershipInfo]:
        models = (
            self.db.query(CommunityMembershipModel)
            .order_by(CommunityMembershipModel.id)
            .all()
        )
        return [MembershipInfo.model_validate(m) for m in models]
