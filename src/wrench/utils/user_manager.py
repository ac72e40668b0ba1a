"""User management utilities.

This module provides identity functionality: password hashing, login with
bearer-token rotation, signup (including invite-gated administrator
enrollment) and token resolution.
"""

import base64
import hashlib
import logging
import secrets
import uuid
from datetime import datetime
from typing import List, Optional

import bcrypt
import pytz
from sqlalchemy.orm import Session

from wrench import config
from wrench.core.exceptions import (
    CommunityNotFoundError,
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidInviteCodeError,
)
from wrench.models.user import UserModel
from wrench.schemas.user import SignupRequest, SkillLevel, User, UserProfile, UserRole
from wrench.utils.community_manager import CommunityManager
from wrench.utils.invite_manager import InviteManager

logger = logging.getLogger(__name__)


def _bcrypt_input(password: str) -> bytes:
    """Digest a password so bcrypt sees all of it.

    bcrypt ignores everything past 72 bytes; a base64 SHA-256 digest is 44.
    """
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def normalize_key(value: str) -> str:
    """Return the case-insensitive uniqueness key for a username or email."""
    return value.lower()


def issue_token() -> str:
    """Return a fresh opaque bearer token."""
    return secrets.token_urlsafe(32)


class UserManager:
    """Manages users, credentials and bearer tokens using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        password_bytes = _bcrypt_input(password)
        salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        password_bytes = _bcrypt_input(plain_password)
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False

    def get_model_by_username(self, username: str) -> Optional[UserModel]:
        return (
            self.db.query(UserModel)
            .filter(UserModel.username_key == normalize_key(username))
            .first()
        )

    def email_exists(self, email: str) -> bool:
        return (
            self.db.query(UserModel.id)
            .filter(UserModel.email_key == normalize_key(email))
            .first()
            is not None
        )

    def has_admin(self) -> bool:
        """Return whether any administrator account exists."""
        return (
            self.db.query(UserModel.id)
            .filter(UserModel.role == UserRole.ADMIN.value)
            .first()
            is not None
        )

    def list_users(self) -> List[UserProfile]:
        """List all users in registration order, without credentials."""
        models = self.db.query(UserModel).order_by(UserModel.id).all()
        return [UserProfile.model_validate(m) for m in models]

    def resolve(self, token: Optional[str]) -> Optional[User]:
        """Return the user currently holding ``token``, if any.

        Tokens never expire on a timer; a token stops working only when the
        user logs in again and receives a new one.
        """
        if not token:
            return None
        model = self.db.query(UserModel).filter(UserModel.token == token).first()
        if model:
            return User.model_validate(model)
        return None

    def login(self, username: str, password: str) -> User:
        """Check credentials and rotate the user's bearer token.

        Args:
            username: Username, matched case-insensitively.
            password: Plain text password, matched exactly.

        Returns:
            The user carrying the newly issued token.

        Raises:
            InvalidCredentialsError: If the user is unknown or the password is
                wrong. Both cases are reported identically.
        """
        model = self.get_model_by_username(username)
        if model is None or not self.verify_password(password, model.password_hash):
            raise InvalidCredentialsError()

        model.token = issue_token()
        self.db.flush()
        logger.info("User logged in: %s", model.username)
        return User.model_validate(model)

    def create_user(
        self,
        username: str,
        password: str,
        email: str,
        name: str,
        role: UserRole,
        level: SkillLevel,
    ) -> UserModel:
        """Add a user row to the session without committing.

        Raises:
            DuplicateUsernameError: If the username is taken, ignoring case.
            DuplicateEmailError: If the email is taken, ignoring case.
        """
        if self.get_model_by_username(username) is not None:
            raise DuplicateUsernameError(username)
        if self.email_exists(email):
            raise DuplicateEmailError(email)

        model = UserModel(
            user_id=str(uuid.uuid4()),
            username=username,
            username_key=normalize_key(username),
            email=email,
            email_key=normalize_key(email),
            name=name,
            role=UserRole(role).value,
            level=int(level),
            token=issue_token(),
            password_hash=self.hash_password(password),
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.flush()
        return model

    def signup(self, req: SignupRequest) -> User:
        """Register a new user and enroll them in a community.

        Checks run in order: username, email, then (for administrators) the
        invite code, whose remaining uses drop by one. The user is then
        created and joined to the requested community, or to the default
        community when no slug is given. A community that cannot be found
        raises, and the enclosing transaction
        discards the whole signup, invite decrement included.

        Args:
            req: Signup request.

        Returns:
            The created user with a fresh token.

        Raises:
            DuplicateUsernameError: If the username is taken.
            DuplicateEmailError: If the email is taken.
            InvalidInviteCodeError: If an admin signup has no usable code.
            CommunityNotFoundError: If the target community does not exist.
        """
        if self.get_model_by_username(req.username) is not None:
            raise DuplicateUsernameError(req.username)
        if self.email_exists(req.email):
            raise DuplicateEmailError(req.email)

        if req.role == UserRole.ADMIN:
            code = (req.admin_invite_code or "").strip()
            if not code:
                raise InvalidInviteCodeError("Admin signup requires an invite code.")
            InviteManager(self.db).consume(code)

        model = self.create_user(
            username=req.username,
            password=req.password,
            email=req.email,
            name=req.name,
            role=req.role,
            level=req.level,
        )

        slug = (req.community_slug or "").strip() or config.DEFAULT_COMMUNITY_SLUG
        community_manager = CommunityManager(self.db)
        community = community_manager.find_by_slug(slug)
        if community is None:
            raise CommunityNotFoundError(slug)

        role = UserRole.ADMIN if req.role == UserRole.ADMIN else UserRole.LEARNER
        community_manager.add_membership(community.community_id, model.user_id, role)

        logger.info(
            "Created user: %s (role=%s, community=%s)",
            model.username,
            model.role,
            community.slug,
        )
        return User.model_validate(model)
