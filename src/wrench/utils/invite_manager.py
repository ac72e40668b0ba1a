"""Invite code management utilities.

Invite codes gate administrator signup. A code starts with at least one use
and is exhausted once its remaining uses reach zero; it never comes back.
"""

import logging
import uuid
from datetime import datetime
from typing import List

import pytz
from sqlalchemy.orm import Session

from wrench import config
from wrench.core.exceptions import InvalidInviteCodeError
from wrench.models.invite_code import InviteCodeModel
from wrench.schemas.assessment import InviteCodeInfo

logger = logging.getLogger(__name__)


class InviteManager:
    """Creates and consumes limited-use invite codes."""

    def __init__(self, db: Session):
        self.db = db

    def _generate_code(self) -> str:
        while True:
            code = f"{config.INVITE_CODE_PREFIX}-{uuid.uuid4().hex[:8].upper()}"
            exists = (
                self.db.query(InviteCodeModel.id)
                .filter(InviteCodeModel.code == code)
                .first()
            )
            if exists is None:
                return code

    def create(self, uses: int, created_by: str) -> InviteCodeInfo:
        """Create an invite code.

        Args:
            uses: Number of signups the code allows; values below 1 become 1.
            created_by: user_id of the creating administrator.

        Returns:
            The stored invite code.
        """
        model = InviteCodeModel(
            invite_id=str(uuid.uuid4()),
            code=self._generate_code(),
            uses_remaining=max(1, uses),
            created_by=created_by,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.flush()
        logger.info(
            "Generated invite code with %d use(s), created by: %s",
            model.uses_remaining,
            created_by,
        )
        return InviteCodeInfo.model_validate(model)

    def consume(self, code: str) -> InviteCodeInfo:
        """Use up one remaining use of an active code.

        The change is flushed; the enclosing transaction commits it together
        with the new user.

        Raises:
            InvalidInviteCodeError: If no active code matches exactly.
        """
        model = (
            self.db.query(InviteCodeModel)
            .filter(InviteCodeModel.code == code, InviteCodeModel.uses_remaining > 0)
            .first()
        )
        if model is None:
            raise InvalidInviteCodeError("Invalid or expired admin invite code.")
        model.uses_remaining -= 1
        self.db.flush()
        return InviteCodeInfo.model_validate(model)

    def list_invite_codes(self) -> List[InviteCodeInfo]:
        models = self.db.query(InviteCodeModel).order_by(InviteCodeModel.id).all()
        return [InviteCodeInfo.model_validate(m) for m in models]
