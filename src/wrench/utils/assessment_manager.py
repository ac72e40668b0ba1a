"""Assessment utilities.

This module handles test creation, answer scoring and the append-only
attempt history.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Sequence

import pytz
from sqlalchemy.orm import Session

from wrench.core.exceptions import (
    AnswerCountMismatchError,
    CourseNotFoundError,
    TestNotFoundError,
    ValidationError,
    WrongTenantError,
)
from wrench.models.test import TestModel
from wrench.models.test_attempt import TestAttemptModel
from wrench.schemas.assessment import (
    AttemptInfo,
    CreateTestRequest,
    SubmitTestRequest,
    TestInfo,
    TestQuestion,
)
from wrench.schemas.user import User
from wrench.utils.community_manager import CommunityManager
from wrench.utils.course_manager import CourseManager

logger = logging.getLogger(__name__)

MIN_OPTIONS = 2


def score_answers(questions: Sequence[TestQuestion], answers: Sequence[int]) -> float:
    """Percentage of answers that pick the correct option.

    A test without questions scores 0 rather than dividing by zero.

    Args:
        questions: Questions in order.
        answers: Selected option index per question, same order.

    Returns:
        Score between 0 and 100.
    """
    correct = sum(
        1
        for question, answer in zip(questions, answers)
        if answer == question.correct_option_index
    )
    return correct / max(len(questions), 1) * 100


def _validate_test(req: CreateTestRequest) -> None:
    if not 0 <= req.passing_score <= 100:
        raise ValidationError("passing score must be between 0 and 100")
    for position, question in enumerate(req.questions, start=1):
        if len(question.options) < MIN_OPTIONS:
            raise ValidationError(f"question {position} needs at least {MIN_OPTIONS} options")
        if not 0 <= question.correct_option_index < len(question.options):
            raise ValidationError(f"question {position} has no option at the correct index")


class AssessmentManager:
    """Manages tests and test attempts."""

    def __init__(self, db: Session):
        self.db = db

    def add_test(self, req: CreateTestRequest) -> TestInfo:
        """Create a test for a course of the same community.

        Raises:
            CommunityNotFoundError: If the community does not exist.
            CourseNotFoundError: If the course is not part of that community.
            ValidationError: If the passing score or a question is malformed.
        """
        community = CommunityManager(self.db).get_by_slug(req.community_slug)
        if CourseManager(self.db).get_course(req.course_id, community.community_id) is None:
            raise CourseNotFoundError(req.course_id)
        _validate_test(req)

        model = TestModel(
            test_id=str(uuid.uuid4()),
            community_id=community.community_id,
            course_id=req.course_id,
            title=req.title,
            passing_score=float(req.passing_score),
            questions=[question.model_dump() for question in req.questions],
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.flush()
        logger.info("Created test '%s' in community %s", model.title, community.slug)
        return TestInfo.model_validate(model)

    def submit_test(self, user: User, payload: SubmitTestRequest, community_id: str) -> AttemptInfo:
        """Score a submission and record it as a new attempt.

        Earlier attempts are never touched; every submission appends.

        Args:
            user: The submitting user.
            payload: Test id and selected option index per question.
            community_id: The community the user is acting in.

        Returns:
            The recorded attempt.

        Raises:
            TestNotFoundError: If the test does not exist.
            WrongTenantError: If the test belongs to another community.
            AnswerCountMismatchError: If answers and questions differ in number.
        """
        model = self.db.query(TestModel).filter(TestModel.test_id == payload.test_id).first()
        if model is None:
            raise TestNotFoundError(payload.test_id)
        if model.community_id != community_id:
            raise WrongTenantError()
        test = TestInfo.model_validate(model)
        if len(payload.selected_option_indexes) != len(test.questions):
            raise AnswerCountMismatchError(len(test.questions), len(payload.selected_option_indexes))

        score = score_answers(test.questions, payload.selected_option_indexes)
        attempt = TestAttemptModel(
            attempt_id=str(uuid.uuid4()),
            user_id=user.user_id,
            test_id=test.test_id,
            score=score,
            passed=score >= test.passing_score,
            submitted_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(attempt)
        self.db.flush()
        logger.info(
            "User %s submitted test %s: score=%.1f passed=%s",
            user.username,
            test.test_id,
            score,
            attempt.passed,
        )
        return AttemptInfo.model_validate(attempt)

    def tests_in(self, community_id: str) -> List[TestInfo]:
        models = (
            self.db.query(TestModel)
            .filter(TestModel.community_id == community_id)
            .order_by(TestModel.id)
            .all()
        )
        return [TestInfo.model_validate(m) for m in models]

    def list_tests(self) -> List[TestInfo]:
        models = self.db.query(TestModel).order_by(TestModel.id).all()
        return [TestInfo.model_validate(m) for m in models]

    def attempts_for(self, user: User, community_id: str) -> List[AttemptInfo]:
        """The user's attempts at tests of one community, newest first."""
        models = (
            self.db.query(TestAttemptModel)
            .join(TestModel, TestModel.test_id == TestAttemptModel.test_id)
            .filter(
                TestAttemptModel.user_id == user.user_id,
                TestModel.community_id == community_id,
            )
            .order_by(TestAttemptModel.submitted_at.desc(), TestAttemptModel.id.desc())
            .all()
        )
        return [AttemptInfo.model_validate(m) for m in models]
