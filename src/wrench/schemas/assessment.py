"""Test, attempt and invite code schema definitions."""

import uuid
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class TestQuestion(BaseModel):
    __test__ = False

    question_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    prompt: str
    options: List[str]
    correct_option_index: int


class TestInfo(BaseModel):
    __test__ = False
    model_config = ConfigDict(from_attributes=True)

    test_id: str
    community_id: str
    course_id: str
    title: str
    passing_score: float
    questions: List[TestQuestion] = Field(default_factory=list)
    created_at: str


class CreateTestRequest(BaseModel):
    community_slug: str
    course_id: str
    title: str
    passing_score: float
    questions: List[TestQuestion] = Field(default_factory=list)


class SubmitTestRequest(BaseModel):
    test_id: str
    selected_option_indexes: List[int]


class AttemptInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    attempt_id: str
    user_id: str
    test_id: str
    score: float
    passed: bool
    submitted_at: str


class InviteCodeInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    invite_id: str
    code: str
    uses_remaining: int
    created_by: str
    created_at: str

    @property
    def is_active(self) -> bool:
        return self.uses_remaining > 0


class CreateInviteCodeRequest(BaseModel):
    uses: int = 1
