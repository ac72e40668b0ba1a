import pytest

from wrench.core.exceptions import (
    AnswerCountMismatchError,
    CommunityNotFoundError,
    CourseNotFoundError,
    TestNotFoundError,
    ValidationError,
    WrongTenantError,
)
from wrench.schemas.assessment import CreateTestRequest, SubmitTestRequest, TestQuestion
from wrench.utils.assessment_manager import score_answers

from conftest import question


def submit(platform, token, test_id, answers, community_slug=None):
    return platform.submit_test(
        token, SubmitTestRequest(test_id=test_id, selected_option_indexes=answers), community_slug
    )


def test_half_correct_scores_fifty(platform, signup_learner, make_course, make_test) -> None:
    token = signup_learner("tech1").token
    test = make_test(make_course(), passing_score=100, questions=[question(0), question(1)])

    attempt = submit(platform, token, test.test_id, [0, 0])
    assert attempt.score == 50.0
    assert attempt.passed is False


def test_pass_threshold_is_inclusive(platform, signup_learner, make_course, make_test) -> None:
    token = signup_learner("tech1").token
    test = make_test(make_course(), passing_score=50, questions=[question(0), question(1)])
    assert submit(platform, token, test.test_id, [0, 2]).passed is True


def test_zero_question_test_scores_zero(platform, signup_learner, make_course, make_test) -> None:
    token = signup_learner("tech1").token
    test = make_test(make_course(), passing_score=0, questions=[])

    attempt = submit(platform, token, test.test_id, [])
    assert attempt.score == 0
    # zero meets a zero threshold
    assert attempt.passed is True


def test_score_answers() -> None:
    questions = [question(0), question(1), question(2), question(0)]
    assert score_answers(questions, [0, 1, 2, 0]) == 100.0
    assert score_answers(questions, [0, 1, 0, 1]) == 50.0
    assert score_answers(questions, [2, 2, 0, 1]) == 0.0
    assert score_answers([], []) == 0


def test_unknown_test(platform, signup_learner) -> None:
    token = signup_learner("tech1").token
    with pytest.raises(TestNotFoundError):
        submit(platform, token, "missing", [0])


def test_submission_outside_test_community(
    platform, signup_learner, make_community, join, make_course, make_test
) -> None:
    token = signup_learner("tech1").token
    make_community("hvac")
    join("hvac", "tech1")
    test = make_test(make_course())

    with pytest.raises(WrongTenantError):
        submit(platform, token, test.test_id, [0], community_slug="hvac")
    assert submit(platform, token, test.test_id, [0], community_slug="automotive").passed is True


def test_answer_count_must_match(platform, signup_learner, make_course, make_test) -> None:
    token = signup_learner("tech1").token
    test = make_test(make_course(), questions=[question(0), question(1)])

    with pytest.raises(AnswerCountMismatchError):
        submit(platform, token, test.test_id, [0])
    with pytest.raises(AnswerCountMismatchError):
        submit(platform, token, test.test_id, [0, 1, 2])


def test_attempts_are_appended(platform, signup_learner, make_course, make_test) -> None:
    token = signup_learner("tech1").token
    test = make_test(make_course())

    first = submit(platform, token, test.test_id, [1])
    second = submit(platform, token, test.test_id, [0])
    third = submit(platform, token, test.test_id, [1])

    attempts = platform.dashboard(token).attempts
    assert [a.attempt_id for a in attempts] == [third.attempt_id, second.attempt_id, first.attempt_id]
    assert [a.passed for a in attempts] == [False, True, False]


def test_failed_submission_records_nothing(platform, signup_learner, make_course, make_test) -> None:
    token = signup_learner("tech1").token
    test = make_test(make_course(), questions=[question(0), question(1)])
    with pytest.raises(AnswerCountMismatchError):
        submit(platform, token, test.test_id, [0])
    assert platform.dashboard(token).attempts == []


def test_add_test_requires_course_in_same_community(
    platform, admin_token, make_community, make_course
) -> None:
    make_community("hvac")
    auto_course = make_course(title="Auto")

    with pytest.raises(CourseNotFoundError):
        platform.create_test(
            admin_token,
            CreateTestRequest(
                community_slug="hvac",
                course_id=auto_course.course_id,
                title="Misplaced",
                passing_score=80,
                questions=[question(0)],
            ),
        )
    with pytest.raises(CommunityNotFoundError):
        platform.create_test(
            admin_token,
            CreateTestRequest(
                community_slug="marine",
                course_id=auto_course.course_id,
                title="Nowhere",
                passing_score=80,
            ),
        )
    assert platform.admin_overview(admin_token).tests == []


@pytest.mark.parametrize(
    "passing_score, questions",
    [
        (101, [question(0)]),
        (-1, [question(0)]),
        (80, [TestQuestion(prompt="Only one", options=["A"], correct_option_index=0)]),
        (80, [TestQuestion(prompt="Out of range", options=["A", "B"], correct_option_index=2)]),
        (80, [TestQuestion(prompt="Negative", options=["A", "B"], correct_option_index=-1)]),
    ],
)
def test_add_test_validates_questions(platform, admin_token, make_course, passing_score, questions) -> None:
    course = make_course()
    with pytest.raises(ValidationError):
        platform.create_test(
            admin_token,
            CreateTestRequest(
                community_slug="automotive",
                course_id=course.course_id,
                title="Broken",
                passing_score=passing_score,
                questions=questions,
            ),
        )


def test_list_tests_scoped_to_community(
    platform, signup_learner, make_community, join, make_course, make_test
) -> None:
    token = signup_learner("tech1").token
    make_community("hvac")
    join("hvac", "tech1")
    auto_test = make_test(make_course(title="Auto"))
    hvac_test = make_test(make_course(community_slug="hvac", title="HVAC"), community_slug="hvac")

    assert [t.test_id for t in platform.list_tests(token)] == [auto_test.test_id]
    assert [t.test_id for t in platform.list_tests(token, "hvac")] == [hvac_test.test_id]
