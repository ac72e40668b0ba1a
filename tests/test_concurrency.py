from concurrent.futures import ThreadPoolExecutor

from wrench.core.exceptions import InvalidInviteCodeError
from wrench.schemas.assessment import SubmitTestRequest
from wrench.schemas.user import SignupRequest, UserRole


def test_last_invite_use_goes_to_one_signup(platform, admin_token) -> None:
    invite = platform.create_invite_code(admin_token, 1)

    def attempt(n: int):
        try:
            return platform.signup(
                SignupRequest(
                    username=f"boss{n}",
                    password="secret",
                    email=f"boss{n}@example.com",
                    name="Boss",
                    role=UserRole.ADMIN,
                    admin_invite_code=invite.code,
                )
            )
        except InvalidInviteCodeError:
            return None

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(8)))

    assert sum(1 for r in results if r is not None) == 1
    codes = platform.admin_overview(admin_token).invite_codes
    assert codes[0].uses_remaining == 0


def test_concurrent_submissions_keep_every_attempt(
    platform, signup_learner, make_course, make_test
) -> None:
    token = signup_learner("tech1").token
    test = make_test(make_course())
    payload = SubmitTestRequest(test_id=test.test_id, selected_option_indexes=[0])

    with ThreadPoolExecutor(max_workers=8) as pool:
        attempts = list(pool.map(lambda _: platform.submit_test(token, payload), range(20)))

    assert len({a.attempt_id for a in attempts}) == 20
    assert len(platform.dashboard(token).attempts) == 20
