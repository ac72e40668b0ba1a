"""Custom exception classes for the WRENCH platform.

Every fallible platform operation raises one of the subclasses below. The set
is closed: callers can map ``kind`` to a response without inspecting messages.
"""


class WrenchError(Exception):
    """Base exception for all WRENCH platform errors."""

    kind = "error"
    status_code = 400

    def __init__(self, message: str = ""):
        """Initialize the exception.

        Args:
            message: Human readable description of the failure.
        """
        self.message = message or self.kind.replace("_", " ")
        super().__init__(self.message)


class DuplicateUsernameError(WrenchError):
    """Raised when a username is already taken (case-insensitive)."""

    kind = "duplicate_username"
    status_code = 409

    def __init__(self, username: str):
        self.username = username
        super().__init__("Username already exists.")


class DuplicateEmailError(WrenchError):
    """Raised when an email address is already registered (case-insensitive)."""

    kind = "duplicate_email"
    status_code = 409

    def __init__(self, email: str):
        self.email = email
        super().__init__("Email already exists.")


class InvalidInviteCodeError(WrenchError):
    """Raised when admin signup lacks an active invite code."""

    kind = "invalid_invite_code"


class CommunityNotFoundError(WrenchError):
    """Raised when a community slug does not resolve."""

    kind = "community_not_found"
    status_code = 404

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Community '{slug}' not found")


class CourseNotFoundError(WrenchError):
    """Raised when a course does not exist in the requested community."""

    kind = "course_not_found"
    status_code = 404

    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__(f"Course '{course_id}' not found")


class TestNotFoundError(WrenchError):
    """Raised when a submitted test does not exist."""

    __test__ = False
    kind = "test_not_found"
    status_code = 404

    def __init__(self, test_id: str):
        self.test_id = test_id
        super().__init__(f"Test '{test_id}' not found")


class WrongTenantError(WrenchError):
    """Raised when a test is submitted outside its own community."""

    kind = "wrong_tenant"

    def __init__(self):
        super().__init__("Test is not in the active community")


class AnswerCountMismatchError(WrenchError):
    """Raised when the number of answers differs from the number of questions."""

    kind = "answer_count_mismatch"

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Answer count does not match question count (expected {expected}, got {received})"
        )


class MembershipAlreadyExistsError(WrenchError):
    """Raised when a user already belongs to a community."""

    kind = "membership_already_exists"
    status_code = 409

    def __init__(self, slug: str, username: str):
        self.slug = slug
        self.username = username
        super().__init__(f"User '{username}' already belongs to community '{slug}'")


class SlugAlreadyExistsError(WrenchError):
    """Raised when a community slug is already in use (case-insensitive)."""

    kind = "slug_already_exists"
    status_code = 409

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Community slug '{slug}' already exists")


class UserNotFoundError(WrenchError):
    """Raised when a user cannot be found."""

    kind = "user_not_found"
    status_code = 404

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User '{username}' not found")


class InvalidCredentialsError(WrenchError):
    """Raised when login fails. Unknown user and wrong password look the same."""

    kind = "invalid_credentials"
    status_code = 401

    def __init__(self):
        super().__init__("Invalid username or password")


class UnauthenticatedError(WrenchError):
    """Raised when a bearer token is missing or does not match any user."""

    kind = "unauthenticated"
    status_code = 401


class ForbiddenError(WrenchError):
    """Raised when the caller lacks the role or membership an operation needs."""

    kind = "forbidden"
    status_code = 403


class ValidationError(WrenchError):
    """Raised when request data fails validation."""

    kind = "validation_error"
