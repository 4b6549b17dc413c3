"""User-facing feedback messages and their session categories.

Each message shown after a redirect belongs to exactly one category; the
category decides which session key carries it to the next view.
"""

from enum import Enum


class MessageCategory(str, Enum):
    """Session bucket a feedback message is stored under."""

    VALIDATION = "validation"
    LOGIN = "login"
    REGISTRATION = "registration"
    VERIFICATION = "verification"

    @property
    def session_key(self) -> str:
        """Session key holding the pending message for this category."""
        return f"{self.value}_message"


USER_NOT_LOGGED_IN = "Please log in to use the application."

# Validation (login & registration)
HAS_EMPTY_FIELDS = "Please fill in all fields."
INVALID_USERNAME_FORMAT = (
    "Username must be between 4 and 8 characters long and can only include "
    "uppercase and lowercase letters, and digits."
)
INVALID_PASSWORD_FORMAT = (  # nosec B105
    "Password must be between 4 and 8 characters long, and must include at "
    "least one uppercase letter, one lowercase letter, one digit, and one "
    "special character from this set: !@#$%^&*."
)
INVALID_EMAIL_FORMAT = "Email format invalid."

# Login
FAILED_AUTHENTICATION = "Incorrect username or password. New user?"
DELETED_ACCOUNT = (
    "This account has been deactivated. If you think this is a mistake, "
    "please contact support."
)
ACCOUNT_ACTIVATED = "Account activated! Please log in."

# Registration
UNAVAILABLE_USERNAME_OR_EMAIL = "Username or email already taken."

# Verification
CODE_SENT = (
    "A verification code was sent to your registered email. "
    "Please enter code below to verify your account."
)
CODE_PENDING = (
    "Your account is not yet verified. Check your registered email for "
    "verification code. Please enter code below to verify your account."
)
INVALID_VERIFICATION_CODE = "Invalid Verification Code - Try again or send new code."
NEW_VERIFICATION_CODE_SENT = "Verification code sent to email."
ERROR_SENDING_VERIFICATION_CODE = "Error sending verification code. Please try again."
ERROR_SENDING_NEW_VERIFICATION_CODE = (
    "Error sending new verification code. Please try again."
)

# Logout / deletion (carried as a query parameter, not a session message)
LOGOUT_SUCCESSFUL = "Successful logout."
ACCOUNT_DELETION_SUCCESSFUL = "Account deletion successful."

# Only these may be echoed back from the logout_message query parameter
LOGIN_VIEW_PARAM_MESSAGES: frozenset[str] = frozenset(
    {LOGOUT_SUCCESSFUL, USER_NOT_LOGGED_IN, ACCOUNT_DELETION_SUCCESSFUL}
)
