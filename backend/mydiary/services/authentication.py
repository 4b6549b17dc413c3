"""Login workflow.

Security considerations:
- Unknown username and wrong password collapse into one outcome
  (AUTHENTICATION_FAILED) so the response does not reveal which usernames
  exist. A dummy Argon2 verification keeps the timing comparable.
- Account state (deleted, unverified) is only disclosed after the password
  has been verified.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from mydiary.core.credentials import (
    CredentialCheck,
    sanitize_input,
    validate_login_input,
)
from mydiary.core.passwords import verify_against_dummy, verify_secret
from mydiary.repositories.account_repository import AccountRepository
from mydiary.services.outcomes import FormOrigin, OutcomeKind, WorkflowOutcome


async def authenticate(
    db: AsyncSession, username: str | None, password: str | None
) -> WorkflowOutcome:
    """Check login credentials and report the account's state.

    Read-only: issuing a verification code for an unverified account is the
    caller's reaction to ACCOUNT_UNVERIFIED, not a side effect of this call.

    Args:
        db: Async database session.
        username: Raw username from the login form.
        password: Raw password from the login form.

    Returns:
        INPUT_INVALID, AUTHENTICATION_FAILED, ACCOUNT_DELETED,
        ACCOUNT_UNVERIFIED (detail: email) or AUTHENTICATED (detail:
        username, with the account's current session generation).
    """
    check = validate_login_input(username, password)
    if check is not CredentialCheck.OK:
        return WorkflowOutcome.input_invalid(check, FormOrigin.LOGIN)

    clean_username = sanitize_input(username)
    clean_password = sanitize_input(password)

    account = await AccountRepository.get_by_username(db, clean_username)
    if account is None:
        verify_against_dummy(clean_password)
        return WorkflowOutcome.of(OutcomeKind.AUTHENTICATION_FAILED)

    if not verify_secret(clean_password, account.password_hash):
        return WorkflowOutcome.of(OutcomeKind.AUTHENTICATION_FAILED)

    if account.is_deleted:
        return WorkflowOutcome.of(OutcomeKind.ACCOUNT_DELETED)

    if account.is_unverified:
        return WorkflowOutcome.of(OutcomeKind.ACCOUNT_UNVERIFIED, account.email)

    return WorkflowOutcome.authenticated(
        account.username, account.session_generation
    )
