"""Registration workflow.

Validates the form, hashes the password, and inserts an unverified account.
Duplicate usernames and emails are caught by the unique constraints on
insert, so two concurrent registrations for the same identity cannot both
succeed.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mydiary.core.credentials import (
    CredentialCheck,
    sanitize_input,
    validate_registration_input,
)
from mydiary.core.passwords import hash_secret
from mydiary.repositories.account_repository import AccountRepository
from mydiary.services.outcomes import FormOrigin, OutcomeKind, WorkflowOutcome

logger = logging.getLogger(__name__)


async def register(
    db: AsyncSession,
    username: str | None,
    password: str | None,
    email: str | None,
) -> WorkflowOutcome:
    """Create a new unverified account.

    Invalid input stops before any database access. On success the account
    is committed with is_active=False and is_deleted=False.

    Args:
        db: Async database session.
        username: Raw username from the registration form.
        password: Raw password from the registration form.
        email: Raw email from the registration form.

    Returns:
        INPUT_INVALID, REGISTRATION_CONFLICT, or REGISTERED (detail: the
        normalized email, used to issue the first verification code).
    """
    check = validate_registration_input(username, password, email)
    if check is not CredentialCheck.OK:
        return WorkflowOutcome.input_invalid(check, FormOrigin.REGISTRATION)

    clean_username = sanitize_input(username)
    clean_email = sanitize_input(email).lower()
    password_hash = hash_secret(sanitize_input(password))

    try:
        await AccountRepository.create(
            db,
            username=clean_username,
            email=clean_email,
            password_hash=password_hash,
        )
    except IntegrityError:
        await db.rollback()
        logger.info("Registration rejected: username or email already taken")
        return WorkflowOutcome.of(OutcomeKind.REGISTRATION_CONFLICT)

    await db.commit()
    logger.info("Account registered")
    return WorkflowOutcome.of(OutcomeKind.REGISTERED, clean_email)
