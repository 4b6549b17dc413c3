"""Account state transitions.

unverified --activate--> active --soft delete--> deleted
unverified --soft delete--> deleted

Activation never applies to a deleted account, and deletion always clears
the active flag, so the deleted-and-active state is unreachable (the table's
CHECK constraint rejects it as well).

Logout and deletion both bump the account's session generation, which
revokes every session cookie issued before.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mydiary.core.errors import InvalidStateError, NotFoundError
from mydiary.repositories.account_repository import AccountRepository

logger = logging.getLogger(__name__)


async def activate_account(db: AsyncSession, email: str) -> bool:
    """Mark the account registered with ``email`` as active.

    Args:
        db: Async database session.
        email: Verified email address.

    Returns:
        True if the account moved from unverified to active, False if it
        was already active, deleted, or does not exist.
    """
    activated = await AccountRepository.activate_by_email(db, email)
    if activated:
        logger.info("Account activated")
    return activated


async def log_out(db: AsyncSession, username: str) -> None:
    """Revoke every session of the account, including the current one.

    A copy of the session cookie kept from before the logout is refused by
    the login guard afterwards.

    Args:
        db: Async database session.
        username: Username of the logged-in account.
    """
    account = await AccountRepository.get_by_username(db, username)
    if account is None:
        return
    await AccountRepository.end_sessions(db, account.id)
    logger.info("Sessions of account %s ended", account.id)


async def soft_delete_account(db: AsyncSession, username: str) -> None:
    """Deactivate an account without removing its record.

    Sessions issued before the deletion are revoked as well.

    Args:
        db: Async database session.
        username: Username of the logged-in account.

    Raises:
        NotFoundError: If no account has this username.
        InvalidStateError: If the account is already deleted.
    """
    account = await AccountRepository.get_by_username(db, username)
    if account is None:
        raise NotFoundError("Account")
    if account.is_deleted:
        raise InvalidStateError("Account is already deleted")

    await AccountRepository.update(db, account.id, is_deleted=True, is_active=False)
    await AccountRepository.end_sessions(db, account.id)
    logger.info("Account %s soft-deleted", account.id)
