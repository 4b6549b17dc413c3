"""Shared dependencies for the entry points.

WHY DEPENDENCY INJECTION:
- The session, database and mail sender arrive as explicit parameters
- Easy to swap implementations (Resend -> logging sender)
- Testable with overridden dependencies
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mydiary.core.database import get_db
from mydiary.core.email import MailSender, get_mail_sender
from mydiary.core.errors import LoginRequiredError
from mydiary.core.session import SessionHandle, get_session
from mydiary.repositories.account_repository import AccountRepository

DbSession = Annotated[AsyncSession, Depends(get_db)]
Session = Annotated[SessionHandle, Depends(get_session)]
Mailer = Annotated[MailSender, Depends(get_mail_sender)]


async def require_login(session: Session, db: DbSession) -> str:
    """Login guard for everything under /user.

    The signed cookie alone is not trusted. The account behind it is loaded
    and must be undeleted and on the session generation recorded at login.
    Logout and deletion bump the generation, so a cookie copied before
    either is refused.

    Args:
        session: Current session (injected).
        db: Database session (injected).

    Returns:
        Username of the logged-in account.

    Raises:
        LoginRequiredError: If the session carries no logged-in marker or
            has been revoked.
    """
    username = session.username
    if not session.is_logged_in or not username:
        raise LoginRequiredError()

    account = await AccountRepository.get_by_username(db, username)
    if (
        account is None
        or account.is_deleted
        or account.session_generation != session.session_generation
    ):
        session.clear()
        raise LoginRequiredError()
    return username


CurrentUsername = Annotated[str, Depends(require_login)]
