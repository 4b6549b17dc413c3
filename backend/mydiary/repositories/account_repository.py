"""Repository for Account CRUD operations.

Provides database access for the accounts table. Username and email
uniqueness is enforced by the table's unique constraints; callers detect a
conflict through IntegrityError rather than checking first.
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from mydiary.models.account import Account

# Fields that may be updated via AccountRepository.update().
# Security: Never add 'id', 'username', 'email', 'created_at', or 'updated_at'.
# - id: primary key, immutable
# - username/email: unique identity, fixed at registration
# - created_at/updated_at: server-managed timestamps
_UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "password_hash",
        "is_active",
        "is_deleted",
    }
)


class AccountRepository:
    """Stateless repository for Account table operations.

    All methods are static; there is no instance state. Pass an AsyncSession
    for every call so the caller controls transaction boundaries.
    """

    @staticmethod
    async def get_by_username(db: AsyncSession, username: str) -> Account | None:
        """Fetch an account by username (exact match).

        Deleted accounts are returned too; callers decide what a deleted
        account means for them.

        Args:
            db: Async database session.
            username: Sanitized username.

        Returns:
            Account if found, None otherwise.
        """
        stmt = select(Account).where(Account.username == username)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Account | None:
        """Fetch an account by email address (case-insensitive).

        Args:
            db: Async database session.
            email: Email address to look up.

        Returns:
            Account if found, None otherwise.
        """
        stmt = select(Account).where(Account.email == email.lower())
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        username: str,
        email: str,
        password_hash: str,
    ) -> Account:
        """Create a new, unverified account.

        Email is normalized to lowercase before storage. The account starts
        with is_active=False and is_deleted=False.

        Args:
            db: Async database session.
            username: Sanitized username.
            email: Sanitized email address.
            password_hash: Argon2id hash of the sanitized password.

        Returns:
            Created Account with database-generated fields populated.

        Raises:
            sqlalchemy.exc.IntegrityError: If username or email already exists.
        """
        account = Account(
            username=username,
            email=email.lower(),
            password_hash=password_hash,
            is_active=False,
            is_deleted=False,
        )
        db.add(account)
        await db.flush()
        await db.refresh(account)
        return account

    @staticmethod
    async def update(
        db: AsyncSession,
        account_id: int,
        **kwargs: str | bool,
    ) -> Account | None:
        """Update account fields.

        Only fields in _UPDATABLE_FIELDS are allowed. Unknown field names
        raise ValueError.

        Args:
            db: Async database session.
            account_id: Primary key of the account to update.
            **kwargs: Field names and values to update.

        Returns:
            Updated Account if found, None if the account does not exist.

        Raises:
            ValueError: If an unknown field name is passed.
            sqlalchemy.exc.IntegrityError: If the result would be both
                deleted and active.
        """
        unknown = set(kwargs) - _UPDATABLE_FIELDS
        if unknown:
            msg = f"Unknown fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        account = await db.get(Account, account_id)
        if account is None:
            return None

        for field, value in kwargs.items():
            setattr(account, field, value)

        await db.flush()
        await db.refresh(account)
        return account

    @staticmethod
    async def activate_by_email(db: AsyncSession, email: str) -> bool:
        """Flip is_active on an unverified, undeleted account.

        Single conditional UPDATE so concurrent activations cannot both
        report a state change.

        Args:
            db: Async database session.
            email: Email address of the account.

        Returns:
            True if a row changed, False if the account is missing, deleted,
            or already active.
        """
        stmt = (
            update(Account)
            .where(
                Account.email == email.lower(),
                Account.is_active.is_(False),
                Account.is_deleted.is_(False),
            )
            .values(is_active=True)
            .execution_options(synchronize_session="fetch")
        )
        result = await db.execute(stmt)
        row_count: int = result.rowcount  # type: ignore[attr-defined]
        return row_count > 0

    @staticmethod
    async def end_sessions(db: AsyncSession, account_id: int) -> None:
        """Invalidate every session cookie issued for the account so far.

        Increments session_generation in the database rather than in Python,
        so two concurrent calls both take effect.

        Args:
            db: Async database session.
            account_id: Primary key of the account.
        """
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(session_generation=Account.session_generation + 1)
            .execution_options(synchronize_session="fetch")
        )
        await db.execute(stmt)
