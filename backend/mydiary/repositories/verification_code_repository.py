"""Repository for pending email verification codes.

One row per email, keyed by the email itself. A second insert for the same
email is rejected by the primary key, which is what keeps the one-live-code
invariant safe under concurrent issuance.
"""

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mydiary.models.verification_code import VerificationCode


class VerificationCodeRepository:
    """Stateless repository for VerificationCode table operations.

    All methods are static; there is no instance state.
    """

    @staticmethod
    async def insert(db: AsyncSession, *, email: str, code_hash: str) -> bool:
        """Store a code hash for an email that has no live code.

        A rejected insert is an expected outcome, not an error: the session
        is rolled back (discarding any other pending work in it) and False
        is returned.

        Args:
            db: Async database session.
            email: Email the code was issued for.
            code_hash: Argon2id hash of the code.

        Returns:
            True if stored, False if a code already exists for the email.
        """
        stmt = insert(VerificationCode).values(email=email, code_hash=code_hash)
        try:
            await db.execute(stmt)
        except IntegrityError:
            await db.rollback()
            return False
        return True

    @staticmethod
    async def find(db: AsyncSession, email: str) -> str | None:
        """Look up the stored code hash for an email.

        Args:
            db: Async database session.
            email: Email address.

        Returns:
            The code hash, or None if no code is pending.
        """
        stmt = select(VerificationCode.code_hash).where(
            VerificationCode.email == email
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def exists(db: AsyncSession, email: str) -> bool:
        """Check whether an email has a pending code, without reading it."""
        return await VerificationCodeRepository.find(db, email) is not None

    @staticmethod
    async def delete(db: AsyncSession, email: str) -> None:
        """Delete the pending code for an email (no-op if none).

        Args:
            db: Async database session.
            email: Email address.
        """
        stmt = delete(VerificationCode).where(VerificationCode.email == email)
        await db.execute(stmt)

    @staticmethod
    async def take(db: AsyncSession, *, email: str, code_hash: str) -> bool:
        """Consume one specific stored code.

        Deletes the row only if it still holds ``code_hash``, so of two
        concurrent consumers exactly one sees True.

        Args:
            db: Async database session.
            email: Email address.
            code_hash: The hash previously returned by find().

        Returns:
            True if this call removed the code.
        """
        stmt = delete(VerificationCode).where(
            VerificationCode.email == email,
            VerificationCode.code_hash == code_hash,
        )
        result = await db.execute(stmt)
        row_count: int = result.rowcount  # type: ignore[attr-defined]
        return row_count > 0
