"""Tests for VerificationCodeRepository.

The one-live-code-per-email rule is enforced by the primary key; take()
consumes a specific code exactly once.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mydiary.repositories.verification_code_repository import (
    VerificationCodeRepository,
)

_EMAIL = "a@b.com"


class TestInsert:
    """Test VerificationCodeRepository.insert()."""

    async def test_stores_code_hash(self, db_session: AsyncSession):
        assert await VerificationCodeRepository.insert(
            db_session, email=_EMAIL, code_hash="hash-1"
        )
        assert await VerificationCodeRepository.find(db_session, _EMAIL) == "hash-1"

    async def test_second_insert_for_same_email_fails(
        self, session_factory: async_sessionmaker[AsyncSession]
    ):
        async with session_factory() as first:
            await VerificationCodeRepository.insert(
                first, email=_EMAIL, code_hash="hash-1"
            )
            await first.commit()

        async with session_factory() as second:
            stored = await VerificationCodeRepository.insert(
                second, email=_EMAIL, code_hash="hash-2"
            )
            assert stored is False

        async with session_factory() as check:
            assert await VerificationCodeRepository.find(check, _EMAIL) == "hash-1"

    async def test_other_emails_are_independent(self, db_session: AsyncSession):
        await VerificationCodeRepository.insert(
            db_session, email=_EMAIL, code_hash="hash-1"
        )
        assert await VerificationCodeRepository.insert(
            db_session, email="c@d.com", code_hash="hash-2"
        )


class TestFindExistsDelete:
    """Test find(), exists() and delete()."""

    async def test_missing_code(self, db_session: AsyncSession):
        assert await VerificationCodeRepository.find(db_session, _EMAIL) is None
        assert await VerificationCodeRepository.exists(db_session, _EMAIL) is False

    async def test_exists_after_insert(self, db_session: AsyncSession):
        await VerificationCodeRepository.insert(
            db_session, email=_EMAIL, code_hash="hash-1"
        )
        assert await VerificationCodeRepository.exists(db_session, _EMAIL) is True

    async def test_delete_removes_code(self, db_session: AsyncSession):
        await VerificationCodeRepository.insert(
            db_session, email=_EMAIL, code_hash="hash-1"
        )
        await VerificationCodeRepository.delete(db_session, _EMAIL)
        assert await VerificationCodeRepository.exists(db_session, _EMAIL) is False

    async def test_delete_missing_is_noop(self, db_session: AsyncSession):
        await VerificationCodeRepository.delete(db_session, _EMAIL)


class TestTake:
    """Test VerificationCodeRepository.take()."""

    async def test_take_consumes_once(self, db_session: AsyncSession):
        await VerificationCodeRepository.insert(
            db_session, email=_EMAIL, code_hash="hash-1"
        )

        first = await VerificationCodeRepository.take(
            db_session, email=_EMAIL, code_hash="hash-1"
        )
        second = await VerificationCodeRepository.take(
            db_session, email=_EMAIL, code_hash="hash-1"
        )

        assert (first, second) == (True, False)
        assert await VerificationCodeRepository.exists(db_session, _EMAIL) is False

    async def test_take_ignores_other_hash(self, db_session: AsyncSession):
        """A replaced code cannot remove its replacement."""
        await VerificationCodeRepository.insert(
            db_session, email=_EMAIL, code_hash="hash-new"
        )

        taken = await VerificationCodeRepository.take(
            db_session, email=_EMAIL, code_hash="hash-old"
        )

        assert taken is False
        assert await VerificationCodeRepository.find(db_session, _EMAIL) == "hash-new"
