"""Email verification workflow: issue, resend, check and consume codes.

Pipeline:
- request_code: entry point logic, picks first issue, resend, or "already
  pending" depending on the store and the user's request
- issue_code: generate -> hash -> insert -> deliver; an undelivered code is
  removed again so no orphan stays behind
- resend_code: take the live code it read, then issue a fresh one
- validate_code: check a submitted code and, on match, consume it and
  activate the account

Codes are hashed with the same Argon2id scheme as passwords; the plaintext
only ever exists in memory and in the outgoing email.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mydiary.core.config import settings
from mydiary.core.credentials import sanitize_input
from mydiary.core.email import MailSender, verification_email_body
from mydiary.core.passwords import hash_secret, verify_secret
from mydiary.repositories.verification_code_repository import (
    VerificationCodeRepository,
)
from mydiary.services.account_lifecycle import activate_account
from mydiary.services.outcomes import OutcomeKind, WorkflowOutcome
from mydiary.services.verification_codes import generate_code

logger = logging.getLogger(__name__)


async def has_pending_code(db: AsyncSession, email: str) -> bool:
    """Check whether ``email`` already has a live code (never reveals it)."""
    return await VerificationCodeRepository.exists(db, email)


def _fresh_code(previous_hash: str | None) -> int:
    code = generate_code()
    while previous_hash is not None and verify_secret(str(code), previous_hash):
        code = generate_code()
    return code


async def issue_code(
    db: AsyncSession,
    mailer: MailSender,
    email: str,
    *,
    previous_hash: str | None = None,
) -> WorkflowOutcome:
    """Generate, store and email a new verification code.

    The store rejects the insert if the email already has a live code;
    callers that want to replace a code must take it first (see
    resend_code).

    Args:
        db: Async database session.
        mailer: Outbound mail collaborator.
        email: Address to verify.
        previous_hash: Hash of the code being replaced, if any. The new code
            is guaranteed to differ from it.

    Returns:
        CODE_SENT, or CODE_SEND_FAILED if the code could not be stored or
        delivered.
    """
    code = _fresh_code(previous_hash)
    code_hash = hash_secret(str(code))

    stored = await VerificationCodeRepository.insert(
        db, email=email, code_hash=code_hash
    )
    if not stored:
        logger.info("Verification code not issued: a code is already pending")
        return WorkflowOutcome.of(OutcomeKind.CODE_SEND_FAILED)
    await db.commit()

    delivered = await mailer.send(
        to_email=email,
        subject=settings.verification_email_subject,
        body=verification_email_body(code),
    )
    if not delivered:
        # Only remove the code this call stored
        await VerificationCodeRepository.take(db, email=email, code_hash=code_hash)
        await db.commit()
        logger.warning("Verification code delivery failed; stored code removed")
        return WorkflowOutcome.of(OutcomeKind.CODE_SEND_FAILED)

    logger.info("Verification code issued")
    return WorkflowOutcome.of(OutcomeKind.CODE_SENT)


async def resend_code(
    db: AsyncSession, mailer: MailSender, email: str
) -> WorkflowOutcome:
    """Replace the live code for ``email`` with a new one.

    Take-then-insert, never update in place. The old code is removed only
    if it is still the one read here, so of two concurrent resends exactly
    one replaces it and the other reports failure without sending mail.

    Returns:
        RESEND_SENT or RESEND_FAILED.
    """
    previous_hash = await VerificationCodeRepository.find(db, email)
    if previous_hash is not None and not await VerificationCodeRepository.take(
        db, email=email, code_hash=previous_hash
    ):
        logger.info("Verification code already replaced; resend skipped")
        return WorkflowOutcome.of(OutcomeKind.RESEND_FAILED)
    outcome = await issue_code(db, mailer, email, previous_hash=previous_hash)
    if outcome.kind is OutcomeKind.CODE_SENT:
        return WorkflowOutcome.of(OutcomeKind.RESEND_SENT)
    return WorkflowOutcome.of(OutcomeKind.RESEND_FAILED)


async def request_code(
    db: AsyncSession,
    mailer: MailSender,
    email: str | None,
    *,
    resend: bool = False,
) -> WorkflowOutcome:
    """Handle a request to the code-issuance entry point.

    Args:
        db: Async database session.
        mailer: Outbound mail collaborator.
        email: Email carried forward in the session (None if the session
            has none, e.g. it expired).
        resend: True when the user explicitly asked for a new code.

    Returns:
        CODE_SENT / CODE_SEND_FAILED for a first code, CODE_PENDING when a
        code is already outstanding and no resend was asked for, or
        RESEND_SENT / RESEND_FAILED for an explicit resend.
    """
    if not email:
        return WorkflowOutcome.of(OutcomeKind.CODE_SEND_FAILED)

    if await has_pending_code(db, email):
        if resend:
            return await resend_code(db, mailer, email)
        return WorkflowOutcome.of(OutcomeKind.CODE_PENDING)

    return await issue_code(db, mailer, email)


async def validate_code(
    db: AsyncSession, email: str | None, code: str | None
) -> WorkflowOutcome:
    """Check a submitted code and activate the account on match.

    A wrong code leaves the stored code untouched. A matching code is
    consumed atomically, so a second submission of the same code (or a
    concurrent duplicate) gets CODE_INVALID and does not re-activate. A
    matching code whose account is deleted or already active is consumed
    too, but reported as CODE_INVALID.

    Args:
        db: Async database session.
        email: Email carried forward in the session.
        code: Raw code from the verification form.

    Returns:
        CODE_VALID (detail: email) or CODE_INVALID.
    """
    clean_code = sanitize_input(code.strip()) if code else None
    if not email or not clean_code:
        return WorkflowOutcome.of(OutcomeKind.CODE_INVALID)

    stored_hash = await VerificationCodeRepository.find(db, email)
    if stored_hash is None:
        return WorkflowOutcome.of(OutcomeKind.CODE_INVALID)

    if not verify_secret(clean_code, stored_hash):
        return WorkflowOutcome.of(OutcomeKind.CODE_INVALID)

    if not await VerificationCodeRepository.take(
        db, email=email, code_hash=stored_hash
    ):
        return WorkflowOutcome.of(OutcomeKind.CODE_INVALID)

    activated = await activate_account(db, email)
    await db.commit()
    if not activated:
        logger.warning("Verification code consumed but no account was activated")
        return WorkflowOutcome.of(OutcomeKind.CODE_INVALID)
    return WorkflowOutcome.of(OutcomeKind.CODE_VALID, email)
