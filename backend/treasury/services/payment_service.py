"""
Payment Service — Ingestion of resident payment proofs.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from treasury.errors import ConflictError, ValidationError
from treasury.schemas.schemas import PaymentRecord, PaymentSubmission
from treasury.services.payment_store import DUPLICATE_MESSAGE, PaymentStore
from treasury.services.proof_storage import ProofFile
from treasury.utils.validators import month_key, parse_amount, validate_resident_type

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "flat_number",
    "resident_name",
    "resident_type",
    "payment_purpose",
    "amount_paid",
    "transaction_id",
    "payment_date",
)


class PaymentService:
    """Validates a submission, rejects duplicates, and appends the record."""

    @staticmethod
    def submit(
        store: PaymentStore,
        submission: PaymentSubmission,
        proof: Optional[ProofFile],
        save_proof: Callable[[ProofFile], str],
        discard_proof: Optional[Callable[[str], None]] = None,
        now: Optional[datetime] = None,
    ) -> PaymentRecord:
        """Ingest one payment submission.

        Args:
            store: Payment store to check and append to.
            submission: Form fields as sent by the resident.
            proof: The uploaded screenshot/PDF, or None if absent.
            save_proof: Persists the proof and returns its URL path. Only
                called once every check has passed.
            discard_proof: Removes a saved proof when the store rejects the
                record after the write (SQL unique constraint).
            now: Submission time; defaults to the wall clock. The month
                bucket comes from this, not from ``payment_date``.

        Returns:
            The stored PaymentRecord.

        Raises:
            ValidationError: missing fields, missing proof, bad amount or resident type.
            ConflictError: same transaction ID already submitted for this flat this month.
        """
        if any(not getattr(submission, field) for field in REQUIRED_FIELDS):
            raise ValidationError("Missing required fields")

        if proof is None:
            raise ValidationError("Screenshot is required")

        amount = parse_amount(submission.amount_paid)
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be greater than 0")

        if not validate_resident_type(submission.resident_type):
            raise ValidationError("Resident type must be owner or tenant")

        now = now or datetime.now()
        month = month_key(now)

        # Check-then-append is not atomic for the in-memory store
        duplicate = next(
            (
                p for p in store.all()
                if p.transaction_id == submission.transaction_id
                and p.flat_number == submission.flat_number
                and p.month == month
            ),
            None,
        )
        if duplicate is not None:
            logger.info(
                "Duplicate submission rejected: txn=%s flat=%s month=%s",
                submission.transaction_id, submission.flat_number, month,
            )
            raise ConflictError(DUPLICATE_MESSAGE)

        record = PaymentRecord(
            id=f"payment-{int(now.timestamp() * 1000)}",
            flat_number=submission.flat_number,
            resident_name=submission.resident_name,
            resident_type=submission.resident_type,
            payment_purpose=submission.payment_purpose,
            amount_paid=amount,
            transaction_id=submission.transaction_id,
            upi_id=submission.upi_id or "",
            bank_details=submission.bank_details or "",
            payment_date=submission.payment_date,
            notes=submission.notes or "",
            screenshot_url=save_proof(proof),
            month=month,
            created_at=now,
        )
        try:
            store.append(record)
        except ConflictError:
            if discard_proof is not None:
                discard_proof(record.screenshot_url)
            raise

        logger.info(
            "Payment accepted: id=%s flat=%s amount=%.2f month=%s",
            record.id, record.flat_number, record.amount_paid, month,
        )
        return record
