"""
Payment Routes — Resident payment-proof submission (no login required).
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from treasury.schemas.schemas import PaymentSubmission, PaymentSubmitResponse
from treasury.services.payment_service import PaymentService
from treasury.services.payment_store import PaymentStore, get_payment_store
from treasury.services.proof_storage import ProofStorage, get_proof_storage

router = APIRouter(prefix="/api/payments", tags=["Payments"])


def submission_form(
    flat_number: Optional[str] = Form(None, alias="flatNumber"),
    resident_name: Optional[str] = Form(None, alias="residentName"),
    resident_type: Optional[str] = Form(None, alias="residentType"),
    payment_purpose: Optional[str] = Form(None, alias="paymentPurpose"),
    amount_paid: Optional[str] = Form(None, alias="amountPaid"),
    transaction_id: Optional[str] = Form(None, alias="transactionId"),
    upi_id: Optional[str] = Form(None, alias="upiId"),
    bank_details: Optional[str] = Form(None, alias="bankDetails"),
    payment_date: Optional[str] = Form(None, alias="paymentDate"),
    notes: Optional[str] = Form(None),
) -> PaymentSubmission:
    """Collect the multipart form fields into a PaymentSubmission."""
    return PaymentSubmission(
        flat_number=flat_number,
        resident_name=resident_name,
        resident_type=resident_type,
        payment_purpose=payment_purpose,
        amount_paid=amount_paid,
        transaction_id=transaction_id,
        upi_id=upi_id,
        bank_details=bank_details,
        payment_date=payment_date,
        notes=notes,
    )


@router.post("/submit", response_model=PaymentSubmitResponse, status_code=201)
def submit_payment(
    submission: PaymentSubmission = Depends(submission_form),
    screenshot: Optional[UploadFile] = File(None),
    store: PaymentStore = Depends(get_payment_store),
    proofs: ProofStorage = Depends(get_proof_storage),
):
    """Submit a payment proof: form fields plus a `screenshot` file (JPEG, PNG or PDF, max 5MB)."""
    proof = proofs.read(screenshot)
    payment = PaymentService.submit(
        store, submission, proof, save_proof=proofs.save, discard_proof=proofs.discard,
    )
    return PaymentSubmitResponse(payment=payment)
