from __future__ import annotations

from pathlib import Path

import pytest

from conftest import at, fake_saver, make_proof, make_submission
from treasury.errors import ConflictError, ValidationError
from treasury.services.dashboard_service import DashboardService
from treasury.services.payment_service import PaymentService
from treasury.services.payment_store import DUPLICATE_MESSAGE, InMemoryPaymentStore
from treasury.services.proof_storage import ProofStorage


def test_june_submission_shows_on_june_dashboard(store: InMemoryPaymentStore) -> None:
    urls: list[str] = []
    record = PaymentService.submit(
        store, make_submission(), make_proof(), fake_saver(urls), now=at(2024, 6, 15)
    )

    assert record.month == "2024-06"
    assert record.amount_paid == 5000
    assert record.id == f"payment-{int(at(2024, 6, 15).timestamp() * 1000)}"
    assert record.screenshot_url == "/uploads/proof.png"
    assert record.upi_id == "" and record.notes == ""
    assert urls == ["/uploads/proof.png"]

    summary = DashboardService.summary(store, "2024-06")
    assert summary.total_collected == 5000
    assert summary.flats_paid == 1
    assert summary.flats_not_paid == 39
    assert summary.total_pending == 195000


def test_duplicate_in_same_month_is_rejected(store: InMemoryPaymentStore) -> None:
    PaymentService.submit(store, make_submission(), make_proof(), fake_saver([]), now=at(2024, 6, 1))

    with pytest.raises(ConflictError) as exc:
        PaymentService.submit(store, make_submission(), make_proof(), fake_saver([]), now=at(2024, 6, 20))

    assert "already been submitted for this flat this month" in exc.value.message
    assert exc.value.status_code == 400
    assert len(store) == 1


def test_same_transaction_allowed_for_other_flat_or_month(store: InMemoryPaymentStore) -> None:
    PaymentService.submit(store, make_submission(), make_proof(), fake_saver([]), now=at(2024, 6, 1))
    PaymentService.submit(store, make_submission(flat_number="102"), make_proof(), fake_saver([]), now=at(2024, 6, 2))
    PaymentService.submit(store, make_submission(), make_proof(), fake_saver([]), now=at(2024, 7, 1))

    assert len(store) == 3


@pytest.mark.parametrize("amount", ["0", "-100", "abc", "nan", "inf"])
def test_non_positive_or_unparseable_amount_is_rejected(store: InMemoryPaymentStore, amount: str) -> None:
    urls: list[str] = []
    with pytest.raises(ValidationError, match="Amount must be greater than 0"):
        PaymentService.submit(store, make_submission(amount_paid=amount), make_proof(), fake_saver(urls))

    assert len(store) == 0
    assert urls == []


@pytest.mark.parametrize(
    "missing",
    ["flat_number", "resident_name", "resident_type", "payment_purpose", "amount_paid", "transaction_id", "payment_date"],
)
def test_missing_required_field(store: InMemoryPaymentStore, missing: str) -> None:
    with pytest.raises(ValidationError, match="Missing required fields"):
        PaymentService.submit(store, make_submission(**{missing: None}), make_proof(), fake_saver([]))
    assert len(store) == 0


def test_missing_fields_reported_before_missing_screenshot(store: InMemoryPaymentStore) -> None:
    with pytest.raises(ValidationError, match="Missing required fields"):
        PaymentService.submit(store, make_submission(flat_number=""), None, fake_saver([]))


def test_screenshot_is_required(store: InMemoryPaymentStore) -> None:
    with pytest.raises(ValidationError, match="Screenshot is required"):
        PaymentService.submit(store, make_submission(), None, fake_saver([]))
    assert len(store) == 0


def test_resident_type_must_be_owner_or_tenant(store: InMemoryPaymentStore) -> None:
    with pytest.raises(ValidationError, match="owner or tenant"):
        PaymentService.submit(store, make_submission(resident_type="landlord"), make_proof(), fake_saver([]))


def test_month_comes_from_submission_time_not_payment_date(store: InMemoryPaymentStore) -> None:
    record = PaymentService.submit(
        store, make_submission(payment_date="2024-03-28"), make_proof(), fake_saver([]), now=at(2024, 5, 2)
    )
    assert record.month == "2024-05"
    assert record.payment_date == "2024-03-28"


def test_optional_fields_are_kept(store: InMemoryPaymentStore) -> None:
    record = PaymentService.submit(
        store,
        make_submission(upi_id="a@upi", bank_details="HDFC", notes="June dues", amount_paid="2500.50"),
        make_proof(),
        fake_saver([]),
    )
    assert record.upi_id == "a@upi"
    assert record.bank_details == "HDFC"
    assert record.notes == "June dues"
    assert record.amount_paid == pytest.approx(2500.5)


class ConflictingStore(InMemoryPaymentStore):
    """Rejects every append, like the SQL unique constraint losing a race."""

    def append(self, record):
        raise ConflictError(DUPLICATE_MESSAGE)


def test_proof_file_removed_when_store_rejects_record(proofs: ProofStorage) -> None:
    store = ConflictingStore()

    with pytest.raises(ConflictError, match="already been submitted"):
        PaymentService.submit(
            store, make_submission(), make_proof(),
            save_proof=proofs.save, discard_proof=proofs.discard,
        )

    upload_dir = Path(proofs.upload_dir)
    assert not upload_dir.exists() or list(upload_dir.iterdir()) == []
    assert len(store) == 0
