from __future__ import annotations

from conftest import at
from treasury.schemas.schemas import PaymentRecord
from treasury.services.report_service import HEADERS, ReportService


def _record(**overrides) -> PaymentRecord:
    fields = dict(
        id="payment-1",
        flat_number="101",
        resident_name="A",
        resident_type="owner",
        payment_purpose="maintenance",
        amount_paid=5000.0,
        transaction_id="TXN1",
        payment_date="2024-06-01",
        screenshot_url="/uploads/x.png",
        month="2024-06",
        created_at=at(2024, 6, 1),
    )
    fields.update(overrides)
    return PaymentRecord(**fields)


def test_header_only_for_no_payments() -> None:
    csv_text = ReportService.render_csv([])
    assert csv_text == ",".join(f'"{h}"' for h in HEADERS)


def test_row_values_are_quoted_and_formatted() -> None:
    lines = ReportService.render_csv([_record()]).split("\n")

    assert len(lines) == 2
    assert lines[1] == '"101","A","₹5000","TXN1","Paid","6/1/2024","maintenance","owner","-"'


def test_embedded_quotes_are_doubled() -> None:
    row = ReportService.render_csv([_record(resident_name='Ravi "RK" Kumar', notes="late, sorry")]).split("\n")[1]
    assert '"Ravi ""RK"" Kumar"' in row
    assert '"late, sorry"' in row


def test_fractional_amount_and_non_iso_date() -> None:
    row = ReportService.to_row(_record(amount_paid=2500.5, payment_date="last Tuesday"))
    assert row[2] == "₹2500.5"
    assert row[5] == "last Tuesday"


def test_filename() -> None:
    assert ReportService.filename("2024-06") == "payments-2024-06.csv"
    assert ReportService.filename(None) == "payments-all.csv"
