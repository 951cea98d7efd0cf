"""
Report Service — CSV export of payment records.
"""
import csv
import io
from datetime import date
from typing import Iterable

from treasury.schemas.schemas import PaymentRecord

HEADERS = [
    "Flat No",
    "Name",
    "Amount Paid",
    "Transaction ID",
    "Paid Status",
    "Payment Date",
    "Purpose",
    "Resident Type",
    "Notes",
]


def _format_amount(amount: float) -> str:
    # 5000.0 -> "5000", 2500.5 -> "2500.5"
    return f"₹{int(amount)}" if amount == int(amount) else f"₹{amount}"


def _format_date(raw: str) -> str:
    """M/D/YYYY for ISO dates, anything else verbatim."""
    try:
        parsed = date.fromisoformat(raw[:10])
    except ValueError:
        return raw
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


class ReportService:

    @staticmethod
    def to_row(payment: PaymentRecord) -> list[str]:
        return [
            payment.flat_number,
            payment.resident_name,
            _format_amount(payment.amount_paid),
            payment.transaction_id,
            "Paid",
            _format_date(payment.payment_date),
            payment.payment_purpose,
            payment.resident_type,
            payment.notes or "-",
        ]

    @staticmethod
    def render_csv(payments: Iterable[PaymentRecord]) -> str:
        """Header plus one row per payment; every cell quoted, quotes doubled."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(HEADERS)
        writer.writerows(ReportService.to_row(p) for p in payments)
        return buffer.getvalue().rstrip("\n")

    @staticmethod
    def filename(month: str | None) -> str:
        return f"payments-{month or 'all'}.csv"
