"""
Dashboard Service — Monthly collection summary and payment listings.
Everything is recomputed from the store on each call.
"""
from typing import List, Optional

from treasury.errors import ValidationError
from treasury.schemas.schemas import DashboardResponse, PaymentRecord
from treasury.services.payment_store import PaymentStore
from treasury.utils.validators import month_key, validate_month

DEFAULT_RECENT_LIMIT = 10


def resolve_month(month: Optional[str]) -> str:
    """Default to the current month and reject anything that is not YYYY-MM."""
    if not month:
        return month_key()
    if not validate_month(month):
        raise ValidationError("Invalid month format")
    return month


def _newest_first(records: List[PaymentRecord]) -> List[PaymentRecord]:
    return sorted(records, key=lambda p: p.created_at, reverse=True)


class DashboardService:
    """Aggregations over the payment store."""

    @staticmethod
    def summary(
        store: PaymentStore,
        month: str,
        total_flats: int = 40,
        maintenance_per_flat: float = 5000,
    ) -> DashboardResponse:
        """Totals for one month.

        ``flats_not_paid`` is ``total_flats - flats_paid`` and goes negative
        if more distinct flats pay than ``total_flats``.
        """
        month_payments = [p for p in store.all() if p.month == month]

        total_collected = sum(p.amount_paid for p in month_payments)
        flats_paid = len({p.flat_number for p in month_payments})
        flats_not_paid = total_flats - flats_paid

        return DashboardResponse(
            total_collected=total_collected,
            total_pending=flats_not_paid * maintenance_per_flat,
            flats_paid=flats_paid,
            flats_not_paid=flats_not_paid,
            month=month,
        )

    @staticmethod
    def monthly(store: PaymentStore, month: str) -> List[PaymentRecord]:
        return _newest_first([p for p in store.all() if p.month == month])

    @staticmethod
    def recent(store: PaymentStore, limit: int = DEFAULT_RECENT_LIMIT) -> List[PaymentRecord]:
        return _newest_first(store.all())[:limit]

    @staticmethod
    def all(store: PaymentStore) -> List[PaymentRecord]:
        return store.all()
