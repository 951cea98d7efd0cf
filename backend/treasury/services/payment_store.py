"""
Payment Store — Append-only storage behind a small interface.

``InMemoryPaymentStore`` is the default and lives as long as the process.
``SqlPaymentStore`` persists through SQLAlchemy and enforces the
(transaction_id, flat_number, month) uniqueness rule in the database.
"""
import logging
from typing import List, Optional, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from treasury.config import get_settings
from treasury.errors import ConflictError
from treasury.models.payment import PaymentRow
from treasury.schemas.schemas import PaymentRecord

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "This transaction ID has already been submitted for this flat this month"


class PaymentStore(Protocol):
    """What ingestion and aggregation need from storage."""

    def append(self, record: PaymentRecord) -> None: ...

    def all(self) -> List[PaymentRecord]: ...


class InMemoryPaymentStore:
    """Plain list in insertion order. Not thread-safe."""

    backend = "memory"

    def __init__(self, records: Optional[List[PaymentRecord]] = None):
        self._records: List[PaymentRecord] = list(records or [])

    def append(self, record: PaymentRecord) -> None:
        self._records.append(record)

    def all(self) -> List[PaymentRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)


class SqlPaymentStore:
    """SQLAlchemy-backed store. One short session per operation."""

    backend = "sql"

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def append(self, record: PaymentRecord) -> None:
        row = PaymentRow(**record.model_dump(by_alias=False))
        with self._session_factory() as db:
            db.add(row)
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise ConflictError(DUPLICATE_MESSAGE) from exc

    def all(self) -> List[PaymentRecord]:
        with self._session_factory() as db:
            rows = db.query(PaymentRow).order_by(PaymentRow.seq.asc()).all()
            return [_to_record(row) for row in rows]

    def __len__(self) -> int:
        with self._session_factory() as db:
            return db.query(PaymentRow).count()


def _to_record(row: PaymentRow) -> PaymentRecord:
    return PaymentRecord(**{name: getattr(row, name) for name in PaymentRecord.model_fields})


_store: Optional[PaymentStore] = None


def build_store(backend: str) -> PaymentStore:
    """Instantiate the configured backend."""
    if backend == "memory":
        return InMemoryPaymentStore()
    if backend == "sql":
        from treasury.database import get_sessionmaker, init_db

        init_db()
        return SqlPaymentStore(get_sessionmaker())
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r} (expected 'memory' or 'sql')")


def get_payment_store() -> PaymentStore:
    """FastAPI dependency: the process-wide payment store."""
    global _store  # noqa: PLW0603
    if _store is None:
        backend = get_settings().STORAGE_BACKEND
        _store = build_store(backend)
        logger.info("Payment store initialised (backend=%s)", backend)
    return _store
