"""
Payment Row Model — SQL persistence for submitted payment proofs.
Used only when STORAGE_BACKEND=sql.
"""
from datetime import datetime
from sqlalchemy import Column, String, Integer, Float, DateTime, Text, UniqueConstraint

from treasury.database import Base


class PaymentRow(Base):
    __tablename__ = "payments"
    __table_args__ = (
        # One submission per transaction ID, per flat, per month
        UniqueConstraint("transaction_id", "flat_number", "month", name="uq_payment_txn_flat_month"),
    )

    seq = Column(Integer, primary_key=True, autoincrement=True)   # insertion order
    id = Column(String(32), nullable=False, index=True)          # payment-<epoch ms>, not unique

    flat_number = Column(String(16), nullable=False, index=True)
    resident_name = Column(String(128), nullable=False)
    resident_type = Column(String(8), nullable=False)   # owner | tenant
    payment_purpose = Column(String(64), nullable=False)
    amount_paid = Column(Float, nullable=False)

    transaction_id = Column(String(64), nullable=False)
    upi_id = Column(String(64), default="")
    bank_details = Column(String(256), default="")
    notes = Column(Text, default="")

    payment_date = Column(String(32), nullable=False)
    screenshot_url = Column(String(256), nullable=False)

    month = Column(String(7), nullable=False, index=True)   # YYYY-MM
    created_at = Column(DateTime, default=datetime.now)
