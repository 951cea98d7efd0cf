"""
Pydantic Schemas — Domain record plus request & response models for API validation.
JSON field names are camelCase to match the web client.
"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ──────────────── Payments ────────────────

class PaymentSubmission(CamelModel):
    """Raw submission form. Everything is optional here; the ingestion
    service decides what is missing so the error messages stay stable."""
    flat_number: Optional[str] = None
    resident_name: Optional[str] = None
    resident_type: Optional[str] = None
    payment_purpose: Optional[str] = None
    amount_paid: Optional[str] = None
    transaction_id: Optional[str] = None
    upi_id: Optional[str] = None
    bank_details: Optional[str] = None
    payment_date: Optional[str] = None
    notes: Optional[str] = None


class PaymentRecord(CamelModel):
    """A stored payment. Immutable once created."""
    id: str
    flat_number: str
    resident_name: str
    resident_type: Literal["owner", "tenant"]
    payment_purpose: str
    amount_paid: float = Field(..., gt=0)
    transaction_id: str
    upi_id: str = ""
    bank_details: str = ""
    payment_date: str
    notes: str = ""
    screenshot_url: str
    month: str                       # YYYY-MM of submission time
    created_at: datetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class PaymentSubmitResponse(BaseModel):
    message: str = "Payment submitted successfully"
    payment: PaymentRecord


# ──────────────── Dashboard ────────────────

class DashboardResponse(CamelModel):
    total_collected: float
    total_pending: float
    flats_paid: int
    flats_not_paid: int
    month: str


# ──────────────── Admin ────────────────

class AdminLoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AdminProfile(BaseModel):
    id: str
    email: str
    name: str


class AdminLoginResponse(BaseModel):
    token: str
    admin: AdminProfile


# ──────────────── Generic ────────────────

class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    storage: str
    uptime_seconds: float
    timestamp: datetime
