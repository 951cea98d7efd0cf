"""
System Routes — Liveness and echo endpoints.
"""
import time
from datetime import datetime

from fastapi import APIRouter, Depends

from treasury.config import Settings, get_settings
from treasury.schemas.schemas import HealthResponse, MessageResponse
from treasury.services.payment_store import PaymentStore, get_payment_store

router = APIRouter(prefix="/api", tags=["System"])

BOOT_TIME = time.time()


@router.get("/ping", response_model=MessageResponse)
def ping(settings: Settings = Depends(get_settings)):
    return MessageResponse(message=settings.PING_MESSAGE)


@router.get("/demo", response_model=MessageResponse)
def demo():
    return MessageResponse(message="Hello from the treasury server")


@router.get("/health", response_model=HealthResponse)
def health(store: PaymentStore = Depends(get_payment_store)):
    """Liveness plus which storage backend is serving."""
    return HealthResponse(
        status="ok",
        storage=getattr(store, "backend", type(store).__name__),
        uptime_seconds=round(time.time() - BOOT_TIME, 1),
        timestamp=datetime.now(),
    )
