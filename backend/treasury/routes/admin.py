"""
Admin Routes — Treasurer login, collection dashboard, listings and CSV export.
Everything except login requires a bearer token.
"""
import re
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from treasury.config import Settings, get_settings
from treasury.dependencies import require_admin
from treasury.schemas.schemas import AdminLoginRequest, AdminLoginResponse, DashboardResponse, PaymentRecord
from treasury.services.auth_service import AuthService
from treasury.services.dashboard_service import DEFAULT_RECENT_LIMIT, DashboardService, resolve_month
from treasury.services.payment_store import PaymentStore, get_payment_store
from treasury.services.report_service import ReportService

router = APIRouter(prefix="/api/admin", tags=["Admin"])


def _parse_limit(raw: Optional[str]) -> int:
    """Leading digits of ``raw``; anything unusable falls back to the default."""
    match = re.match(r"\s*([0-9]+)", raw or "")
    limit = int(match.group(1)) if match else 0
    return limit if limit > 0 else DEFAULT_RECENT_LIMIT


@router.post("/login", response_model=AdminLoginResponse)
def admin_login(payload: Optional[AdminLoginRequest] = None, settings: Settings = Depends(get_settings)):
    """Exchange treasurer credentials for a 24-hour bearer token."""
    payload = payload or AdminLoginRequest()
    return AuthService.login(settings, payload.email, payload.password)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    month: Optional[str] = None,
    store: PaymentStore = Depends(get_payment_store),
    settings: Settings = Depends(get_settings),
    _admin: Dict = Depends(require_admin),
):
    """Collection summary for a month (YYYY-MM, defaults to the current month)."""
    return DashboardService.summary(
        store,
        resolve_month(month),
        total_flats=settings.TOTAL_FLATS,
        maintenance_per_flat=settings.MAINTENANCE_PER_FLAT,
    )


@router.get("/monthly-payments", response_model=List[PaymentRecord])
def get_monthly_payments(
    month: Optional[str] = None,
    store: PaymentStore = Depends(get_payment_store),
    _admin: Dict = Depends(require_admin),
):
    """Payments for a month, newest first."""
    return DashboardService.monthly(store, resolve_month(month))


@router.get("/recent-payments", response_model=List[PaymentRecord])
def get_recent_payments(
    limit: Optional[str] = None,
    store: PaymentStore = Depends(get_payment_store),
    _admin: Dict = Depends(require_admin),
):
    """Most recent payments across all months."""
    return DashboardService.recent(store, _parse_limit(limit))


@router.get("/export-report")
def export_report(
    month: Optional[str] = None,
    store: PaymentStore = Depends(get_payment_store),
    _admin: Dict = Depends(require_admin),
):
    """CSV download for one month, or for every payment when no month is given."""
    if month:
        payments = DashboardService.monthly(store, resolve_month(month))
    else:
        payments = DashboardService.all(store)

    return Response(
        content=ReportService.render_csv(payments),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{ReportService.filename(month)}"'},
    )
