from treasury.services.payment_store import InMemoryPaymentStore, SqlPaymentStore, get_payment_store
from treasury.services.proof_storage import ProofStorage, get_proof_storage
from treasury.services.payment_service import PaymentService
from treasury.services.dashboard_service import DashboardService
from treasury.services.report_service import ReportService
from treasury.services.auth_service import AuthService

__all__ = [
    "InMemoryPaymentStore", "SqlPaymentStore", "get_payment_store",
    "ProofStorage", "get_proof_storage",
    "PaymentService", "DashboardService", "ReportService", "AuthService",
]
