from treasury.routes.admin import router as admin_router
from treasury.routes.payment import router as payment_router
from treasury.routes.system import router as system_router

__all__ = ["admin_router", "payment_router", "system_router"]
