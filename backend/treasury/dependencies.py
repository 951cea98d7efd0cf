"""
Request Dependencies — Bearer-token gate for treasurer endpoints.
"""
from typing import Dict, Optional

from fastapi import Depends, Request

from treasury.config import Settings, get_settings
from treasury.services.auth_service import AuthService


def _extract_bearer(request: Request) -> Optional[str]:
    """Extract a Bearer token from the Authorization header."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def require_admin(request: Request, settings: Settings = Depends(get_settings)) -> Dict:
    """FastAPI dependency: verified token claims, or AuthError (401)."""
    return AuthService.verify_token(settings, _extract_bearer(request))
