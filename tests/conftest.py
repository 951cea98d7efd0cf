from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
BACKEND = ROOT / "backend"
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))

from fastapi.testclient import TestClient  # noqa: E402

from treasury.config import Settings, get_settings  # noqa: E402
from treasury.schemas.schemas import PaymentSubmission  # noqa: E402
from treasury.services.payment_store import InMemoryPaymentStore, get_payment_store  # noqa: E402
from treasury.services.proof_storage import ProofFile, ProofStorage, get_proof_storage  # noqa: E402

ADMIN_EMAIL = "treasurer@example.com"
ADMIN_PASSWORD = "s3cret-pass"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        SECRET_KEY="test-signing-key-0123456789abcdef-xyz",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        LOG_DIR=str(tmp_path / "logs"),
    )


@pytest.fixture
def store() -> InMemoryPaymentStore:
    return InMemoryPaymentStore()


@pytest.fixture
def proofs(settings: Settings) -> ProofStorage:
    return ProofStorage(
        upload_dir=settings.UPLOAD_DIR,
        max_bytes=settings.MAX_UPLOAD_BYTES,
        allowed_types=settings.ALLOWED_UPLOAD_TYPES,
    )


@pytest.fixture
def client(settings: Settings, store: InMemoryPaymentStore, proofs: ProofStorage) -> Iterator[TestClient]:
    from treasury.main import app

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_payment_store] = lambda: store
    app.dependency_overrides[get_proof_storage] = lambda: proofs
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    resp = client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def make_submission(**overrides: Any) -> PaymentSubmission:
    fields: dict[str, Any] = {
        "flat_number": "101",
        "resident_name": "A",
        "resident_type": "owner",
        "payment_purpose": "maintenance",
        "amount_paid": "5000",
        "transaction_id": "TXN1",
        "payment_date": "2024-06-01",
    }
    fields.update(overrides)
    return PaymentSubmission(**fields)


def make_proof() -> ProofFile:
    return ProofFile(filename="proof.png", content_type="image/png", data=PNG_BYTES)


def fake_saver(urls: list[str]):
    """save_proof stand-in that records calls instead of touching disk."""

    def _save(proof: ProofFile) -> str:
        url = f"/uploads/{proof.filename}"
        urls.append(url)
        return url

    return _save


def at(year: int, month: int, day: int = 1, hour: int = 12, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute)
