"""
Proof Storage — Screenshot/PDF uploads attached to payment submissions.

Files are checked on arrival (type, size) but only written to disk once the
submission has passed every ingestion rule.
"""
import logging
import os
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from fastapi import UploadFile

from treasury.config import get_settings
from treasury.errors import UploadError

logger = logging.getLogger(__name__)

FIELD_NAME = "screenshot"
PUBLIC_PREFIX = "/uploads"


@dataclass(frozen=True)
class ProofFile:
    filename: str
    content_type: str
    data: bytes


class ProofStorage:
    """Validates and stores proof files under a local directory."""

    def __init__(self, upload_dir: str, max_bytes: int, allowed_types: Iterable[str]):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.allowed_types = set(allowed_types)

    def read(self, upload: Optional[UploadFile]) -> Optional[ProofFile]:
        """Read an uploaded file into memory, enforcing type and size.

        Returns None when no file was sent (missing part or empty part).
        """
        if upload is None or not upload.filename:
            return None

        if upload.content_type not in self.allowed_types:
            raise UploadError("Invalid file type")

        # Read one byte past the limit so oversize uploads are detected without
        # buffering the whole thing.
        data = upload.file.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            raise UploadError("File too large")

        return ProofFile(filename=upload.filename, content_type=upload.content_type, data=data)

    def save(self, proof: ProofFile) -> str:
        """Write the file and return its public URL path."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        suffix = f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}"
        extension = os.path.splitext(proof.filename)[1]
        name = f"{FIELD_NAME}-{suffix}{extension}"
        (self.upload_dir / name).write_bytes(proof.data)
        logger.info("Stored proof %s (%d bytes, %s)", name, len(proof.data), proof.content_type)
        return f"{PUBLIC_PREFIX}/{name}"

    def discard(self, url: str) -> None:
        """Remove a file written by ``save`` (submission rejected after the write)."""
        path = self.upload_dir / url.rsplit("/", 1)[-1]
        path.unlink(missing_ok=True)
        logger.info("Discarded proof %s", path.name)


def get_proof_storage() -> ProofStorage:
    """FastAPI dependency: proof storage configured from settings."""
    settings = get_settings()
    return ProofStorage(
        upload_dir=settings.UPLOAD_DIR,
        max_bytes=settings.MAX_UPLOAD_BYTES,
        allowed_types=settings.ALLOWED_UPLOAD_TYPES,
    )
