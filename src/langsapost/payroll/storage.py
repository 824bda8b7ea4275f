from __future__ import annotations

import logging
import os
import secrets
import tempfile
from pathlib import Path
from typing import Protocol

from ..core.exceptions import NotFoundError, ValidationError
from .model import Period

logger = logging.getLogger(__name__)


def payslip_filename(author_id: int, period: Period) -> str:
    """Unique artifact name; the random token keeps concurrent writers apart."""
    return f"payroll_{int(author_id)}_{period.year}_{period.month}_{secrets.token_hex(8)}.pdf"


class DocumentStorage(Protocol):
    def save(self, filename: str, data: bytes) -> str:
        raise NotImplementedError

    def load(self, ref: str) -> bytes:
        raise NotImplementedError

    def delete(self, ref: str) -> None:
        raise NotImplementedError


class LocalDocumentStorage(DocumentStorage):
    """Payslip artifacts on the local filesystem.

    ``save`` writes to a temporary file in the target directory, fsyncs it and
    renames it into place, so a returned ref always points at a complete file.
    Refs are bare filenames relative to ``root``.
    """

    def __init__(self, root: str | Path):
        self._root = Path(root)

    def _path_for(self, ref: str) -> Path:
        name = Path(str(ref or "")).name
        if not name or name != ref:
            raise ValidationError("Invalid document reference")
        return self._root / name

    def save(self, filename: str, data: bytes) -> str:
        target = self._path_for(filename)
        self._root.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=".tmp_", suffix=".pdf", dir=self._root)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, target)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Stored document %s (%d bytes)", target.name, len(data))
        return target.name

    def load(self, ref: str) -> bytes:
        path = self._path_for(ref)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise NotFoundError("Payslip document not found")

    def delete(self, ref: str) -> None:
        self._path_for(ref).unlink(missing_ok=True)
