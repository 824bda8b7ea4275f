from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .repository import ActivityLogRepository

logger = logging.getLogger(__name__)


class ActivityLogService:
    """Audit trail of back-office actions (mutations and payslip downloads).

    Failures to write the trail are logged and never fail the request itself.
    """

    def __init__(self, logs: ActivityLogRepository):
        self._logs = logs

    def record(
        self,
        *,
        user_id: Optional[int],
        action: str,
        meta: Optional[dict[str, Any]] = None,
        ip_address: Optional[str] = None,
    ) -> None:
        meta_json = json.dumps(meta, default=str, sort_keys=True) if meta else None
        try:
            self._logs.record(user_id=user_id, action=action, meta_json=meta_json, ip_address=ip_address)
        except Exception:
            logger.exception("Could not write activity log entry %r", action)
