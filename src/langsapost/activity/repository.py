from __future__ import annotations

from typing import Optional, Protocol


class ActivityLogRepository(Protocol):
    def record(self, *, user_id: Optional[int], action: str, meta_json: Optional[str], ip_address: Optional[str]) -> int:
        raise NotImplementedError
