from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Back-office roles used for authorization."""

    ADMIN = "admin"
    EDITOR = "editor"
    WRITER = "writer"


class ComponentKind(str, Enum):
    """How a salary component contributes to gross pay."""

    FIXED = "fixed"
    PER_ARTICLE = "per_article"
    PER_VIEW_BUCKET = "per_view_bucket"

    @classmethod
    def parse(cls, value: str) -> "ComponentKind":
        # Older rows spell the view bucket as 'percentage'.
        if value == "percentage":
            return cls.PER_VIEW_BUCKET
        return cls(value)


class ArticleStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class RunMode(str, Enum):
    """Which trigger started a payroll run."""

    PERIODIC = "periodic"
    MANUAL = "manual"


class RunState(str, Enum):
    """Payroll scheduler state machine."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    PARTIALLY_FAILED = "partially_failed"


class OutcomeStatus(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"
