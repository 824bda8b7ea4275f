from __future__ import annotations

from typing import Protocol

from .model import AuthorPeriodAggregate


class ArticleRepository(Protocol):
    def aggregate_for_author(self, author_id: int, month: int, year: int) -> AuthorPeriodAggregate:
        """Count published articles and sum their views for the calendar month."""

        raise NotImplementedError
