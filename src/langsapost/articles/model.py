from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthorPeriodAggregate:
    """Published-article totals of one author over one calendar month.

    Derived on demand from the articles table, never stored.
    """

    author_id: int
    month: int
    year: int
    published_article_count: int = 0
    total_views: int = 0
