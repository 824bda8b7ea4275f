from __future__ import annotations

from ..common.datetime_utils import month_bounds
from ..core.enums import ArticleStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AuthorPeriodAggregate
from .repository import ArticleRepository


class MySQLArticleRepository(ArticleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def aggregate_for_author(self, author_id: int, month: int, year: int) -> AuthorPeriodAggregate:
        start, end = month_bounds(month, year)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS article_count, COALESCE(SUM(views), 0) AS total_views
                FROM articles
                WHERE author_id=%s
                  AND status=%s
                  AND published_at >= %s
                  AND published_at < %s
                """,
                (int(author_id), ArticleStatus.PUBLISHED.value, start, end),
            )
            row = fetchone(cur) or {}
            return AuthorPeriodAggregate(
                author_id=int(author_id),
                month=month,
                year=year,
                published_article_count=int(row.get("article_count") or 0),
                total_views=int(row.get("total_views") or 0),
            )
