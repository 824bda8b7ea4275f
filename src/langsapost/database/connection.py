from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "langsapost")),
        )


class DatabaseConnection:
    """DB connection factory injected into repositories.

    Built once at process start by the container and closed at shutdown.
    Each repository call still opens a short-lived connection.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def connect(self):
        if self._closed:
            raise RuntimeError("Database connection factory is closed")
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    def close(self) -> None:
        if not self._closed:
            logger.debug("Closing database handle for %s", self._config.database)
        self._closed = True
