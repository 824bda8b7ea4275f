from __future__ import annotations

import atexit
import importlib
import logging
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, list_tables
from .logging_config import configure_logging
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def load_settings() -> ModuleType:
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def bootstrap_database(settings: ModuleType) -> None:
    db_config = getattr(settings, "DB_CONFIG")
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config)
        ensure_admin_user(
            db_config,
            email=getattr(settings, "ADMIN_EMAIL"),
            password=getattr(settings, "ADMIN_PASSWORD", ""),
        )


def create_app(container: Optional[Container] = None, settings: Optional[ModuleType] = None) -> Flask:
    settings = settings or load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "Starting with settings=%s db=%s@%s:%s/%s",
            settings.__name__,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        bootstrap_database(settings)
        container = build_container(db_config=db_config, settings=settings)
        atexit.register(container.close)

    app.extensions["langsapost"] = container

    register_users(app, container)
    register_payroll(app, container)

    return app
