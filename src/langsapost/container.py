from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from types import ModuleType
from typing import Optional

from .activity.mysql_activity_repository import MySQLActivityLogRepository
from .activity.service import ActivityLogService
from .articles.mysql_article_repository import MySQLArticleRepository
from .core.constants import DEFAULT_PAYROLL_RUN_DAY, DEFAULT_PAYROLL_RUN_HOUR, DEFAULT_TAX_RATE
from .database.connection import DBConfig, DatabaseConnection
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.components.mysql_component_repository import MySQLSalaryComponentRepository
from .payroll.components.service import SalaryComponentService
from .payroll.document.renderer import PayslipRenderer
from .payroll.ledger.ledger import PayrollLedger
from .payroll.ledger.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.scheduler import PayrollScheduler
from .payroll.service import PayrollService
from .payroll.storage import LocalDocumentStorage
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    auth_service: AuthService
    component_service: SalaryComponentService
    payroll_service: PayrollService
    payroll_scheduler: PayrollScheduler
    activity_service: ActivityLogService

    def close(self) -> None:
        if self.conn is not None and not self.conn.closed:
            self.conn.close()
            logger.info("Container closed")


def build_container(*, db_config: dict, settings: Optional[ModuleType] = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    articles_repo = MySQLArticleRepository(conn)
    components_repo = MySQLSalaryComponentRepository(conn)
    payrolls_repo = MySQLPayrollRepository(conn)
    activity_repo = MySQLActivityLogRepository(conn)

    storage = LocalDocumentStorage(getattr(settings, "PAYROLL_STORAGE_DIR", "uploads/payroll"))
    ledger = PayrollLedger(payrolls_repo, storage)
    calculator = StandardPayrollCalculator(tax_rate=Decimal(str(getattr(settings, "PAYROLL_TAX_RATE", DEFAULT_TAX_RATE))))

    payroll_service = PayrollService(
        users=users_repo,
        articles=articles_repo,
        components=components_repo,
        calculator=calculator,
        renderer=PayslipRenderer(),
        storage=storage,
        ledger=ledger,
    )
    scheduler = PayrollScheduler(
        payroll_service,
        run_day=int(getattr(settings, "PAYROLL_RUN_DAY", DEFAULT_PAYROLL_RUN_DAY)),
        run_hour=int(getattr(settings, "PAYROLL_RUN_HOUR", DEFAULT_PAYROLL_RUN_HOUR)),
    )

    return Container(
        conn=conn,
        auth_service=AuthService(users_repo),
        component_service=SalaryComponentService(components_repo),
        payroll_service=payroll_service,
        payroll_scheduler=scheduler,
        activity_service=ActivityLogService(activity_repo),
    )
