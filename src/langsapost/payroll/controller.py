from __future__ import annotations

import io
import logging
from typing import Any, Optional

from flask import Flask, jsonify, request, send_file

from ..common.validators import require_bool, require_int, require_month, require_year
from ..common.web import admin_required, current_role, current_user_id, json_body, json_error, login_required
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    DuplicatePayrollError,
    NotFoundError,
    PayrollRunInProgressError,
    ValidationError,
)
from ..container import Container
from .model import Period

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (DuplicatePayrollError, 409),
    (PayrollRunInProgressError, 409),
)


def _domain_error_response(e: DomainError):
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(e, exc_type):
            return json_error(str(e), status)
    return json_error(str(e), 400)


def _optional_query_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    return require_int(raw, name)


def register(app: Flask, container: Container) -> None:
    def _audit(action: str, meta: Optional[dict[str, Any]] = None) -> None:
        container.activity_service.record(
            user_id=current_user_id(),
            action=action,
            meta=meta,
            ip_address=request.remote_addr,
        )

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    @admin_required
    def payroll_generate():
        try:
            data = json_body()
            result = container.payroll_scheduler.run_manual(data.get("month"), data.get("year"))
        except DomainError as e:
            return _domain_error_response(e)
        except Exception:
            logger.exception("Manual payroll run failed")
            return json_error("Internal server error", 500)

        _audit(
            "payroll.generate",
            {"month": result.period.month, "year": result.period.year, "created": len(result.created)},
        )
        return jsonify(result.to_dict())

    @app.route("/api/payroll/authors/<int:author_id>/generate", methods=["POST"], endpoint="payroll_generate_author")
    @admin_required
    def payroll_generate_author(author_id: int):
        try:
            data = json_body()
            period = Period.of(data.get("month"), data.get("year"))
            payroll = container.payroll_service.generate_for_author(author_id, period)
        except DuplicatePayrollError:
            return json_error("Payroll for this period already exists", 409)
        except DomainError as e:
            return _domain_error_response(e)
        except Exception:
            logger.exception("Payroll generation for author %s failed", author_id)
            return json_error("Internal server error", 500)

        _audit("payroll.generate_author", {"author_id": author_id, "payroll_id": payroll.payroll_id})
        return jsonify(payroll.to_dict()), 201

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    @login_required
    def payroll_list():
        try:
            month = _optional_query_int("month")
            year = _optional_query_int("year")
            payrolls = container.payroll_service.list_for_user(
                user_id=current_user_id(),
                role=current_role(),
                author_id=_optional_query_int("user_id"),
                month=require_month(month) if month is not None else None,
                year=require_year(year) if year is not None else None,
            )
        except DomainError as e:
            return _domain_error_response(e)
        except Exception:
            logger.exception("Listing payrolls failed")
            return json_error("Internal server error", 500)

        return jsonify([p.to_dict() for p in payrolls])

    @app.route("/api/payroll/<int:payroll_id>/download", methods=["GET"], endpoint="payroll_download")
    @login_required
    def payroll_download(payroll_id: int):
        try:
            data, filename = container.payroll_service.download(
                payroll_id, user_id=current_user_id(), role=current_role()
            )
        except DomainError as e:
            return _domain_error_response(e)
        except Exception:
            logger.exception("Payslip download %s failed", payroll_id)
            return json_error("Internal server error", 500)

        _audit("payroll.download", {"payroll_id": payroll_id})
        return send_file(
            io.BytesIO(data),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=filename,
        )

    @app.route("/api/payroll/components", methods=["GET"], endpoint="payroll_components")
    @admin_required
    def payroll_components():
        return jsonify([c.to_dict() for c in container.component_service.list_all()])

    @app.route("/api/payroll/components", methods=["POST"], endpoint="payroll_component_create")
    @admin_required
    def payroll_component_create():
        try:
            data = json_body()
            component = container.component_service.create(
                name=str(data.get("name") or ""),
                kind=data.get("kind"),
                value=data.get("value"),
                active=require_bool(data.get("active", True), "active"),
            )
        except DomainError as e:
            return _domain_error_response(e)
        except Exception:
            logger.exception("Creating salary component failed")
            return json_error("Internal server error", 500)

        _audit("payroll.component.create", component.to_dict())
        return jsonify(component.to_dict()), 201

    @app.route("/api/payroll/components/<int:component_id>", methods=["PUT"], endpoint="payroll_component_update")
    @admin_required
    def payroll_component_update(component_id: int):
        try:
            data = json_body()
            current = container.component_service.get(component_id)
            component = container.component_service.update(
                component_id=component_id,
                name=str(data.get("name", current.name) or ""),
                kind=data.get("kind", current.kind.value),
                value=data.get("value", str(current.value)),
                active=require_bool(data.get("active", current.active), "active"),
            )
        except DomainError as e:
            return _domain_error_response(e)
        except Exception:
            logger.exception("Updating salary component %s failed", component_id)
            return json_error("Internal server error", 500)

        _audit("payroll.component.update", component.to_dict())
        return jsonify(component.to_dict())

    @app.route("/api/payroll/scheduler", methods=["GET"], endpoint="payroll_scheduler")
    @admin_required
    def payroll_scheduler():
        return jsonify(container.payroll_scheduler.status())
