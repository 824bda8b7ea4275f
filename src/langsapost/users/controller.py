from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.web import json_body, json_error, login_required
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        try:
            data = json_body()
            s_user = container.auth_service.authenticate(str(data.get("email") or ""), str(data.get("password") or ""))
        except (AuthenticationError, ValidationError) as e:
            return json_error(str(e), 401)
        except Exception:
            logger.exception("Login failed")
            return json_error("Internal server error", 500)

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return jsonify({"user_id": s_user.user_id, "name": s_user.name, "email": s_user.email, "role": s_user.role.value})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        s_user = container.auth_service.get_session_user(session.get("user_id"))
        if not s_user:
            session.clear()
            return json_error("Authentication required", 401)
        return jsonify({"user_id": s_user.user_id, "name": s_user.name, "email": s_user.email, "role": s_user.role.value})
