import logging
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask, g, request
from werkzeug.exceptions import HTTPException

from app.campushub.config import is_production, load_config
from app.campushub.db import init_db, teardown_db_session
from app.campushub.errors import APIError, Internal
from app.campushub.responses import fail
from app.campushub.routes import bp as routes_bp
from app.campushub.auth import bp as auth_bp, load_current_user
from app.campushub.modules.notices.routes import bp as notices_bp
from app.campushub.modules.events.routes import bp as events_bp
from app.campushub.modules.lostfound.routes import bp as lostfound_bp
from app.campushub.modules.feedback.routes import bp as feedback_bp
from app.campushub.modules.stats.routes import bp as stats_bp


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    load_dotenv()
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = False

    # Production guardrails (fail fast with clear logs)
    if is_production(app.config.get("ENV")):
        if not app.config.get("DATABASE_URL") or str(app.config["DATABASE_URL"]).strip() == "":
            raise RuntimeError("DATABASE_URL is required in production.")
        if str(app.config["DATABASE_URL"]).startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must be Postgres in production (not sqlite).")
        for key in ("SECRET_KEY", "JWT_SECRET"):
            if not app.config.get(key) or str(app.config[key]) in ("", "change-me"):
                raise RuntimeError(f"{key} must be set to a strong value in production (not default).")

    init_db(app)

    def _dispose_engine_on_fork() -> None:
        import os
        if hasattr(os, "register_at_fork"):
            def _after_fork_child():
                engine = app.extensions.get("sqlalchemy_engine")
                if engine:
                    engine.dispose()
                    app.logger.info("Disposed DB engine after fork (pid=%s)", os.getpid())

            os.register_at_fork(after_in_child=_after_fork_child)

    _dispose_engine_on_fork()

    prefix = app.config["API_PREFIX"]
    app.register_blueprint(routes_bp, url_prefix=prefix or None)
    app.register_blueprint(routes_bp, name="root")
    app.register_blueprint(auth_bp, url_prefix=f"{prefix}/auth")
    app.register_blueprint(notices_bp, url_prefix=f"{prefix}/notices")
    app.register_blueprint(events_bp, url_prefix=f"{prefix}/events")
    app.register_blueprint(lostfound_bp, url_prefix=f"{prefix}/lostfound")
    app.register_blueprint(feedback_bp, url_prefix=f"{prefix}/feedback")
    app.register_blueprint(stats_bp, url_prefix=f"{prefix}/stats")

    app.before_request(load_current_user)
    app.teardown_appcontext(teardown_db_session)

    @app.after_request
    def _cors(resp):  # type: ignore[no-redef]
        origin = app.config.get("CORS_ORIGIN")
        if origin:
            resp.headers["Access-Control-Allow-Origin"] = origin
            resp.headers["Access-Control-Allow-Credentials"] = "true"
            resp.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
            resp.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
            resp.headers.add("Vary", "Origin")
        return resp

    @app.errorhandler(APIError)
    def _api_error(e: APIError):  # type: ignore[no-redef]
        if e.status_code >= 500:
            app.logger.error("API error %s (request_id=%s): %s", e.status_code, getattr(g, "request_id", None), e.message)
        return fail(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):  # type: ignore[no-redef]
        code = e.code or 500
        if code == 404:
            message = f"Route {request.path} not found"
        elif code == 405:
            message = f"Method {request.method} not allowed on {request.path}"
        else:
            message = e.description or e.name
        return fail(message, code)

    @app.errorhandler(Exception)
    def _err_500(e: Exception):  # type: ignore[no-redef]
        app.logger.exception("Unhandled 500 (request_id=%s)", getattr(g, "request_id", None))
        return fail(Internal.default_message, 500)

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
