# caltime/main.py
"""
caltime service — Flask app factory.

- Logging joins gunicorn's handlers when served by gunicorn, else basicConfig.
- Every error leaves as JSON in the same shape the API routes use:
  {"ok": false, "error": <code>, "details": ...}.
- /metrics is Prometheus text behind HTTP Basic auth (METRICS_USER/METRICS_PASS).
"""
from __future__ import annotations

import hmac
import logging
import os
from typing import Optional

from flask import Flask, Response, jsonify, request
from flask_cors import CORS
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from caltime.api.routes import ROUTES, api
from caltime.core.host_bridge import HostTimeError
from caltime.core.validators import ValidationError
from caltime.utils.config import load_config
from caltime.utils.metrics import GAUGE_APP_UP, MET_HOST_ERRORS, seed
from caltime.version import VERSION

log = logging.getLogger(__name__)

DEBUG_VERBOSE = os.getenv("CALTIME_DEBUG_VERBOSE", "0").lower() in ("1", "true", "yes", "on")
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ───────────────────────── logging ─────────────────────────
def _configure_logging(app: Flask) -> None:
    gunicorn_log = logging.getLogger("gunicorn.error")
    if gunicorn_log.handlers:
        # under gunicorn: one stream, one level
        app.logger.handlers = gunicorn_log.handlers
        app.logger.setLevel(gunicorn_log.level)
        logging.getLogger("caltime").handlers = gunicorn_log.handlers
        logging.getLogger("caltime").setLevel(gunicorn_log.level)
        return
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper(), format=_LOG_FORMAT)


# ───────────────────────── errors ─────────────────────────
def _error(code: str, details, status: int):
    return jsonify({"ok": False, "error": code, "details": details, "path": request.path}), status


def _register_errors(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _invalid(e: ValidationError):
        log.info("validation failed at %s %s: %s", request.method, request.path, e)
        return _error("validation_error", e.errors(), 400)

    @app.errorhandler(HostTimeError)
    def _host(e: HostTimeError):
        MET_HOST_ERRORS.labels(kind="unhandled").inc()
        log.warning("host time failure at %s %s: %s", request.method, request.path, e)
        return _error("host_time_error", str(e), 503)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        log.warning("HTTP %s at %s %s: %s", e.code, request.method, request.path, e.description)
        return _error("http_error", {"code": e.code, "name": e.name, "message": e.description}, e.code or 500)

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        log.exception("unhandled %s at %s %s", type(e).__name__, request.method, request.path)
        details = {"type": type(e).__name__}
        if DEBUG_VERBOSE:
            details["message"] = str(e)
        return _error("internal_error", details, 500)


# ───────────────────────── health & metrics ─────────────────────────
def _register_health(app: Flask) -> None:
    def _health():
        return jsonify(
            ok=True,
            status="ok",
            version=VERSION,
            calendar_backend=app.cfg.calendar_backend,  # type: ignore[attr-defined]
        ), 200

    app.add_url_rule("/", "root", lambda: (jsonify(ok=True, service=app.cfg.service, health="/health"), 200))  # type: ignore[attr-defined]
    app.add_url_rule("/health", "health", _health)
    app.add_url_rule("/healthz", "healthz", _health)


def _metrics_credentials() -> Optional[tuple]:
    user, pw = os.getenv("METRICS_USER", ""), os.getenv("METRICS_PASS", "")
    return (user, pw) if user and pw else None


def _metrics_authorized() -> bool:
    creds = _metrics_credentials()
    auth = request.authorization
    if creds is None or auth is None or auth.type != "basic":
        return False
    return hmac.compare_digest(auth.username or "", creds[0]) and hmac.compare_digest(auth.password or "", creds[1])


def _register_metrics(app: Flask) -> None:
    @app.get("/metrics")
    def metrics():
        if not _metrics_authorized():
            return Response("Unauthorized", 401, {"WWW-Authenticate": 'Basic realm="caltime-metrics"'})
        GAUGE_APP_UP.set(1.0)
        return Response(generate_latest(REGISTRY), mimetype=CONTENT_TYPE_LATEST)


# ───────────────────────── app factory ─────────────────────────
def create_app(config_path: Optional[str] = None) -> Flask:
    """Build the service; a broken config file fails here, at start-up."""
    app = Flask(__name__)
    app.json.sort_keys = False  # type: ignore[attr-defined]
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore[method-assign]

    _configure_logging(app)
    app.cfg = load_config(config_path)  # type: ignore[attr-defined]

    seed(ROUTES)
    _register_errors(app)
    _register_health(app)
    _register_metrics(app)
    app.register_blueprint(api)

    CORS(
        app,
        resources={r"/api/*": {"origins": os.environ.get("CORS_ALLOW_ORIGIN") or "*"}},
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=600,
    )

    log.info(
        "caltime %s ready: calendar_backend=%s iso_separator=%r now_enabled=%s",
        VERSION,
        app.cfg.calendar_backend,  # type: ignore[attr-defined]
        app.cfg.iso_separator,  # type: ignore[attr-defined]
        app.cfg.now_enabled,  # type: ignore[attr-defined]
    )
    return app


app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
