# caltime/api/routes.py
"""
caltime — Canonical API Routes
- Calendar queries (leap years, month lengths)
- Instant inspection (validity, weekday, yearday, ordinal, ISO week, epoch seconds)
- Arithmetic: instant ± duration, instant - instant, comparison
- Ordinal conversion both ways
- Host clock: /api/now
- Ops: /api/health, /api/config, /__debug/routes

Notes:
- Instants are accepted as ISO strings or objects of fields and must be
  valid calendar instants, except for /api/instant/inspect which reports
  validity instead of rejecting.
- isocalendar / seconds_since_epoch use the configured calendar backend.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from caltime.version import VERSION
from caltime.core.calendar import days_in_month, days_in_year, is_leap_year
from caltime.core.comparator import compare
from caltime.core.host_bridge import HOST_BACKEND, HostTimeError
from caltime.core.instant import Instant
from caltime.core.isoweek import PURE_BACKEND, CalendarBackend
from caltime.core.validators import (
    ValidationError,
    parse_instant,
    parse_month,
    parse_ordinal,
    parse_pair_payload,
    parse_shift_payload,
    parse_year,
)
from caltime.utils.metrics import MET_HOST_ERRORS, MET_VALIDATION, timed

log = logging.getLogger(__name__)
api = Blueprint("api", __name__)

ROUTES = (
    "/api/health",
    "/api/config",
    "/api/calendar/year",
    "/api/calendar/days-in-month",
    "/api/instant/inspect",
    "/api/instant/add",
    "/api/instant/subtract",
    "/api/instant/difference",
    "/api/instant/compare",
    "/api/ordinal/to",
    "/api/ordinal/from",
    "/api/now",
)


# ───────────────────────── helpers ─────────────────────────
def _json_error(code: str, details: Any = None, http: int = 400):
    out: Dict[str, Any] = {"ok": False, "error": code}
    if details is not None:
        out["details"] = details
    return jsonify(out), http


def _validation_failed(route: str, e: ValidationError):
    MET_VALIDATION.labels(route=route).inc()
    return _json_error("validation_error", e.errors(), 400)


def _host_failed(kind: str, e: HostTimeError):
    MET_HOST_ERRORS.labels(kind=kind).inc()
    log.warning("host %s failure: %s", kind, e)
    return _json_error("host_time_error", str(e), 503)


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise ValidationError("JSON body must be an object")
    return body


def _cfg():
    return getattr(current_app, "cfg", None) or {}


def _sep() -> str:
    return str(_cfg().get("iso_separator", "T"))


def _backend() -> CalendarBackend:
    return HOST_BACKEND if _cfg().get("calendar_backend") == "host" else PURE_BACKEND


def _instant_out(d: Instant) -> Dict[str, Any]:
    return {"iso": d.isoformat(_sep()), "fields": d.to_dict()}


def _describe(d: Instant) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        **_instant_out(d),
        "valid": d.is_valid(),
    }
    if not out["valid"]:
        return out
    iso_year, iso_week, iso_day = d.isocalendar(_backend())
    out.update({
        "weekday": d.weekday(),
        "weekday_short": d.weekday_short(),
        "weekday_long": d.weekday_long(),
        "yearday": d.yearday(),
        "leap_year": is_leap_year(d.year),
        "ordinal": d.to_ordinal(),
        "julian_day": d.to_julian_day(),
        "isocalendar": {"year": iso_year, "week": iso_week, "weekday": iso_day},
        "seconds_since_epoch": d.seconds_since_epoch(_backend()),
    })
    return out


# ───────────────────────── ops ─────────────────────────
@api.get("/api/health")
@timed("/api/health")
def health():
    return jsonify({"ok": True, "status": "ok", "version": VERSION}), 200


@api.get("/api/config")
@timed("/api/config")
def config_info():
    cfg = _cfg()
    return jsonify({
        "ok": True,
        "iso_separator": cfg.get("iso_separator", "T"),
        "calendar_backend": cfg.get("calendar_backend", "pure"),
        "now_enabled": bool(cfg.get("now_enabled", True)),
        "version": VERSION,
    }), 200


@api.get("/__debug/routes")
def debug_routes():
    """Route index for quick inspection."""
    rules = []
    for r in current_app.url_map.iter_rules():
        if r.endpoint == "static":
            continue
        methods = sorted(m for m in r.methods if m not in {"HEAD", "OPTIONS"})
        rules.append({"rule": str(r), "methods": methods, "endpoint": r.endpoint})
    rules.sort(key=lambda x: x["rule"])
    return jsonify({"ok": True, "routes": rules}), 200


# ───────────────────────── calendar queries ─────────────────────────
@api.get("/api/calendar/year/<year>")
@timed("/api/calendar/year")
def calendar_year(year: str):
    try:
        y = parse_year(year)
    except ValidationError as e:
        return _validation_failed("/api/calendar/year", e)
    return jsonify({
        "ok": True,
        "year": y,
        "leap_year": is_leap_year(y),
        "days_in_year": days_in_year(y),
        "month_lengths": [days_in_month(m, y) for m in range(1, 13)],
    }), 200


@api.get("/api/calendar/days-in-month")
@timed("/api/calendar/days-in-month")
def calendar_days_in_month():
    try:
        y = parse_year(request.args.get("year"))
        m = parse_month(request.args.get("month"))
    except ValidationError as e:
        return _validation_failed("/api/calendar/days-in-month", e)
    n = days_in_month(m, y)
    # 0 is the answer for a month outside 1..12, not an error
    return jsonify({"ok": True, "year": y, "month": m, "days_in_month": n, "valid_month": n > 0}), 200


# ───────────────────────── instants ─────────────────────────
@api.post("/api/instant/inspect")
@timed("/api/instant/inspect")
def instant_inspect():
    try:
        body = _body()
        d = parse_instant(body.get("instant"), "instant", require_valid=False)
        return jsonify({"ok": True, "instant": _describe(d)}), 200
    except ValidationError as e:
        return _validation_failed("/api/instant/inspect", e)
    except HostTimeError as e:
        return _host_failed("formatter", e)


def _shift(route: str, sign: int):
    try:
        d, t = parse_shift_payload(_body())
    except ValidationError as e:
        return _validation_failed(route, e)
    out = d + t if sign > 0 else d - t
    return jsonify({"ok": True, "instant": _instant_out(out), "duration": t.to_dict()}), 200


@api.post("/api/instant/add")
@timed("/api/instant/add")
def instant_add():
    return _shift("/api/instant/add", 1)


@api.post("/api/instant/subtract")
@timed("/api/instant/subtract")
def instant_subtract():
    return _shift("/api/instant/subtract", -1)


@api.post("/api/instant/difference")
@timed("/api/instant/difference")
def instant_difference():
    try:
        a, b = parse_pair_payload(_body())
    except ValidationError as e:
        return _validation_failed("/api/instant/difference", e)
    t = a - b
    return jsonify({"ok": True, "duration": t.to_dict(), "total_seconds": t.total_seconds()}), 200


@api.post("/api/instant/compare")
@timed("/api/instant/compare")
def instant_compare():
    try:
        a, b = parse_pair_payload(_body())
    except ValidationError as e:
        return _validation_failed("/api/instant/compare", e)
    return jsonify({
        "ok": True,
        "cmp": compare(a, b),
        "gt": a > b,
        "lt": a < b,
        "eq": a == b,
        "ge": a >= b,
        "le": a <= b,
    }), 200


# ───────────────────────── ordinal axis ─────────────────────────
@api.post("/api/ordinal/to")
@timed("/api/ordinal/to")
def ordinal_to():
    try:
        d = parse_instant(_body().get("instant"), "instant")
    except ValidationError as e:
        return _validation_failed("/api/ordinal/to", e)
    return jsonify({"ok": True, "ordinal": d.to_ordinal(), "julian_day": d.to_julian_day()}), 200


@api.post("/api/ordinal/from")
@timed("/api/ordinal/from")
def ordinal_from():
    try:
        num = parse_ordinal(_body().get("ordinal"))
    except ValidationError as e:
        return _validation_failed("/api/ordinal/from", e)
    return jsonify({"ok": True, "ordinal": num, "instant": _instant_out(Instant.from_ordinal(num))}), 200


# ───────────────────────── host clock ─────────────────────────
@api.get("/api/now")
@timed("/api/now")
def now():
    if not _cfg().get("now_enabled", True):
        return _json_error("disabled", "GET /api/now is disabled by configuration", 404)
    try:
        d = Instant.now()
    except HostTimeError as e:
        return _host_failed("clock", e)
    try:
        return jsonify({"ok": True, "instant": _describe(d)}), 200
    except HostTimeError as e:
        return _host_failed("formatter", e)