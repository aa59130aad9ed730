# caltime/core/validators.py
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple, Union

from caltime.core.constants import D2S
from caltime.core.duration import Duration
from caltime.core.instant import Instant

# ───────────────────────── errors ─────────────────────────

class ValidationError(ValueError):
    """Structured validator error compatible with routes.py (has .errors())."""
    def __init__(self, details: Union[str, Dict[str, Any], List[Dict[str, Any]]]):
        if isinstance(details, str):
            self._details = [{"loc": [], "msg": details, "type": "value_error"}]
            super().__init__(details)
        elif isinstance(details, dict):
            self._details = [details]
            super().__init__(details.get("msg", "validation_error"))
        elif isinstance(details, list):
            self._details = details
            super().__init__(self._details[0]["msg"] if self._details else "validation_error")
        else:
            self._details = [{"loc": [], "msg": "validation_error", "type": "value_error"}]
            super().__init__("validation_error")

    def errors(self) -> List[Dict[str, Any]]:
        return list(self._details)


# ───────────────────────── helpers ─────────────────────────

_INSTANT_FIELDS = ("year", "month", "day", "hour", "minute", "second", "millisecond")
_DURATION_FIELDS = ("days", "hours", "minutes", "seconds", "milliseconds")


def _err(loc: List[Any] | str, msg: str, typ: str = "value_error") -> Dict[str, Any]:
    return {"loc": [loc] if isinstance(loc, str) else loc, "msg": msg, "type": typ}


def _as_int(v: Any) -> Optional[int]:
    """Integers, integral floats and integer strings; never bools."""
    if isinstance(v, bool) or v is None:
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if math.isfinite(v) and v == int(v) else None
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            return None
    return None


def _as_float(v: Any) -> Optional[float]:
    if isinstance(v, bool) or v is None:
        return None
    try:
        x = float(v)
    except (TypeError, ValueError):
        return None
    return x if math.isfinite(x) else None


def _on_ordinal_axis(d: Instant) -> bool:
    """The ordinal, counted in milliseconds, still fits in a float."""
    try:
        return math.isfinite(d.to_ordinal() * D2S * 1e3)
    except OverflowError:
        return False


# ───────────────────────── atomic parsers ─────────────────────────

def parse_instant(value: Any, loc: str = "instant", *, require_valid: bool = True) -> Instant:
    """
    Accept an ISO string ('2024-02-29T12:00:00.250') or an object of fields
    (missing fields take the Instant defaults). With require_valid, field
    ranges are checked via Instant.is_valid().
    """
    if isinstance(value, str):
        try:
            out = Instant.fromisoformat(value)
        except ValueError:
            raise ValidationError(_err(loc, "must be 'YYYY-MM-DDThh:mm:ss.mmm'", "value_error.instant"))
    elif isinstance(value, dict):
        unknown = sorted(set(value) - set(_INSTANT_FIELDS))
        if unknown:
            raise ValidationError(_err([loc, unknown[0]], "unknown field", "value_error.extra"))
        kw: Dict[str, int] = {}
        errs: List[Dict[str, Any]] = []
        for name in _INSTANT_FIELDS:
            if name not in value:
                continue
            n = _as_int(value[name])
            if n is None:
                errs.append(_err([loc, name], "must be an integer", "type_error.integer"))
            else:
                kw[name] = n
        if errs:
            raise ValidationError(errs)
        out = Instant(**kw)
    else:
        raise ValidationError(_err(loc, "required: ISO string or object of fields", "type_error"))

    if out.is_valid() and not _on_ordinal_axis(out):
        raise ValidationError(_err([loc, "year"], "too large for the ordinal day axis", "value_error.instant"))

    if require_valid and not out.is_valid():
        raise ValidationError(_err(loc, f"not a valid calendar instant: {out.isoformat()}", "value_error.instant"))
    return out


def parse_duration(value: Any, loc: str = "duration") -> Duration:
    if not isinstance(value, dict):
        raise ValidationError(_err(loc, "required object with days/hours/minutes/seconds/milliseconds", "type_error"))
    unknown = sorted(set(value) - set(_DURATION_FIELDS))
    if unknown:
        raise ValidationError(_err([loc, unknown[0]], "unknown field", "value_error.extra"))
    kw: Dict[str, int] = {}
    errs: List[Dict[str, Any]] = []
    for name in _DURATION_FIELDS:
        if name not in value:
            continue
        n = _as_int(value[name])
        if n is None:
            errs.append(_err([loc, name], "must be an integer", "type_error.integer"))
        else:
            kw[name] = n
    if errs:
        raise ValidationError(errs)
    return Duration(**kw)


def parse_ordinal(value: Any, loc: str = "ordinal") -> float:
    x = _as_float(value)
    if x is None:
        raise ValidationError(_err(loc, "must be a finite number (days)", "type_error.float"))
    if x < 1.0:
        raise ValidationError(_err(loc, "must be >= 1 (0001-01-01T00:00:00.000)", "value_error"))
    return x


def parse_year(value: Any, loc: str = "year") -> int:
    n = _as_int(value)
    if n is None:
        raise ValidationError(_err(loc, "must be an integer", "type_error.integer"))
    if n < 1:
        raise ValidationError(_err(loc, "must be >= 1", "value_error"))
    return n


def parse_month(value: Any, loc: str = "month") -> int:
    n = _as_int(value)
    if n is None:
        raise ValidationError(_err(loc, "must be an integer", "type_error.integer"))
    return n


# ───────────────────────── payloads ─────────────────────────

def parse_shift_payload(body: Any) -> Tuple[Instant, Duration]:
    """{instant, duration} for /api/instant/add and /api/instant/subtract."""
    if not isinstance(body, dict):
        raise ValidationError("payload must be an object")
    if "instant" not in body:
        raise ValidationError(_err("instant", "required", "value_error.missing"))
    if "duration" not in body:
        raise ValidationError(_err("duration", "required", "value_error.missing"))
    return parse_instant(body["instant"], "instant"), parse_duration(body["duration"], "duration")


def parse_pair_payload(body: Any) -> Tuple[Instant, Instant]:
    """{a, b} for /api/instant/difference and /api/instant/compare."""
    if not isinstance(body, dict):
        raise ValidationError("payload must be an object")
    errs = [_err(k, "required", "value_error.missing") for k in ("a", "b") if k not in body]
    if errs:
        raise ValidationError(errs)
    return parse_instant(body["a"], "a"), parse_instant(body["b"], "b")


__all__ = [
    "ValidationError",
    "parse_instant",
    "parse_duration",
    "parse_ordinal",
    "parse_year",
    "parse_month",
    "parse_shift_payload",
    "parse_pair_payload",
]
