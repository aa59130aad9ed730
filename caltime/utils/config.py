import os
import yaml

_DEFAULTS = {
    "service": "caltime",
    "iso_separator": "T",
    "calendar_backend": "pure",   # pure | host
    "now_enabled": True,
}

_BACKENDS = ("pure", "host")


class AttrDict(dict):
    """Dict that also supports attribute access: cfg.iso_separator and cfg['iso_separator'] both work."""
    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError as e:
            raise AttributeError(item) from e
    def __setattr__(self, key, value):
        self[key] = value

def _to_attr(obj):
    if isinstance(obj, dict):
        return AttrDict({k: _to_attr(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return [_to_attr(x) for x in obj]
    return obj

def _env_flag(name, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")

def load_config(path: str = None):
    """
    Load YAML config from `path` (default: $CALTIME_CONFIG or config/defaults.yaml)
    on top of built-in defaults. A missing file means defaults only.
    Env overrides:
      - CALTIME_ISO_SEPARATOR     (single character placed between date and time)
      - CALTIME_CALENDAR_BACKEND  ('pure' or 'host')
      - CALTIME_NOW_ENABLED       (expose /api/now)
    Returns an AttrDict for convenient access.
    """
    path = path or os.getenv("CALTIME_CONFIG", "config/defaults.yaml")
    data = dict(_DEFAULTS)
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"config {path!r} must be a mapping, got {type(loaded).__name__}")
        data.update(loaded)

    sep = os.getenv("CALTIME_ISO_SEPARATOR")
    if sep:
        data["iso_separator"] = sep
    backend = os.getenv("CALTIME_CALENDAR_BACKEND")
    if backend:
        data["calendar_backend"] = backend.strip().lower()
    data["now_enabled"] = _env_flag("CALTIME_NOW_ENABLED", bool(data.get("now_enabled", True)))

    if len(str(data["iso_separator"])) != 1:
        raise ValueError(f"iso_separator must be one character: {data['iso_separator']!r}")
    if data["calendar_backend"] not in _BACKENDS:
        raise ValueError(f"calendar_backend must be one of {_BACKENDS}: {data['calendar_backend']!r}")

    return _to_attr(data)
