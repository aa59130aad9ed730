# tests/conftest.py
from __future__ import annotations

"""
Pytest configuration for the caltime suite.

- Hypothesis profiles: 'dev' (default), 'ci' (CI / GITHUB_ACTIONS set) and
  'thorough' (HYPOTHESIS_PROFILE=thorough, for ordinal round-trip sweeps).
- The process TZ is UTC for the whole session, so the host '%s' directive
  and the pure epoch-seconds computation agree.
- ERFA's cal2jd/jd2cal serve as an independent calendar oracle.
"""

import os
import time

import pytest
from hypothesis import HealthCheck, settings

# ──────────────────────────────────────────────────────────────────────────────
# Hypothesis profiles
# ──────────────────────────────────────────────────────────────────────────────
_EXAMPLES = {"dev": 60, "ci": 150, "thorough": 2000}

for _name, _n in _EXAMPLES.items():
    settings.register_profile(
        _name,
        deadline=None,  # day-carry loops are slow for far-away years
        max_examples=_n,
        suppress_health_check=[HealthCheck.too_slow, HealthCheck.filter_too_much],
    )

if os.getenv("CI") or os.getenv("GITHUB_ACTIONS"):
    _profile = "ci"
else:
    _profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(_profile)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "slow: long-running property sweeps")
    config.addinivalue_line("filterwarnings", "ignore::DeprecationWarning")


def pytest_report_header(config: pytest.Config) -> str:
    return f"caltime: hypothesis profile '{_profile}', TZ=UTC"


# ──────────────────────────────────────────────────────────────────────────────
# Fixtures
# ──────────────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session", autouse=True)
def utc_process_tz():
    saved = os.environ.get("TZ")
    os.environ["TZ"] = "UTC"
    time.tzset()
    yield
    if saved is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = saved
    time.tzset()


@pytest.fixture(scope="session")
def ensure_erfa():
    """pyERFA, or fail early; only the civil-calendar routines are needed."""
    import erfa

    for fn in ("cal2jd", "jd2cal"):
        assert hasattr(erfa, fn), f"erfa.{fn} not available"
    return erfa


@pytest.fixture()
def client():
    from caltime.main import app

    app.testing = True
    return app.test_client()
