"""Readiness test: config and packages must pass; the database may be unavailable (e.g. in CI/sandbox)."""
import pytest

from campus.readiness import check_config, check_packages, is_ready, run_all_checks


def test_is_ready_requires_every_required_check():
    checks = {"config": (True, "ok"), "packages": (True, "ok"), "database": (False, "refused")}
    ready, summary = is_ready(checks)
    assert ready is False
    assert summary == {"config": "ok", "packages": "ok", "database": "refused"}

    checks["database"] = (True, "ok")
    assert is_ready(checks)[0] is True


def test_config_and_packages_load():
    assert check_config() == (True, "ok")
    assert check_packages() == (True, "ok")


@pytest.mark.integration
def test_readiness_all_checks_pass():
    """Needs the configured database."""
    checks = run_all_checks()
    if not checks["database"][0]:
        pytest.skip(f"database unavailable: {checks['database'][1]}")
    ready, summary = is_ready(checks)
    report = "\n".join(f"  {name}: {msg}" for name, msg in summary.items())
    assert ready, f"Readiness checks failed:\n{report}"
