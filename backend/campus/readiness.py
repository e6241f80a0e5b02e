"""Readiness checks: config, packages, database."""
import asyncio
import logging

from sqlalchemy import text

from campus.infra.db.base import build_engine

logger = logging.getLogger(__name__)

# Result: (passed: bool, message: str)
CheckResult = tuple[bool, str]
ChecksDict = dict[str, CheckResult]

REQUIRED_CHECKS = frozenset({"config", "packages", "database"})


def check_config() -> CheckResult:
    """Load settings and read app_name / database_url."""
    try:
        from campus.settings import get_settings
        s = get_settings()
        _ = s.app_name
        _ = s.database_url
        return True, "ok"
    except Exception as e:
        return False, str(e)


def check_packages() -> CheckResult:
    """Import critical modules: uvicorn, sqlalchemy, yaml, campus.main."""
    missing = []
    for name in ("uvicorn", "sqlalchemy", "yaml"):
        try:
            __import__(name)
        except ImportError:
            missing.append(name)
    try:
        import campus.main  # noqa: F401
    except ImportError as e:
        missing.append(f"campus.main ({e})")
    if missing:
        return False, f"missing: {', '.join(missing)}"
    return True, "ok"


async def _check_database_async(database_url: str) -> CheckResult:
    """Run a trivial query against the database."""
    engine = build_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        return True, "ok"
    except Exception as e:
        logger.warning("Database readiness check failed: %s", e)
        return False, str(e)
    finally:
        await engine.dispose()


def run_all_checks() -> ChecksDict:
    """Run all readiness checks (sync, e.g. from a script)."""
    from campus.settings import get_settings
    return {
        "config": check_config(),
        "packages": check_packages(),
        "database": asyncio.run(_check_database_async(get_settings().database_url)),
    }


async def run_all_checks_async() -> ChecksDict:
    """Run all readiness checks from async context (e.g. GET /ready) to avoid nested event loop."""
    from campus.settings import get_settings
    return {
        "config": check_config(),
        "packages": check_packages(),
        "database": await _check_database_async(get_settings().database_url),
    }


def is_ready(checks: ChecksDict | None = None) -> tuple[bool, dict[str, str]]:
    """
    True if all required checks pass.
    Returns (ready: bool, checks_summary: dict of name -> "ok" | error message).
    """
    if checks is None:
        checks = run_all_checks()
    summary = {name: msg for name, (_, msg) in checks.items()}
    all_required = all(checks[n][0] for n in REQUIRED_CHECKS if n in checks)
    return all_required, summary
