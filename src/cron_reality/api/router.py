"""HTTP harness: a FastAPI router that analyses POSTed snapshot documents.

Mount it in any FastAPI app::

    from fastapi import FastAPI
    from cron_reality.api import create_reality_check_router

    app = FastAPI()
    app.include_router(create_reality_check_router())

Endpoints created
-----------------
``POST {prefix}``          Full analysis of the posted document.
``POST {prefix}/health``   Health report only.

The router holds no state beyond the configured engine, so it is safe to
share between workers. Nothing is ever written back to a scheduler.
"""

from __future__ import annotations

from typing import Any

from cron_reality.analysis import RealityCheck, RealityCheckResult, parse_document
from cron_reality.core.errors import CronRealityError
from cron_reality.core.logging import get_logger
from cron_reality.core.settings import RealityCheckSettings

logger = get_logger(__name__)


def create_reality_check_router(
    check: RealityCheck | None = None,
    prefix: str = "/cron-reality",
):
    """Create a FastAPI ``APIRouter`` exposing the analysis engine.

    Parameters
    ----------
    check : RealityCheck | None
        Engine to run. Defaults to one built from ``RealityCheckSettings``.
    prefix : str
        URL prefix (default ``"/cron-reality"``).

    Returns
    -------
    fastapi.APIRouter
    """
    # Late import so the engine doesn't hard-depend on fastapi.
    from fastapi import APIRouter, Body, HTTPException  # noqa: PLC0415

    engine = check or RealityCheck.from_settings(RealityCheckSettings())
    router = APIRouter(tags=["cron-reality"])

    def _analyse(document: Any) -> RealityCheckResult:
        try:
            return parse_document(document).run(engine)
        except CronRealityError as e:
            logger.info("document_rejected", **e.to_dict())
            raise HTTPException(status_code=422, detail=e.to_dict()) from e

    @router.post(prefix)
    def analyse(document: Any = Body(...)) -> dict[str, Any]:
        """Run the full pipeline on the posted snapshot document."""
        return _analyse(document).to_dict()

    @router.post(f"{prefix}/health")
    def health(document: Any = Body(...)) -> dict[str, Any]:
        """Return only the health report for the posted document."""
        return _analyse(document).health.to_dict()

    return router
