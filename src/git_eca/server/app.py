"""
FastAPI application for the Git ECA validation service.

Exposes the commit validation engine over HTTP. A request passes with status
200 and fails with 403, the body always carries the full validation outcome.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Config, ConfigManager
from ..models import ValidationRequest
from ..services import CachingService
from ..validation import CommitValidationEngine, build_validation_engine

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Config] = None,
    engine: Optional[CommitValidationEngine] = None,
    cache: Optional[CachingService] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        config: Service configuration, loaded from the config file when omitted
        engine: Validation engine, built from config when omitted
        cache: Shared cache used by the engine and the cache endpoints

    Returns:
        Configured FastAPI app
    """
    if config is None:
        config = ConfigManager().get_config()
    if cache is None:
        cache = CachingService(
            ttl_seconds=config.cache.ttl_seconds,
            max_entries=config.cache.max_entries,
        )
    if engine is None:
        engine = build_validation_engine(config, cache)

    app = FastAPI(
        title="Git ECA Validation Service",
        description="Validates that commit authors and committers are covered by an ECA",
        version=__version__,
    )
    app.state.engine = engine
    app.state.cache = cache

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        logger.warning(f"Rejected malformed request to {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.post("/eca")
    def validate(body: ValidationRequest) -> JSONResponse:
        """Validate the commits of a request.

        Runs in the worker threadpool; directory lookups block.
        """
        outcome = app.state.engine.validate(body)
        status_code = (
            status.HTTP_200_OK if outcome.passed else status.HTTP_403_FORBIDDEN
        )
        logger.info(
            f"Validated {len(body.commits or [])} commit(s) for {body.repo_url}: "
            f"passed={outcome.passed}, errors={outcome.error_count}"
        )
        return JSONResponse(status_code=status_code, content=outcome.to_dict())

    @app.get("/health")
    def health_check() -> Dict[str, Any]:
        return {
            "status": "ok",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/eca/cache/stats")
    def cache_stats() -> Dict[str, Any]:
        return app.state.cache.get_stats()

    @app.delete("/eca/cache")
    def clear_cache() -> Dict[str, Any]:
        """Drop all cached accounts, bots and projects."""
        app.state.cache.remove_all()
        return {"status": "cleared"}

    return app
