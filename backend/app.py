"""FastAPI application entry point for the product proxy API."""

import logging
import sys

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings as default_settings
from errors import register_error_handlers
from services.cache import TTLCache
from services.rapidapi import RapidAPIClient
from services.rate_limit import RateLimiter, RateLimitMiddleware

# Structured logging: JSON for production, human-readable for local
if default_settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    cache: TTLCache | None = None,
    limiter: RateLimiter | None = None,
    rapidapi: RapidAPIClient | None = None,
) -> FastAPI:
    if settings is None:
        settings = default_settings
    app = FastAPI(title="Product Proxy API", version="1.0.0")

    # Process-scoped services, reached from handlers via dependencies.py
    app.state.settings = settings
    if cache is None:
        cache = TTLCache(ttl_seconds=settings.cache_ttl_seconds)
    if limiter is None:
        limiter = RateLimiter(
            max_requests=settings.rate_limit_max,
            window_seconds=settings.rate_limit_window_seconds,
        )
    if rapidapi is None:
        rapidapi = RapidAPIClient(host=settings.rapidapi_host, api_key=settings.rapidapi_key)
    app.state.cache = cache
    app.state.limiter = limiter
    app.state.rapidapi = rapidapi

    # Rate limiting applies to every route, including /
    app.add_middleware(RateLimitMiddleware, limiter=app.state.limiter)

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # CORS is outermost so 429 responses still carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.products import router as products_router

    app.include_router(health_router)
    app.include_router(products_router)

    @app.on_event("startup")
    async def _startup() -> None:
        missing = settings.validate()
        if missing:
            logger.warning("Missing env vars (upstream calls will be rejected): %s", ", ".join(missing))
        logger.info("Server is running on port %d", settings.port)

    return app


app = create_app()


def main() -> None:
    uvicorn.run(app, host="0.0.0.0", port=default_settings.port)


if __name__ == "__main__":
    main()
