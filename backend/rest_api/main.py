"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from rest_api.core.cors import configure_cors
from rest_api.core.errors import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.public import health_router
from rest_api.routers.resources import router as resources_router
from shared.config.settings import settings
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler


# Create FastAPI application
app = FastAPI(
    title="Gym Management REST API",
    description="Users, trainers, clients, plans, scheduling, progress and feedback",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Error envelopes
register_exception_handlers(app)

# Middlewares (CORS added last so it wraps everything)
register_middlewares(app)
configure_cors(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(resources_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=settings.debug,
    )
