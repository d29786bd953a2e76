"""
Public routers - No authentication required.
- /api/health, /api/health/detailed, /api/ready, /api/alive
"""

from .health import router as health_router

__all__ = ["health_router"]
