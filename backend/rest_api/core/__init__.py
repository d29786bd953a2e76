"""
Application wiring: CORS, middlewares, exception handlers, lifespan.
"""
