# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, lifespan, middleware wiring, entry point
# - config.py: Environment variable loading and settings
# - exceptions.py: Typed errors and the catch-all error handler
# - frontend.py: Production single-page app serving
# - auth/: Bearer token context and auth routes
# - middleware/: Multipart upload staging
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# data access to the core/ package.
# =============================================================================
