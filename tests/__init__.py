# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Melodia API:
# - test_config.py: Settings defaults and environment aliases
# - test_uploads.py: Multipart staging middleware
# - test_auth.py: Token verification and auth-protected routes
# - test_routing.py / test_admin_songs.py: Route groups through the full stack
# - test_temp_cleanup.py / test_scheduler.py: Hourly temp directory purge
# - test_frontend.py / test_error_handling.py / test_lifespan.py: App wiring
#
# Run tests with: pytest
# =============================================================================
