# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the logic behind the HTTP layer:
# - models/: Pydantic schemas for catalog rows
# - services/: Catalog and media access, temp directory cleanup and its
#   hourly scheduler
# =============================================================================
