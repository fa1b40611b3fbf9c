# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .catalog_service import CatalogService
from .media_service import MediaService
from .scheduler import CleanupScheduler, seconds_until_next_run
from .temp_cleanup import CleanupOutcome, CleanupReport, purge_temp_dir

__all__ = [
    "CatalogService",
    "MediaService",
    "CleanupScheduler",
    "seconds_until_next_run",
    "CleanupOutcome",
    "CleanupReport",
    "purge_temp_dir",
]
