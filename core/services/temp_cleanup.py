# =============================================================================
# core/services/temp_cleanup.py - Temp Directory Cleanup
# =============================================================================
# Empties the upload staging directory. Every entry in it is disposable, so a
# run deletes everything it can and reports what happened per entry.
#
# Usage:
#   from core.services.temp_cleanup import purge_temp_dir
#   report = purge_temp_dir(Path("tmp"))
#   print(report.deleted)
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class CleanupOutcome:
    """Result of trying to delete one directory entry."""
    entry: str
    deleted: bool
    error: str | None = None


@dataclass
class CleanupReport:
    """
    Result of one cleanup run.

    `existed` is False when the directory was missing (nothing touched).
    `error` is set when the directory could not be listed; `outcomes` is
    then empty.
    """
    directory: Path
    existed: bool
    outcomes: list[CleanupOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def deleted(self) -> list[str]:
        return [o.entry for o in self.outcomes if o.deleted]

    @property
    def failed(self) -> list[str]:
        return [o.entry for o in self.outcomes if not o.deleted]


def purge_temp_dir(directory: Path) -> CleanupReport:
    """
    Delete every direct entry of `directory` as a plain file.

    Does not recurse: a subdirectory fails to unlink and is left alone.
    Per-entry failures are recorded in the report only; one failing entry
    never stops the others. A listing failure is logged and ends the run.

    Args:
        directory: The temp directory to empty

    Returns:
        CleanupReport with one outcome per entry
    """
    directory = Path(directory)

    if not directory.exists():
        return CleanupReport(directory=directory, existed=False)

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.error(f"Temp cleanup error: {e}")
        return CleanupReport(directory=directory, existed=True, error=str(e))

    report = CleanupReport(directory=directory, existed=True)

    for entry in entries:
        try:
            entry.unlink()
            report.outcomes.append(CleanupOutcome(entry=entry.name, deleted=True))
        except OSError as e:
            report.outcomes.append(CleanupOutcome(entry=entry.name, deleted=False, error=str(e)))

    return report
