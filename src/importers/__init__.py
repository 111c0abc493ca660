"""
Bulk import orchestration.

Currently this subpackage exposes ``ImportOrchestrator`` from
:mod:`src.importers.orchestrator` and ``ProgressTracker`` from
:mod:`src.importers.progress`.
"""

from .orchestrator import ImportOrchestrator
from .progress import ProgressTracker

__all__ = ["ImportOrchestrator", "ProgressTracker"]
