"""Application layer package."""

from application.orchestrator import ArchiveJobOrchestrator
from application.factories import ArchiverFactory, create_orchestrator
from application.service import authenticate, process_event

__all__ = [
    "ArchiveJobOrchestrator",
    "ArchiverFactory",
    "create_orchestrator",
    "authenticate",
    "process_event",
]
