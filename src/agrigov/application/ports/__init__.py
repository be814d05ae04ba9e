"""Application ports - interfaces for external adapters."""

from agrigov.application.ports.clock import Clock
from agrigov.application.ports.permission_checker import PermissionChecker
from agrigov.application.ports.reviewer_notifier import ReviewerNotifier
from agrigov.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "Clock",
    "PermissionChecker",
    "ReviewerNotifier",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
