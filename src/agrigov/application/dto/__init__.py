"""Application DTOs."""

from agrigov.application.dto.analytics import AccessSummary, PermissionUsage, SubjectActivity

__all__ = ["AccessSummary", "PermissionUsage", "SubjectActivity"]
