"""Subject profile - directory data used by drift detection and analytics."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class SubjectProfile:
    """Read model of the tenant user directory."""

    subject_id: str
    tenant_id: str
    full_name: str
    nominal_role: str | None = None
    last_login_at: datetime | None = None
