"""Project configuration audit."""

from .checks import (
    AuditReport,
    CheckOutcome,
    CheckStatus,
    ConfigCheck,
    ConfigurationAuditor,
    ProjectChecks,
)

__all__ = [
    "AuditReport",
    "CheckOutcome",
    "CheckStatus",
    "ConfigCheck",
    "ConfigurationAuditor",
    "ProjectChecks",
]
