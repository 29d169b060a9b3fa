"""Orchestrator module for stage-based deployment execution.

- DeploymentOrchestrator: runs the stages in order
- StageResult/StageStatus: typed outcome of a single stage
- RunOutcome: terminal state of a run and its exit code
"""

from .models import RunOutcome, StageRecord, StageResult, StageStatus
from .orchestrator import DeploymentOrchestrator

__all__ = [
    "RunOutcome",
    "StageRecord",
    "StageResult",
    "StageStatus",
    "DeploymentOrchestrator",
]
