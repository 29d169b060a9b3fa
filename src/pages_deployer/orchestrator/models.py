"""Data models for the orchestrator module."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class StageStatus(Enum):
    """阶段执行状态"""
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class StageResult:
    """Outcome of one pipeline stage."""
    status: StageStatus
    message: str = ""
    output: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == StageStatus.SUCCESS

    @classmethod
    def success(cls, message: str = "") -> "StageResult":
        return cls(StageStatus.SUCCESS, message)

    @classmethod
    def failed(cls, message: str, output: Optional[str] = None) -> "StageResult":
        return cls(StageStatus.FAILED, message, output)

    @classmethod
    def cancelled(cls, message: str = "Deployment cancelled") -> "StageResult":
        return cls(StageStatus.CANCELLED, message)


@dataclass
class StageRecord:
    """One executed stage, kept for the end-of-run report."""
    name: str
    result: StageResult


@dataclass
class RunOutcome:
    """Terminal state of a run plus the stages that led there."""
    status: StageStatus
    stages: List[StageRecord] = field(default_factory=list)
    identity: Optional[str] = None
    site_url: Optional[str] = None

    @property
    def exit_code(self) -> int:
        # 用户主动取消不算错误
        return 1 if self.status == StageStatus.FAILED else 0

    @property
    def last_result(self) -> Optional[StageResult]:
        return self.stages[-1].result if self.stages else None
