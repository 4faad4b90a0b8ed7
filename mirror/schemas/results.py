"""Operation result schemas."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OperationStatus(str, Enum):
    """Outcome of a backend-confirmed operation."""
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class OperationResult:
    """Tagged result of an item cache operation."""
    status: OperationStatus
    affected: int = 0
    error: Optional[str] = None

    @classmethod
    def confirmed(cls, affected: int = 0) -> "OperationResult":
        return cls(status=OperationStatus.CONFIRMED, affected=affected)

    @classmethod
    def failed(cls, error: str) -> "OperationResult":
        return cls(status=OperationStatus.FAILED, error=error)

    @property
    def success(self) -> bool:
        return self.status == OperationStatus.CONFIRMED
