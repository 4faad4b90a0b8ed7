# Schemas module
from .resolution import ContentResolution, ContentSource, TriggerExtraction
from .results import OperationResult, OperationStatus

__all__ = [
    "ContentResolution",
    "ContentSource",
    "TriggerExtraction",
    "OperationResult",
    "OperationStatus"
]
