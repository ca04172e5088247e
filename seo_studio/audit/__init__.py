"""
Audit pipeline: inputs, orchestration and Generation records.
"""

from .upload import (
    AuditInput,
    UploadedDocument,
    MAX_UPLOAD_BYTES,
    FILE_TOO_LARGE_MESSAGE,
)
from .orchestrator import (
    AuditOrchestrator,
    DEFAULT_TIMEOUT_SECONDS,
    result_payload,
)

__all__ = [
    "AuditInput",
    "UploadedDocument",
    "MAX_UPLOAD_BYTES",
    "FILE_TOO_LARGE_MESSAGE",
    "AuditOrchestrator",
    "DEFAULT_TIMEOUT_SECONDS",
    "result_payload",
]
