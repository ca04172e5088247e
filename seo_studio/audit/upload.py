"""
Audit inputs: URL, pasted content or an uploaded document.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..errors import InputValidationError

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 15 * 1024 * 1024
FILE_TOO_LARGE_MESSAGE = "File too large. Please upload a document under 15MB."
MISSING_SOURCE_MESSAGE = "Please provide a URL, pasted content or a document to audit."
MULTIPLE_SOURCES_MESSAGE = "Please provide only one source: a URL, pasted content or a document."
DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class UploadedDocument:
    """A document read into memory and base64-encoded for the provider."""
    name: str
    data: str
    mime_type: str = DEFAULT_MIME_TYPE

    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.data)

    @classmethod
    def from_bytes(
        cls,
        name: str,
        raw: bytes,
        mime_type: Optional[str] = None,
        max_bytes: int = MAX_UPLOAD_BYTES,
    ) -> "UploadedDocument":
        """
        Build a document from raw bytes.

        Raises:
            InputValidationError: If the file exceeds max_bytes
        """
        if len(raw) > max_bytes:
            logger.info(f"Rejected upload {name}: {len(raw)} bytes")
            raise InputValidationError(FILE_TOO_LARGE_MESSAGE)

        return cls(
            name=name or "document",
            data=base64.b64encode(raw).decode("ascii"),
            mime_type=mime_type or DEFAULT_MIME_TYPE,
        )

    @classmethod
    def from_payload(
        cls,
        payload: Dict[str, Any],
        max_bytes: int = MAX_UPLOAD_BYTES,
    ) -> "UploadedDocument":
        """
        Build a document from an API body `{data, mimeType, name?}`.

        Raises:
            InputValidationError: If data is missing, not base64 or too large
        """
        data = payload.get("data") or ""
        if not data:
            raise InputValidationError(MISSING_SOURCE_MESSAGE)

        try:
            raw = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InputValidationError("Uploaded document is not valid base64.") from e

        return cls.from_bytes(
            name=payload.get("name") or "document",
            raw=raw,
            mime_type=payload.get("mimeType"),
            max_bytes=max_bytes,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "data": self.data, "mimeType": self.mime_type}


@dataclass(frozen=True)
class AuditInput:
    """
    The source submitted for one audit.

    Exactly one of url / text / document is set once validate() passes.
    """
    url: str = ""
    text: str = ""
    document: Optional[UploadedDocument] = None

    @property
    def is_url(self) -> bool:
        return bool(self.url)

    @property
    def source_label(self) -> str:
        """Label stored on the Generation."""
        if self.url:
            return self.url
        if self.document is not None:
            return self.document.name
        if self.text:
            return "Manual Context"
        return "Manual Audit"

    def validate(self) -> "AuditInput":
        """
        Check that exactly one source is present.

        Raises:
            InputValidationError: If no source or more than one source is given
        """
        present = [bool(self.url), bool(self.text), self.document is not None]
        if not any(present):
            raise InputValidationError(MISSING_SOURCE_MESSAGE)
        if sum(present) > 1:
            raise InputValidationError(MULTIPLE_SOURCES_MESSAGE)
        return self

    @classmethod
    def from_request(
        cls,
        payload: Union[str, Dict[str, Any], None],
        is_url: bool = False,
        max_bytes: int = MAX_UPLOAD_BYTES,
    ) -> "AuditInput":
        """
        Build an input from the API shape `input: str | {data, mimeType, name?}`.

        Strings are URLs when is_url is set, pasted content otherwise.
        """
        if isinstance(payload, dict):
            return cls(document=UploadedDocument.from_payload(payload, max_bytes=max_bytes))

        value = (payload or "").strip()
        if is_url:
            return cls(url=value)
        return cls(text=value)
