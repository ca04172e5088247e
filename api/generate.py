"""
Audit API

Endpoints:
- POST /api/generate - Run an audit and archive the resulting generation
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from seo_studio.audit import AuditInput, AuditOrchestrator, result_payload
from seo_studio.errors import InputValidationError
from seo_studio.models import BrandProfile, ModelProvider, PageType
from seo_studio.persistence import GenerationArchive
from seo_studio.profiles import get_profile
from seo_studio.utils.config import get_settings

from .dependencies import get_archive, get_orchestrator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Audit"])


# =============================================================================
# REQUEST MODELS
# =============================================================================

class DocumentPayload(BaseModel):
    """Uploaded document, base64 encoded."""
    data: str
    mimeType: str = "application/octet-stream"
    name: Optional[str] = None


class GenerateRequest(BaseModel):
    """
    Request to run an audit.

    input is a URL (isUrl=true), pasted content, or a document payload.
    The brand is given either as a full profile or by profileId.
    """
    input: Optional[Union[DocumentPayload, str]] = None
    profile: Optional[Dict[str, Any]] = None
    profileId: Optional[str] = None
    isUrl: bool = False
    modelProvider: ModelProvider = ModelProvider.GEMINI
    pageType: Optional[str] = Field(
        default=None,
        description="Page type override; omit or 'auto' to let the model decide",
    )


def resolve_profile(request: GenerateRequest) -> BrandProfile:
    """
    Resolve the brand profile for a request.

    Raises:
        InputValidationError: If no profile is given or the id is unknown
    """
    if request.profileId:
        try:
            return get_profile(request.profileId)
        except KeyError:
            raise InputValidationError(f"Unknown profile: {request.profileId}") from None

    if request.profile:
        if not request.profile.get("domain"):
            raise InputValidationError("Profile must include a domain")
        return BrandProfile.from_dict(request.profile)

    raise InputValidationError("Invalid request payload: input and profile required")


def resolve_page_type(value: Optional[str]) -> Optional[PageType]:
    if not value or value == "auto":
        return None
    page_type = PageType.coerce(value)
    if page_type is None:
        raise InputValidationError(f"Unknown page type: {value}")
    return page_type


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/generate")
async def generate(
    request: GenerateRequest,
    orchestrator: AuditOrchestrator = Depends(get_orchestrator),
    archive: GenerationArchive = Depends(get_archive),
):
    """
    Run an audit.

    Returns the result as a JSON string (data), the archived generation, and
    any grounding sources.
    """
    settings = get_settings()
    profile = resolve_profile(request)

    payload = request.input.model_dump() if isinstance(request.input, DocumentPayload) else request.input
    audit_input = AuditInput.from_request(payload, is_url=request.isUrl, max_bytes=settings.MAX_UPLOAD_BYTES)

    generation = await orchestrator.run_audit(
        audit_input,
        profile,
        request.modelProvider,
        page_type_override=resolve_page_type(request.pageType),
    )
    archive.add(generation)

    return {
        "data": json.dumps(result_payload(generation)),
        "generation": generation.to_dict(),
        "groundingSources": [s.to_dict() for s in generation.grounding_sources],
    }
