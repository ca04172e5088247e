"""
Generation History API

Endpoints:
- GET /api/history - All archived generations, newest first
- DELETE /api/history/{generation_id} - Remove a generation
- POST /api/history/{generation_id}/variants - Add an assistant variant
- PUT /api/history/{generation_id}/schema - Replace the schema graph
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status

from seo_studio.errors import InputValidationError
from seo_studio.models import SEOVariant
from seo_studio.output import is_schema_payload, is_variant_payload
from seo_studio.persistence import GenerationArchive

from .dependencies import get_archive

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/history", tags=["History"])


def _not_found(generation_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Generation {generation_id} not found",
    )


@router.get("")
async def list_history(archive: GenerationArchive = Depends(get_archive)):
    return [g.to_dict() for g in archive.snapshot]


@router.delete("/{generation_id}")
async def delete_generation(
    generation_id: str,
    archive: GenerationArchive = Depends(get_archive),
):
    if archive.get(generation_id) is None:
        raise _not_found(generation_id)

    remaining = archive.delete(generation_id)
    return {"deleted": generation_id, "remaining": len(remaining)}


@router.post("/{generation_id}/variants")
async def add_variant(
    generation_id: str,
    variant: Dict[str, Any] = Body(...),
    archive: GenerationArchive = Depends(get_archive),
):
    """Append a variant proposed by the assistant (marked as enhanced)."""
    if not is_variant_payload(variant):
        raise InputValidationError("Variant must include metaTitle and metaDescription")

    try:
        updated = archive.add_enhanced_variant(generation_id, SEOVariant.from_dict(variant))
    except KeyError:
        raise _not_found(generation_id) from None

    return updated.to_dict()


@router.put("/{generation_id}/schema")
async def replace_schema(
    generation_id: str,
    schema: Dict[str, Any] = Body(...),
    archive: GenerationArchive = Depends(get_archive),
):
    """Replace the schema graph with one proposed by the assistant."""
    if not is_schema_payload(schema):
        raise InputValidationError("Schema must include @context or @graph")

    try:
        updated = archive.replace_schema(generation_id, schema)
    except KeyError:
        raise _not_found(generation_id) from None

    return updated.to_dict()
