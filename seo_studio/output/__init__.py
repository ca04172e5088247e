"""
Output extraction for model replies.

Usage:
    from seo_studio.output import extract

    result = extract(reply_text)
    print(result.cleaned_text, result.variant, result.schema)
"""

from .extractor import (
    ResponseExtractor,
    ExtractionResult,
    extract,
    extract_json_object,
    is_schema_payload,
    is_variant_payload,
)

__all__ = [
    "ResponseExtractor",
    "ExtractionResult",
    "extract",
    "extract_json_object",
    "is_schema_payload",
    "is_variant_payload",
]
