"""
Response Extractor for Assistant Replies

Recovers structured payloads from free-form model text in a fixed order:
- Marker spans (---NEW_VARIANT--- / ---NEW_SCHEMA---), preferred
- First fenced code block holding a variant or schema (json or untagged)
- Bare {...} object containing "@context" and "@graph"

Every parser attempt is total: JSON problems become warnings, never exceptions.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

VARIANT_START = "---NEW_VARIANT---"
VARIANT_END = "---END_VARIANT---"
SCHEMA_START = "---NEW_SCHEMA---"
SCHEMA_END = "---END_SCHEMA---"

VARIANT_MARKER_PATTERN = re.compile(
    re.escape(VARIANT_START) + r"([\s\S]*?)" + re.escape(VARIANT_END)
)
SCHEMA_MARKER_PATTERN = re.compile(
    re.escape(SCHEMA_START) + r"([\s\S]*?)" + re.escape(SCHEMA_END)
)
FENCED_BLOCK_PATTERN = re.compile(r"```(?P<lang>[\w+-]*)[ \t]*(?P<body>[\s\S]*?)\s*```")
JSON_BLOCK_TAGS = ("", "json")
BARE_SCHEMA_PATTERN = re.compile(r'\{[\s\S]*"@context"[\s\S]*"@graph"[\s\S]*\}')
BARE_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

SCHEMA_KEYS = ("@context", "@graph")
VARIANT_KEYS = ("metaTitle", "metaDescription")


@dataclass
class ExtractionResult:
    """Payloads recovered from one reply."""
    cleaned_text: str
    variant: Optional[Dict[str, Any]] = None
    schema: Optional[Dict[str, Any]] = None
    variant_method: Optional[str] = None  # "marker", "fenced"
    schema_method: Optional[str] = None  # "marker", "fenced", "bare"
    warnings: List[str] = field(default_factory=list)


def is_schema_payload(data: Any) -> bool:
    return isinstance(data, dict) and any(key in data for key in SCHEMA_KEYS)


def is_variant_payload(data: Any) -> bool:
    return isinstance(data, dict) and all(key in data for key in VARIANT_KEYS)


class ResponseExtractor:
    """
    Extracts SEO variants and schema graphs from assistant replies.

    Usage:
        extractor = ResponseExtractor()
        result = extractor.extract(reply_text)

        if result.variant:
            generation = generation.with_enhanced_variant(SEOVariant.from_dict(result.variant))
    """

    def extract(self, reply_text: str) -> ExtractionResult:
        """
        Run the parser chain over a reply.

        Args:
            reply_text: Raw text returned by the model

        Returns:
            ExtractionResult with cleaned text and any recovered payloads
        """
        text = reply_text or ""
        result = ExtractionResult(cleaned_text=self.strip_markers(text))

        # 1. Markers, each payload independently
        variant = self._parse_marker(text, VARIANT_MARKER_PATTERN, "variant", result.warnings)
        if variant is not None:
            result.variant, result.variant_method = variant, "marker"

        schema = self._parse_marker(text, SCHEMA_MARKER_PATTERN, "schema", result.warnings)
        if schema is not None:
            result.schema, result.schema_method = schema, "marker"

        # 2. Fenced block, only when markers produced nothing
        if result.variant is None and result.schema is None:
            kind, parsed = self._parse_fenced(result.cleaned_text, result.warnings)
            if kind == "schema":
                result.schema, result.schema_method = parsed, "fenced"
                logger.info("Extracted schema from markdown code block")
            elif kind == "variant":
                result.variant, result.variant_method = parsed, "fenced"
                logger.info("Extracted variant from markdown code block")

        # 3. Bare object, schema only
        if result.schema is None:
            schema = self._parse_bare_schema(result.cleaned_text, result.warnings)
            if schema is not None:
                result.schema, result.schema_method = schema, "bare"
                logger.info("Extracted schema from plain JSON")

        return result

    @staticmethod
    def strip_markers(text: str) -> str:
        """Remove every marker span, parsed or not."""
        cleaned = VARIANT_MARKER_PATTERN.sub("", text)
        cleaned = SCHEMA_MARKER_PATTERN.sub("", cleaned)
        return cleaned.strip()

    # =========================================================================
    # PARSER ATTEMPTS
    # =========================================================================

    def _parse_marker(
        self,
        text: str,
        pattern: "re.Pattern",
        label: str,
        warnings: List[str],
    ) -> Optional[Dict[str, Any]]:
        match = pattern.search(text)
        if not match:
            return None

        parsed = _loads(match.group(1), f"new {label}", warnings)
        if parsed is not None and not isinstance(parsed, dict):
            _warn(warnings, f"Marked {label} is not a JSON object")
            return None
        return parsed

    def _parse_fenced(
        self,
        text: str,
        warnings: List[str],
    ) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        for block in _json_blocks(text):
            parsed = _loads(block, "JSON code block", warnings)
            if is_schema_payload(parsed):
                return "schema", parsed
            if is_variant_payload(parsed):
                return "variant", parsed
        return None, None

    def _parse_bare_schema(self, text: str, warnings: List[str]) -> Optional[Dict[str, Any]]:
        match = BARE_SCHEMA_PATTERN.search(text)
        if not match:
            return None

        parsed = _loads(match.group(0), "plain JSON schema", warnings)
        return parsed if isinstance(parsed, dict) else None


def _json_blocks(text: str) -> List[str]:
    """Bodies of fenced blocks tagged json or left untagged, in order."""
    return [
        match.group("body")
        for match in FENCED_BLOCK_PATTERN.finditer(text)
        if match.group("lang").lower() in JSON_BLOCK_TAGS
    ]


def _warn(warnings: List[str], message: str) -> None:
    logger.warning(message)
    warnings.append(message)


def _loads(raw: str, label: str, warnings: List[str]) -> Any:
    try:
        return json.loads(raw.strip())
    except json.JSONDecodeError as e:
        _warn(warnings, f"Failed to parse {label}: {e}")
        return None


# =============================================================================
# PROVIDER REPLIES
# =============================================================================


def _direct(text: str) -> Optional[str]:
    return text.strip()


def _fenced(text: str) -> Optional[str]:
    blocks = _json_blocks(text)
    return blocks[0] if blocks else None


def _outermost(text: str) -> Optional[str]:
    match = BARE_OBJECT_PATTERN.search(text)
    return match.group(0) if match else None


_OBJECT_STRATEGIES: List[Tuple[str, Callable[[str], Optional[str]]]] = [
    ("direct", _direct),
    ("fenced", _fenced),
    ("bare", _outermost),
]


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """
    Recover one JSON object from a provider reply that may not be pure JSON.

    Returns:
        The first object found by direct parse, fenced block or outermost
        brace span; None when nothing parses
    """
    text = text or ""
    for method_name, locate in _OBJECT_STRATEGIES:
        candidate = locate(text)
        if not candidate:
            continue
        try:
            data = json.loads(candidate.strip())
        except json.JSONDecodeError as e:
            logger.debug(f"{method_name} JSON recovery failed: {e}")
            continue
        if isinstance(data, dict):
            logger.debug(f"Recovered provider JSON with {method_name}")
            return data

    logger.warning("No JSON object found in provider reply")
    return None


_default_extractor = ResponseExtractor()


def extract(reply_text: str) -> ExtractionResult:
    """Convenience wrapper around a shared ResponseExtractor."""
    return _default_extractor.extract(reply_text)
