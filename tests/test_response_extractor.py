"""
Test Suite for Assistant Reply Extraction

Tests marker, fenced-block and bare-object recovery of variants and schemas.
"""

import json

import pytest

from seo_studio.output import (
    ResponseExtractor,
    extract,
    extract_json_object,
    is_schema_payload,
    is_variant_payload,
)


VARIANT = {
    "h1": "Skywards Infinite Credit Card",
    "metaTitle": "Skywards Infinite Card | Emirates Islamic",
    "metaDescription": "Earn Skywards miles with a Sharia compliant card.",
    "keyphrases": ["Islamic credit card UAE"],
    "rationale": "Miles first",
}

SCHEMA = {
    "@context": "https://schema.org",
    "@graph": [{"@type": "Organization", "name": "Emirates Islamic"}],
}


def marked(kind: str, payload) -> str:
    body = payload if isinstance(payload, str) else json.dumps(payload)
    return f"---NEW_{kind}---\n{body}\n---END_{kind}---"


@pytest.fixture
def extractor():
    return ResponseExtractor()


class TestMarkers:
    """Marker spans are preferred and always stripped."""

    def test_variant_marker(self, extractor):
        reply = "Here is a sharper option.\n" + marked("VARIANT", VARIANT) + "\nLet me know."

        result = extractor.extract(reply)

        assert result.variant == VARIANT
        assert result.variant_method == "marker"
        assert result.schema is None
        assert "---NEW_VARIANT---" not in result.cleaned_text
        assert result.cleaned_text.startswith("Here is a sharper option.")
        assert result.cleaned_text.endswith("Let me know.")

    def test_both_markers(self, extractor):
        reply = "Done.\n" + marked("VARIANT", VARIANT) + "\n" + marked("SCHEMA", SCHEMA)

        result = extractor.extract(reply)

        assert result.variant == VARIANT
        assert result.schema == SCHEMA
        assert result.schema_method == "marker"
        assert result.cleaned_text == "Done."

    def test_malformed_marker_is_stripped_with_warning(self, extractor):
        reply = "Try this.\n" + marked("VARIANT", '{"metaTitle": "broken"')

        result = extractor.extract(reply)

        assert result.variant is None
        assert result.cleaned_text == "Try this."
        assert len(result.warnings) == 1
        assert "new variant" in result.warnings[0]

    def test_marked_array_is_rejected(self, extractor):
        result = extractor.extract(marked("SCHEMA", [1, 2]))

        assert result.schema is None
        assert result.warnings == ["Marked schema is not a JSON object"]

    def test_one_bad_marker_does_not_block_the_other(self, extractor):
        reply = marked("VARIANT", "{oops") + marked("SCHEMA", SCHEMA)

        result = extractor.extract(reply)

        assert result.variant is None
        assert result.schema == SCHEMA


class TestFallbacks:
    """Fenced blocks and bare schema objects."""

    def test_fenced_schema(self, extractor):
        reply = "Updated graph:\n```json\n" + json.dumps(SCHEMA, indent=2) + "\n```"

        result = extractor.extract(reply)

        assert result.schema == SCHEMA
        assert result.schema_method == "fenced"
        assert result.variant is None

    def test_fenced_variant(self, extractor):
        reply = "```\n" + json.dumps(VARIANT) + "\n```"

        result = extractor.extract(reply)

        assert result.variant == VARIANT
        assert result.variant_method == "fenced"

    def test_fenced_unrelated_object_ignored(self, extractor):
        result = extractor.extract('```json\n{"tip": "shorter title"}\n```')

        assert result.variant is None
        assert result.schema is None

    def test_non_json_block_before_payload(self, extractor):
        reply = (
            "Suggested markup:\n```html\n<h1>Skywards Infinite</h1>\n```\n"
            "And the variant:\n```json\n" + json.dumps(VARIANT) + "\n```"
        )

        result = extractor.extract(reply)

        assert result.variant == VARIANT
        assert result.variant_method == "fenced"
        assert result.warnings == []

    def test_later_block_used_when_first_is_not_a_payload(self, extractor):
        reply = '```json\n{"tip": "shorter title"}\n```\n```json\n' + json.dumps(SCHEMA) + "\n```"

        result = extractor.extract(reply)

        assert result.schema == SCHEMA
        assert result.schema_method == "fenced"

    def test_fenced_skipped_when_marker_found(self, extractor):
        other = dict(VARIANT, metaTitle="Fenced title")
        reply = marked("VARIANT", VARIANT) + "\n```json\n" + json.dumps(other) + "\n```"

        result = extractor.extract(reply)

        assert result.variant["metaTitle"] == VARIANT["metaTitle"]

    def test_bare_schema(self, extractor):
        reply = "Use this graph " + json.dumps(SCHEMA) + " on the page."

        result = extractor.extract(reply)

        assert result.schema == SCHEMA
        assert result.schema_method == "bare"

    def test_bare_schema_invalid_json_warns(self, extractor):
        result = extractor.extract('{"@context": "x", "@graph": [,]}')

        assert result.schema is None
        assert any("plain JSON schema" in w for w in result.warnings)

    def test_plain_text(self, extractor):
        result = extractor.extract("  Your meta title is already strong.  ")

        assert result.cleaned_text == "Your meta title is already strong."
        assert result.variant is None
        assert result.schema is None
        assert result.warnings == []

    def test_empty_reply(self):
        result = extract(None)

        assert result.cleaned_text == ""
        assert result.variant is None


class TestPayloadPredicates:

    def test_schema_needs_context_or_graph(self):
        assert is_schema_payload({"@graph": []})
        assert is_schema_payload({"@context": "https://schema.org"})
        assert not is_schema_payload({"name": "x"})
        assert not is_schema_payload("@graph")

    def test_variant_needs_title_and_description(self):
        assert is_variant_payload({"metaTitle": "", "metaDescription": ""})
        assert not is_variant_payload({"metaTitle": "x"})


class TestExtractJsonObject:
    """Recovery of the audit object from provider replies."""

    def test_direct(self):
        assert extract_json_object('{"pageType": "product"}') == {"pageType": "product"}

    def test_fenced(self):
        text = 'Here you go:\n```json\n{"pageType": "faq"}\n```'
        assert extract_json_object(text) == {"pageType": "faq"}

    def test_fenced_skips_other_languages(self):
        text = 'Page:\n```html\n<p>x</p>\n```\n```json\n{"pageType": "offer"}\n```'
        assert extract_json_object(text) == {"pageType": "offer"}

    def test_outermost_braces(self):
        text = 'Result: {"seoVariants": [{"h1": "A"}]} end'
        assert extract_json_object(text) == {"seoVariants": [{"h1": "A"}]}

    @pytest.mark.parametrize("text", ["", "no json here", "[1, 2, 3]", "{broken"])
    def test_nothing_recoverable(self, text):
        assert extract_json_object(text) is None
