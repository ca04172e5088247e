"""
Prompt Composition Tests
"""

import json
from dataclasses import replace

from seo_studio.audit import AuditInput, UploadedDocument
from seo_studio.models import PageType
from seo_studio.prompts import (
    BANKING_SCHEMA_INSTRUCTION,
    MAX_CONTENT_CHARS,
    build_assistant_system_prompt,
    build_audit_system_prompt,
    build_audit_user_message,
    build_generation_context,
    build_routing_hints,
)
from seo_studio.prompts.composer import ASSISTANT_FRAMING


EI_CARD_URL = "https://www.emiratesislamic.ae/en/cards/credit-cards/skywards-infinite"


class TestAuditSystemPrompt:
    """Tests for the audit system instruction."""

    def test_brand_context(self, ei_profile):
        prompt = build_audit_system_prompt(ei_profile)

        assert "BRAND CONTEXT: Emirates Islamic Bank PJSC (Emirates Islamic)" in prompt
        assert "- Website: https://www.emiratesislamic.ae/" in prompt
        assert "- Org Type: BankOrCreditUnion" in prompt

    def test_contract_demands_three_variants(self, enbd_profile):
        prompt = build_audit_system_prompt(enbd_profile)

        assert "EXACTLY 3 distinct SEO Growth Strategies" in prompt
        assert '"schemaJsonld": {' in prompt
        assert '"winnerIndex": 0' in prompt

    def test_banking_block_included(self, enbd_profile):
        assert BANKING_SCHEMA_INSTRUCTION.strip() in build_audit_system_prompt(enbd_profile)

    def test_presets_rendered(self):
        assert "{enbd_organization}" not in BANKING_SCHEMA_INSTRUCTION
        assert "{ei_organization}" not in BANKING_SCHEMA_INSTRUCTION
        assert '"@id": "https://www.emiratesnbd.com/#organization"' in BANKING_SCHEMA_INSTRUCTION
        assert '"@id": "https://www.emiratesislamic.ae/#organization"' in BANKING_SCHEMA_INSTRUCTION


class TestAuditUserMessage:
    """Tests for the task frame and routing hints."""

    def test_url_task(self, ei_profile):
        message = build_audit_user_message(AuditInput(url=EI_CARD_URL), ei_profile)

        assert message.startswith(f"Perform an Enterprise Growth Audit for this URL: {EI_CARD_URL}")
        assert "\n\n### Routing hints:\n" in message

    def test_url_hints(self, ei_profile):
        hints = build_routing_hints(AuditInput(url=EI_CARD_URL), ei_profile)

        assert hints[0] == "- Channel: Emirates Islamic (EI)"
        assert "- Detected page type: ProductPage" in hints
        assert "- Breadcrumb: Home > Cards > Credit Cards > Skywards Infinite" in hints

        aliases = next(h for h in hints if h.startswith("- Suggested alternateName values:"))
        assert "Skywards Infinite UAE" in aliases
        assert "Sharia compliant credit card" in aliases

    def test_islamic_terminology(self, ei_profile):
        hints = build_routing_hints(AuditInput(url=EI_CARD_URL), ei_profile)
        assert '- Use "Profit Rate" instead of "Interest Rate" in all copy' in hints

    def test_channel_follows_url_not_profile(self, enbd_profile):
        hints = build_routing_hints(AuditInput(url=EI_CARD_URL), enbd_profile)
        assert hints[0] == "- Channel: Emirates Islamic (EI)"

    def test_user_page_type_replaces_detection(self, ei_profile):
        hints = build_routing_hints(AuditInput(url=EI_CARD_URL), ei_profile, PageType.CAMPAIGN)

        assert "- Page type (selected by user): campaign" in hints
        assert not any(h.startswith("- Detected page type") for h in hints)

    def test_text_task_truncated(self, enbd_profile):
        text = "a" * (MAX_CONTENT_CHARS + 5000)

        message = build_audit_user_message(AuditInput(text=text), enbd_profile)

        assert message.startswith("Semantic analysis of provided content: ")
        assert "a" * MAX_CONTENT_CHARS in message
        assert "a" * (MAX_CONTENT_CHARS + 1) not in message

    def test_text_hints_use_profile_channel(self, enbd_profile):
        hints = build_routing_hints(AuditInput(text="Limited time promotion"), enbd_profile)

        assert hints[0] == "- Channel: Emirates NBD (ENBD)"
        assert "- Detected page type: CampaignPage" in hints
        assert not any(h.startswith("- Breadcrumb") for h in hints)
        assert not any("Profit Rate" in h for h in hints)

    def test_document_task(self, ei_profile):
        document = UploadedDocument.from_bytes("home-finance-brochure.pdf", b"%PDF-1.4", "application/pdf")

        message = build_audit_user_message(AuditInput(document=document), ei_profile)

        assert message.startswith("Deep-dive analysis of the attached document.")
        assert "- Detected page type: ProductPage" in message


class TestAssistantPrompt:
    """Tests for the assistant framing and generation context."""

    def test_framing_without_generation(self):
        prompt = build_assistant_system_prompt()

        assert prompt == ASSISTANT_FRAMING
        assert "---NEW_VARIANT---" in prompt
        assert "---END_SCHEMA---" in prompt

    def test_generation_context(self, generation):
        context = build_generation_context(generation)

        assert context.startswith("Current SEO Generation Context:")
        assert "- URL: https://www.emiratesislamic.ae/en/cards/skywards-infinite" in context
        assert "- Page Type: product" in context
        assert "Variant 3:" in context
        assert "Recommended Variant: Variant 2" in context
        assert "- Visibility: 82/100" in context
        assert "Current Schema:\n" + json.dumps(generation.schema_jsonld, indent=2) in context

    def test_context_omits_missing_sections(self, generation):
        bare = replace(generation, ai_recommendation=None, strategic_impact=None, schema_jsonld=None)

        context = build_generation_context(bare)

        assert "Recommended Variant" not in context
        assert "Strategic Impact Scores" not in context
        assert "Current Schema" not in context

    def test_framing_with_generation(self, generation):
        prompt = build_assistant_system_prompt(generation)

        assert prompt.startswith(ASSISTANT_FRAMING)
        assert prompt.endswith(build_generation_context(generation))
