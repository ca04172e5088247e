#!/usr/bin/env python3
"""
Audit Runner

Runs one audit from the command line and stores it in the local archive.

Usage:
    # Set environment variables first:
    export GEMINI_API_KEY=your_key
    export OPENAI_API_KEY=your_key

    # Audit a URL:
    python scripts/run_audit.py --url https://www.emiratesislamic.ae/en/cards/credit-cards --profile ei

    # Audit a document or pasted content with OpenAI:
    python scripts/run_audit.py --file brochure.pdf --profile enbd --provider openai
    python scripts/run_audit.py --text "$(cat page.html)" --page-type product
"""

import argparse
import asyncio
import json
import logging
import mimetypes
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def run_audit(
    url: str = "",
    text: str = "",
    file_path: str = None,
    profile_id: str = "ei",
    provider: str = "gemini",
    page_type: str = None,
    save: bool = True,
    output: str = None,
):
    """Run one audit and print a summary."""

    load_dotenv()

    from seo_studio.audit import AuditInput, AuditOrchestrator, UploadedDocument, result_payload
    from seo_studio.errors import AuditError, describe_error
    from seo_studio.models import PageType
    from seo_studio.persistence import GenerationArchive, HistoryStore
    from seo_studio.profiles import get_profile
    from seo_studio.providers import get_adapter
    from seo_studio.utils.config import get_settings

    settings = get_settings()
    profile = get_profile(profile_id)

    document = None
    if file_path:
        path = Path(file_path)
        mime_type, _ = mimetypes.guess_type(path.name)
        document = UploadedDocument.from_bytes(
            path.name, path.read_bytes(), mime_type, max_bytes=settings.MAX_UPLOAD_BYTES
        )

    audit_input = AuditInput(url=url, text=text, document=document)

    print(f"\n{'='*70}")
    print("BANKING SEO STUDIO - AUDIT")
    print(f"{'='*70}")
    print(f"Source:       {audit_input.source_label}")
    print(f"Profile:      {profile.name}")
    print(f"Provider:     {provider}")
    print(f"Page Type:    {page_type or 'auto'}")
    print(f"{'='*70}\n")

    start_time = datetime.now()

    orchestrator = AuditOrchestrator(
        adapter_factory=lambda p: get_adapter(p, settings),
        timeout_seconds=settings.AUDIT_TIMEOUT,
    )

    try:
        generation = await orchestrator.run_audit(
            audit_input,
            profile,
            provider,
            page_type_override=PageType(page_type) if page_type else None,
        )
    except AuditError as e:
        report = describe_error(e)
        print(f"✗ {report.message} ({report.type})")
        return None

    for idx, variant in enumerate(generation.seo_variants, start=1):
        print(f"Variant {idx}: {variant.meta_title}")
        print(f"  H1:          {variant.h1}")
        print(f"  Description: {variant.meta_description}")
        print(f"  Best for:    {variant.best_for}")

    if generation.ai_recommendation:
        print(f"\nRecommended: Variant {generation.ai_recommendation.winner_index + 1}")

    if generation.strategic_impact:
        impact = generation.strategic_impact
        print(
            f"Scores: visibility {impact.visibility_score}, "
            f"trust {impact.trust_score}, compliance {impact.compliance_score}"
        )

    for source in generation.grounding_sources:
        print(f"Source: {source.title} - {source.uri}")

    if save:
        GenerationArchive(HistoryStore(settings.HISTORY_DIR)).add(generation)
        print(f"\n✓ Archived as {generation.id}")

    if output:
        Path(output).write_text(json.dumps(result_payload(generation), indent=2), encoding="utf-8")
        print(f"✓ Result written to {output}")

    duration = (datetime.now() - start_time).total_seconds()
    print(f"\nDuration: {duration:.1f} seconds")

    return generation


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run a banking SEO audit for a URL, document or pasted content"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", default="", help="Page URL to audit")
    source.add_argument("--text", default="", help="Pasted page content")
    source.add_argument("--file", default=None, help="Document to upload (max 15MB)")
    parser.add_argument(
        "--profile",
        default="ei",
        choices=["ei", "enbd"],
        help="Brand profile (default: ei)"
    )
    parser.add_argument(
        "--provider",
        default="gemini",
        choices=["gemini", "openai"],
        help="Model provider (default: gemini)"
    )
    parser.add_argument(
        "--page-type",
        default=None,
        choices=["product", "campaign", "offer", "press_release", "generic"],
        help="Page type override (default: let the model decide)"
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the result JSON to this file"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not add the generation to the local archive"
    )

    args = parser.parse_args()

    generation = asyncio.run(run_audit(
        url=args.url,
        text=args.text,
        file_path=args.file,
        profile_id=args.profile,
        provider=args.provider,
        page_type=args.page_type,
        save=not args.no_save,
        output=args.output,
    ))

    if generation is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
