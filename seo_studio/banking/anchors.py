"""
Schema Node Anchors and Presets

Builders for the deterministic parts of the @graph:
- @id anchors (trailing slash only for Organization and WebSite)
- Organization / WebSite presets per channel
- BreadcrumbList inferred from the URL path
"""

import copy
import re
from typing import Any, Dict, List, Tuple
from urllib.parse import urlparse

from .rules import (
    CHANNEL_BASE_URLS,
    CHANNEL_NAMES,
    Channel,
    LANGUAGE_SEGMENTS,
    ORGANIZATION_PRESETS,
)

SITE_ANCHORS = ("organization", "website")


def _strip_query_and_fragment(url: str) -> str:
    return url.split("?")[0].split("#")[0]


def build_id(page_url: str, anchor: str) -> str:
    """
    Build a schema @id anchor.

    Organization and WebSite live at the site root with a trailing slash
    before the fragment; every other node hangs off the page URL as-is.
    """
    base_url = _strip_query_and_fragment(page_url.strip())

    if anchor in SITE_ANCHORS:
        match = re.match(r"^https?://[^/]+", base_url)
        domain = match.group(0) if match else base_url.rstrip("/")
        return f"{domain}/#{anchor}"

    return f"{base_url}#{anchor}"


def get_organization(channel: Channel) -> Dict[str, Any]:
    """Get a copy of the Organization preset for a channel."""
    return copy.deepcopy(ORGANIZATION_PRESETS[channel])


def get_website(channel: Channel) -> Dict[str, Any]:
    """Get the WebSite node for a channel."""
    base_url = CHANNEL_BASE_URLS[channel]

    return {
        "@type": "WebSite",
        "@id": f"{base_url}/#website",
        "url": base_url,
        "name": CHANNEL_NAMES[channel],
        "publisher": {"@id": f"{base_url}/#organization"},
        "potentialAction": {
            "@type": "SearchAction",
            "target": {
                "@type": "EntryPoint",
                "urlTemplate": f"{base_url}/search?q={{search_term_string}}",
            },
            "query-input": "required name=search_term_string",
        },
    }


def _humanize(segment: str) -> str:
    words = re.split(r"[-_]+", segment)
    return " ".join(w.capitalize() for w in words if w)


def _breadcrumb_items(page_url: str) -> List[Tuple[str, str]]:
    parsed = urlparse(_strip_query_and_fragment(page_url.strip()))
    root = f"{parsed.scheme}://{parsed.netloc}" if parsed.netloc else ""

    items = [("Home", f"{root}/")]
    path = ""
    for segment in parsed.path.split("/"):
        if not segment:
            continue
        path += f"/{segment}"
        if segment.lower() in LANGUAGE_SEGMENTS:
            continue
        items.append((_humanize(segment), f"{root}{path}"))
    return items


def infer_breadcrumb(page_url: str) -> List[str]:
    """
    Infer breadcrumb names from URL path segments.

    Example:
        /en/personal-banking/cards/credit-cards/skywards-infinite
        -> Home > Personal Banking > Cards > Credit Cards > Skywards Infinite
    """
    return [name for name, _ in _breadcrumb_items(page_url)]


def build_breadcrumb_list(page_url: str) -> Dict[str, Any]:
    """Build a BreadcrumbList node for a page URL."""
    return {
        "@type": "BreadcrumbList",
        "@id": build_id(page_url, "breadcrumb"),
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": position,
                "name": name,
                "item": url,
            }
            for position, (name, url) in enumerate(_breadcrumb_items(page_url), start=1)
        ],
    }
