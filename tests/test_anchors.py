"""
Schema Anchor, Preset and Breadcrumb Tests
"""

import pytest

from seo_studio.banking import (
    Channel,
    build_breadcrumb_list,
    build_id,
    get_organization,
    get_website,
    infer_breadcrumb,
)


PAGE_URL = "https://www.emiratesnbd.com/en/cards/credit-cards/skywards-infinite"


class TestBuildId:
    """Tests for build_id()."""

    @pytest.mark.parametrize("page_url", [
        PAGE_URL,
        PAGE_URL + "/",
        PAGE_URL + "?utm_source=x",
        PAGE_URL + "#section",
        "https://www.emiratesnbd.com",
        "https://www.emiratesnbd.com/",
    ])
    def test_organization_at_site_root(self, page_url):
        assert build_id(page_url, "organization") == "https://www.emiratesnbd.com/#organization"

    def test_website_at_site_root(self):
        assert build_id(PAGE_URL, "website") == "https://www.emiratesnbd.com/#website"

    def test_page_nodes_have_no_inserted_slash(self):
        assert build_id(PAGE_URL, "faq") == PAGE_URL + "#faq"

    def test_query_and_fragment_removed(self):
        assert build_id(PAGE_URL + "?a=1#top", "faq") == PAGE_URL + "#faq"

    def test_existing_trailing_slash_kept(self):
        assert build_id(PAGE_URL + "/", "card") == PAGE_URL + "/#card"


class TestPresets:
    """Organization and WebSite presets."""

    def test_organization_copy_is_independent(self):
        org = get_organization(Channel.EI)
        org["name"] = "changed"

        assert get_organization(Channel.EI)["name"] == "Emirates Islamic"

    def test_organization_ids(self):
        assert get_organization(Channel.ENBD)["@id"] == "https://www.emiratesnbd.com/#organization"
        assert get_organization(Channel.EI)["@id"] == "https://www.emiratesislamic.ae/#organization"

    def test_website_references_organization(self):
        website = get_website(Channel.EI)

        assert website["@id"] == "https://www.emiratesislamic.ae/#website"
        assert website["publisher"] == {"@id": "https://www.emiratesislamic.ae/#organization"}
        assert website["potentialAction"]["@type"] == "SearchAction"


class TestBreadcrumbs:
    """Breadcrumb inference from URL paths."""

    def test_infer_breadcrumb(self):
        assert infer_breadcrumb(PAGE_URL) == [
            "Home", "Cards", "Credit Cards", "Skywards Infinite",
        ]

    def test_language_segment_skipped(self):
        assert infer_breadcrumb("https://www.emiratesislamic.ae/ar/home-finance") == ["Home", "Home Finance"]

    def test_root_url(self):
        assert infer_breadcrumb("https://www.emiratesnbd.com/") == ["Home"]

    def test_breadcrumb_list(self):
        node = build_breadcrumb_list(PAGE_URL + "?ref=nav")
        items = node["itemListElement"]

        assert node["@type"] == "BreadcrumbList"
        assert node["@id"] == PAGE_URL + "#breadcrumb"
        assert [i["position"] for i in items] == [1, 2, 3, 4]
        assert items[0]["item"] == "https://www.emiratesnbd.com/"
        assert items[1]["item"] == "https://www.emiratesnbd.com/en/cards"
        assert items[-1]["item"] == PAGE_URL
