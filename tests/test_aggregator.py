from site_research.aggregator import merge, merge_text
from site_research.crawler.models import AggregatedResult, ContactInfo, ExtractedPageData


def page(**kwargs) -> ExtractedPageData:
    return ExtractedPageData(**kwargs)


def test_first_non_empty_scalar_wins():
    result = merge(AggregatedResult(), page(title="", meta_description="First"), "https://site.com/")
    result = merge(result, page(title="Acme", meta_description="Second"), "https://site.com/a")
    result = merge(result, page(title="Other", meta_description=""), "https://site.com/b")
    assert result.title == "Acme"
    assert result.meta_description == "First"


def test_arrays_concatenate_in_order_without_dedup():
    base = AggregatedResult(headings=["Base"])
    a = page(headings=["A1", "Shared"], paragraphs=["pa"])
    b = page(headings=["Shared", "B1"], paragraphs=["pb", "pa"])
    result = merge(merge(base, a, "https://site.com/a"), b, "https://site.com/b")
    assert result.headings == base.headings + a.headings + b.headings
    assert result.paragraphs == ["pa", "pb", "pa"]


def test_long_text_joined_with_blank_line():
    result = merge(AggregatedResult(about_content="Intro"), page(about_content="More"), "u")
    assert result.about_content == "Intro\n\nMore"
    result = merge(result, page(pricing_info="$5"), "v")
    assert result.pricing_info == "$5"
    assert result.about_content == "Intro\n\nMore"


def test_merge_text():
    assert merge_text("", "") == ""
    assert merge_text("a", "") == "a"
    assert merge_text("", "b") == "b"
    assert merge_text("a", "b") == "a\n\nb"


def test_contact_info_concatenated_without_dedup():
    first = page(contact_info=ContactInfo(emails=["a@acme.io"], phones=["555-123-4567"]))
    second = page(contact_info=ContactInfo(emails=["a@acme.io"], social_links=["https://x.com/acme"]))
    result = merge(merge(AggregatedResult(), first, "u1"), second, "u2")
    assert result.contact_info.emails == ["a@acme.io", "a@acme.io"]
    assert result.contact_info.phones == ["555-123-4567"]
    assert result.contact_info.social_links == ["https://x.com/acme"]


def test_subpages_appended_and_base_untouched():
    base = AggregatedResult(headings=["h"], subpages_scraped=["https://site.com/"])
    result = merge(base, page(headings=["x"]), "https://site.com/about")
    assert result.subpages_scraped == ["https://site.com/", "https://site.com/about"]
    assert base.subpages_scraped == ["https://site.com/"]
    assert base.headings == ["h"]


def test_to_dict_uses_public_keys():
    result = merge(AggregatedResult(), page(title="Acme", meta_description="d"), "https://site.com/")
    data = result.to_dict()
    assert data["metaDescription"] == "d"
    assert data["subpagesScraped"] == ["https://site.com/"]
    assert set(data["contactInfo"]) == {"emails", "phones", "socialLinks"}
