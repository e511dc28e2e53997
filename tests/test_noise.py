import pytest

from site_research.parser.noise import clean_text, collapse_whitespace, is_noise


@pytest.mark.parametrize(
    "text",
    [
        "function(){ return x; }",
        "var tracking = true",
        "window.dataLayer = window.dataLayer || []",
        "@media (max-width: 600px) { .nav { display: none } }",
        "color: rgba(0, 0, 0, 0.5)",
        "-webkit-transition: all 0.2s",
        "unicode-range: U+0000-00FF",
        "\\u003cdiv\\u003e",
        "=========================",
        "12/34/56 -- 78:90 ++ 11.22 ## 33",
        "a" * 120,
    ],
)
def test_code_and_css_are_noise(text):
    assert is_noise(text)


@pytest.mark.parametrize(
    "text",
    [
        "We build tools for teams.",
        "Pro plan — $19.99/mo",
        "Contact us at hello@acme.io",
        "Founded in 2010 in Berlin, Acme now serves 4,000 customers.",
    ],
)
def test_prose_is_not_noise(text):
    assert not is_noise(text)


def test_empty_text_is_noise():
    assert is_noise("")


def test_clean_text_collapses_whitespace():
    assert clean_text("  Hello \n\t world  ") == "Hello world"
    assert clean_text("function(){ x }") == ""


def test_clean_text_accepts_custom_predicate():
    assert clean_text("keep me", predicate=lambda t: False) == "keep me"
    assert clean_text("drop me", predicate=lambda t: "drop" in t) == ""


def test_collapse_whitespace_handles_none():
    assert collapse_whitespace(None) == ""
