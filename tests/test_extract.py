import pytest

from parking_radar.extract import (
    HTML_TOKEN_PATTERNS,
    extract_from_html,
    extract_from_json,
)


EMBEDDINGS = [
    '<input type="hidden" name="__RequestVerificationToken" value="tok-hidden" />',
    '<input name="__RequestVerificationToken" type="hidden" value="tok-input">',
    '<script>var cfg = {"__RequestVerificationToken": "tok-json"};</script>',
    "<script>window.antiForgeryToken = 'tok-window';</script>",
    '<div id="app" data-antiforgery-token="tok-data"></div>',
    "<script>var cfg = {'__RequestVerificationToken': 'tok-single'};</script>",
]


def test_six_patterns_in_fixed_order():
    assert len(HTML_TOKEN_PATTERNS) == 6


@pytest.mark.parametrize(
    "snippet, expected",
    list(
        zip(
            EMBEDDINGS,
            [
                "tok-hidden",
                "tok-input",
                "tok-json",
                "tok-window",
                "tok-data",
                "tok-single",
            ],
        )
    ),
)
def test_extract_each_embedding(snippet, expected):
    html = f"<html><body>{snippet}</body></html>"
    assert extract_from_html(html) == expected


def test_extract_is_case_insensitive():
    html = '<INPUT NAME="__requestverificationtoken" VALUE="abc">'
    assert extract_from_html(html) == "abc"


def test_pattern_order_beats_document_order():
    """A later hidden field wins over an earlier script assignment."""
    html = (
        "<script>window.antiForgeryToken = 'from-script';</script>"
        '<form><input name="__RequestVerificationToken" value="from-form"></form>'
    )
    assert extract_from_html(html) == "from-form"


@pytest.mark.parametrize(
    "html",
    [
        "",
        None,
        "<html><body><p>no token here</p></body></html>",
        '<input name="__RequestVerificationToken" value="">',
        "<<<not html at all",
    ],
)
def test_extract_from_html_not_found(html):
    assert extract_from_html(html) is None


def test_extract_from_json_fields():
    assert extract_from_json('{"token": "t1"}') == "t1"
    assert extract_from_json('{"antiforgeryToken": "t2"}') == "t2"
    assert extract_from_json('{"__RequestVerificationToken": "t3"}') == "t3"


def test_extract_from_json_priority():
    body = '{"__RequestVerificationToken": "c", "antiforgeryToken": "b", "token": "a"}'
    assert extract_from_json(body) == "a"


def test_extract_from_json_skips_empty_fields():
    assert extract_from_json('{"token": "", "antiforgeryToken": "b"}') == "b"


@pytest.mark.parametrize(
    "body",
    [
        "",
        None,
        "{",
        "<html></html>",
        '{"token": ',
        "not json",
        "[1, 2, 3]",
        '"just a string"',
        "null",
        '{"other": "x"}',
        '{"token": 123}',
    ],
)
def test_extract_from_json_never_raises(body):
    assert extract_from_json(body) is None
