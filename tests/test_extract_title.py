from __future__ import annotations

from processing.text import extract_title, html_to_text


def test_extract_title_from_meta():
    html = '<html><head><meta property="og:title" content="OG Title"/></head><body></body></html>'
    assert extract_title(html) == "OG Title"


def test_extract_title_from_h1_when_no_title():
    html = "<html><body><h1>Heading Title</h1><p>Body text</p></body></html>"
    assert extract_title(html) == "Heading Title"


def test_extract_title_missing():
    assert extract_title("<p>just text</p>") is None


def test_html_to_text_drops_scripts_and_separates_blocks():
    html = "<ul><li>red</li><li>fish</li></ul><style>p {}</style><script>x()</script>"
    assert html_to_text(html) == "red fish"
