from __future__ import annotations

import re

from bs4 import BeautifulSoup

_WS = re.compile(r"\s+")
_HIDDEN = ("head", "script", "style", "noscript", "template")


def _norm(s: str) -> str:
    return _WS.sub(" ", s).strip()


def html_to_text(html: str) -> str:
    """Visible body text of an HTML document, whitespace collapsed.

    Tag boundaries become spaces so adjacent cells and list items do not
    fuse into a single token.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(list(_HIDDEN)):
        tag.decompose()
    return _norm(soup.get_text(" "))


def extract_title(html: str) -> str | None:
    soup = BeautifulSoup(html, "html.parser")

    tag = soup.find("meta", attrs={"property": "og:title"}) or soup.find(
        "meta", attrs={"name": "title"}
    )
    if tag and tag.get("content"):
        title = _norm(str(tag["content"]))
        if title:
            return title

    if soup.title and soup.title.string:
        title = _norm(str(soup.title.string))
        if title:
            return title

    heading = soup.find("h1")
    if heading:
        return _norm(heading.get_text(" ")) or None
    return None
