from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.main import app
from search.pipeline import Doc, search_docs

client = TestClient(app)


def test_post_search_with_docs_ranks_expected_top():
    payload = {
        "query": "python typing",
        "top_k": 2,
        "docs": [
            {
                "id": "a",
                "title": "Intro to Cooking",
                "content": "Recipes and ingredients for delicious meals.",
            },
            {
                "id": "b",
                "title": "Advanced Python",
                "content": "Typing in Python with mypy and type hints.",
            },
        ],
    }
    r = client.post("/search", json=payload)
    assert r.status_code == 200
    data = r.json()
    ranked = data["ranked"]
    assert len(ranked) == 2
    assert ranked[0]["id"] == "b"
    assert ranked[1]["score"] == 0.0


def test_post_search_html_document():
    html = (
        "<html><head><title>Aquarium</title><script>var cat = 1;</script></head>"
        "<body><p>goldfish</p><p>tank</p></body></html>"
    )
    payload = {
        "query": "cat",
        "docs": [
            {"id": "h", "content": html, "content_type": "html"},
            {"id": "t", "content": "a cat on a mat"},
        ],
    }
    r = client.post("/search", json=payload)
    assert r.status_code == 200
    ranked = r.json()["ranked"]
    assert [d["id"] for d in ranked] == ["t", "h"]
    assert ranked[1]["title"] == "Aquarium"
    assert ranked[1]["snippet"] == "goldfish tank"


def test_post_search_unknown_normalization():
    r = client.post("/search", json={"query": "x", "docs": [], "normalization": "porter"})
    assert r.status_code == 400
    assert "porter" in r.json()["detail"]


def test_post_search_without_docs():
    r = client.post("/search", json={"query": "anything"})
    assert r.status_code == 200
    assert r.json()["ranked"] == []


def test_search_docs_returns_all_documents_without_top_k():
    docs = [
        Doc(id="1", title="One", url=None, content="cat dog"),
        Doc(id="2", title=None, url="https://x.test/2", content="cat bird"),
        Doc(id="3", title="Three", url=None, content="fish"),
    ]
    results = search_docs(docs, "cat")
    assert [r["id"] for r in results] == ["1", "2", "3"]
    assert results[0]["score"] == results[1]["score"] == round(results[0]["score"], 6)
    assert abs(results[0]["score"] - 0.346) < 1e-3
    assert results[1]["title"] == "cat bird"
    assert results[1]["url"] == "https://x.test/2"
    assert results[2]["score"] == 0.0


def test_search_docs_rejects_negative_top_k():
    docs = [Doc(id="1", title=None, url=None, content="cat")]
    with pytest.raises(ValueError):
        search_docs(docs, "cat", top_k=-1)
