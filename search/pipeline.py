from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from index.tfidf import Hit, TfidfModel
from processing.tokenize import DEFAULT_RULE, Rule


@dataclass(frozen=True)
class Doc:
    id: str
    title: str | None
    url: str | None
    content: str

    def text(self) -> str:
        return self.content


def to_result(hit: Hit) -> dict[str, Any]:
    d = hit.document
    return {
        "id": d.id,
        "title": d.title or (d.content[:60] + ("…" if len(d.content) > 60 else "")),
        "url": d.url,
        "score": float(round(hit.score, 6)),
        "snippet": d.content[:220],
    }


def search_docs(
    docs: Iterable[Doc], query: str, top_k: int | None = None, *, rule: Rule = DEFAULT_RULE
) -> list[dict[str, Any]]:
    """Build a throwaway model over ``docs`` and rank them for ``query``.

    Every document is returned, zero scores included, unless ``top_k`` cuts
    the list.
    """
    if top_k is not None and top_k < 0:
        raise ValueError(f"top_k must be >= 0, got {top_k}")
    model = TfidfModel.build(docs, rule)
    hits = model.search(query)
    if top_k is not None:
        hits = hits[:top_k]
    return [to_result(h) for h in hits]
