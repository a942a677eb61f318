from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from config import configure_logging, load_config
from index.errors import ConfigError, StaleWeightsError
from index.registry import SharedModel, get_engine
from processing.text import extract_title, html_to_text
from processing.tokenize import get_rule
from search.pipeline import Doc, search_docs, to_result

config = load_config()
configure_logging(config.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="VSM Retrieval API", version="0.1.0")


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


class DocIn(BaseModel):
    id: str
    title: str | None = None
    url: str | None = None
    content: str
    content_type: str = "text"  # "text" | "html"


def _to_docs(docs_in: list[DocIn]) -> list[Doc]:
    docs: list[Doc] = []
    for d in docs_in:
        if d.content_type.lower() == "html":
            docs.append(
                Doc(
                    id=d.id,
                    title=d.title or extract_title(d.content),
                    url=d.url,
                    content=html_to_text(d.content),
                )
            )
        else:
            docs.append(Doc(id=d.id, title=d.title, url=d.url, content=d.content))
    return docs


class SearchRequest(BaseModel):
    query: str
    docs: list[DocIn] = []
    top_k: int | None = Field(None, ge=0)
    normalization: str | None = None


@app.post("/search")
def search(body: SearchRequest) -> dict[str, Any]:
    try:
        rule = get_rule(body.normalization or config.normalization)
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    ranked = search_docs(_to_docs(body.docs), body.query, top_k=body.top_k, rule=rule)
    return {"query": body.query, "ranked": ranked}


class DocsRequest(BaseModel):
    docs: list[DocIn]


class MergeRequest(BaseModel):
    recompute: bool = False


def _engine() -> SharedModel:
    try:
        return get_engine(config)
    except ConfigError as e:
        logger.error(f"Invalid engine configuration: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e


@app.post("/index/build")
def index_build(body: DocsRequest) -> dict[str, Any]:
    return _engine().rebuild(_to_docs(body.docs))


@app.post("/index/insert")
def index_insert(body: DocsRequest) -> dict[str, Any]:
    engine = _engine()
    queued = engine.insert(_to_docs(body.docs))
    return {"queued": queued, **engine.stats()}


@app.post("/index/merge")
def index_merge(body: MergeRequest | None = None) -> dict[str, Any]:
    engine = _engine()
    merged = engine.merge(recompute=body.recompute if body else False)
    return {"merged": merged, **engine.stats()}


@app.post("/index/recompute")
def index_recompute() -> dict[str, Any]:
    engine = _engine()
    engine.recompute()
    return engine.stats()


@app.get("/index/search")
def index_search(q: str, top_k: int | None = Query(None, ge=0)) -> dict[str, Any]:
    engine = _engine()
    try:
        hits, stale = engine.search_with_state(q)
    except StaleWeightsError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    if top_k is not None:
        hits = hits[:top_k]
    return {
        "query": q,
        "ranked": [to_result(h) for h in hits],
        "weights_stale": stale,
    }


@app.get("/index/stats")
def index_stats() -> dict[str, Any]:
    return _engine().stats()
