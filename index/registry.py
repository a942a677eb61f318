from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import TypeVar

from config import EngineConfig
from index.tfidf import Document, Hit, TfidfModel

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SharedModel:
    """A TfidfModel guarded by a lock.

    insert, merge (+ recompute) and search never interleave, so readers
    only ever see the model between completed updates.
    """

    def __init__(self, model: TfidfModel) -> None:
        self._model = model
        self._lock = threading.RLock()

    def _locked(self, fn: Callable[[TfidfModel], T]) -> T:
        with self._lock:
            return fn(self._model)

    def rebuild(self, docs: Iterable[Document]) -> dict:
        """Replace the corpus with ``docs``; documents still queued stay queued."""
        with self._lock:
            old = self._model
            model = TfidfModel.build(docs, old.rule, stale_policy=old.stale_policy)
            model.pending = old.pending
            self._model = model
            return model.stats()

    def insert(self, docs: Iterable[Document]) -> int:
        return self._locked(lambda m: m.insert(docs))

    def merge(self, *, recompute: bool = False) -> int:
        with self._lock:
            merged = self._model.merge()
            if recompute and merged:
                self._model.recompute_weights()
            return merged

    def recompute(self) -> None:
        self._locked(lambda m: m.recompute_weights())

    def search(self, query: str) -> list[Hit]:
        return self._locked(lambda m: m.search(query))

    def search_with_state(self, query: str) -> tuple[list[Hit], bool]:
        """Hits plus the weights_stale flag they were scored under."""
        with self._lock:
            return self._model.search(query), self._model.weights_stale

    def stats(self) -> dict:
        return self._locked(lambda m: m.stats())


_SINGLETONS: dict[str, SharedModel] = {}
_REGISTRY_LOCK = threading.Lock()


def get_engine(cfg: EngineConfig | None = None, *, name: str = "default") -> SharedModel:
    cfg = cfg or EngineConfig()
    key = f"{name}|{cfg.normalization.lower()}|{cfg.stale_weights.lower()}"
    with _REGISTRY_LOCK:
        inst = _SINGLETONS.get(key)
        if inst is None:
            cfg.validate()
            inst = SharedModel(TfidfModel(cfg.rule(), stale_policy=cfg.stale_weights))
            _SINGLETONS[key] = inst
            logger.info(f"Created engine {key!r}")
        return inst


def reset_engines() -> None:
    with _REGISTRY_LOCK:
        _SINGLETONS.clear()
