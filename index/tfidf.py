from __future__ import annotations

import copy
import enum
import logging
from collections import Counter
from collections.abc import Iterable
from typing import NamedTuple, Protocol

import numpy as np

from index.dictionary import TermIndex
from index.errors import ConfigError, StaleWeightsError
from index.weighting import document_weights, query_weights
from processing.tokenize import DEFAULT_RULE, Rule, tokenize
from vector.similarity import cosine_scores, rank_order

logger = logging.getLogger(__name__)

STALE_POLICIES = ("warn", "raise", "ignore")


class Document(Protocol):
    def text(self) -> str: ...


class Hit(NamedTuple):
    document: Document
    score: float


class IndexState(str, enum.Enum):
    IDLE = "idle"
    QUEUED = "queued"


class TfidfModel:
    """Term/document tf-idf matrix with cosine-ranked search.

    Growth is two-phase: ``insert`` queues documents and ``merge`` folds
    them into the index and count matrices. Weights are only refreshed by
    ``recompute_weights``; until then ``weights_stale`` is set.
    """

    def __init__(self, rule: Rule = DEFAULT_RULE, *, stale_policy: str = "warn") -> None:
        if stale_policy not in STALE_POLICIES:
            raise ConfigError(f"stale_policy must be one of {STALE_POLICIES}, got {stale_policy!r}")
        self.rule = rule
        self.stale_policy = stale_policy
        self.documents: list[Document] = []
        self.index = TermIndex()
        self.tf: np.ndarray = np.zeros((0, 0), dtype=np.int64)
        self.df: np.ndarray = np.zeros(0, dtype=np.int64)
        self.weights: np.ndarray = np.zeros((0, 0), dtype=np.float64)
        self.pending: list[Document] = []
        self.weights_stale = False

    @classmethod
    def build(
        cls, documents: Iterable[Document], rule: Rule = DEFAULT_RULE, *, stale_policy: str = "warn"
    ) -> TfidfModel:
        model = cls(rule, stale_policy=stale_policy)
        docs = copy.deepcopy(list(documents))
        model._append(docs)
        model.recompute_weights()
        logger.info(f"Built model: {len(docs)} documents, {model.vector_length} terms")
        return model

    def __len__(self) -> int:
        return len(self.documents)

    @property
    def vector_length(self) -> int:
        return len(self.index)

    @property
    def state(self) -> IndexState:
        return IndexState.QUEUED if self.pending else IndexState.IDLE

    def _append(self, docs: list[Document]) -> int:
        # Works on copies; the model changes only after every document is counted.
        token_lists = [list(tokenize(d.text(), self.rule)) for d in docs]
        index = self.index.copy()
        new_terms = sum(index.extend(tokens) for tokens in token_lists)

        width = len(index)
        base = self.tf.shape[0]
        tf = np.pad(self.tf, ((0, len(docs)), (0, width - self.tf.shape[1])))
        df = np.pad(self.df, (0, width - self.df.shape[0]))
        for row, tokens in enumerate(token_lists, start=base):
            for term, count in Counter(tokens).items():
                col = index.add(term)
                tf[row, col] = count
                df[col] += 1

        self.index = index
        self.tf = tf
        self.df = df
        self.documents.extend(docs)
        return new_terms

    def insert(self, docs: Iterable[Document]) -> int:
        """Queue documents for the next ``merge``; returns the queue length."""
        queued = copy.deepcopy(list(docs))
        self.pending.extend(queued)
        logger.debug(f"Queued {len(queued)} documents ({len(self.pending)} pending)")
        return len(self.pending)

    def merge(self) -> int:
        """Fold queued documents into the index; returns how many were merged.

        Existing column ids are kept, every existing row is zero-padded to
        the new width and document frequencies are accumulated in place.
        Weights are not recomputed.
        """
        if not self.pending:
            logger.info("Merge skipped: no documents queued")
            return 0
        docs = self.pending
        new_terms = self._append(docs)
        self.pending = []
        self.weights_stale = True
        logger.info(
            f"Merged {len(docs)} documents ({new_terms} new terms, "
            f"vector_length={self.vector_length}); weights are stale"
        )
        return len(docs)

    def recompute_weights(self) -> None:
        self.weights = document_weights(self.tf, self.df)
        self.weights_stale = False
        logger.info(f"Recomputed weights for {len(self.documents)} documents")

    def _current_weights(self) -> np.ndarray:
        # Stale weights are zero-padded: merged-but-unweighted documents score 0.
        rows, cols = self.weights.shape
        n, width = len(self.documents), self.vector_length
        if (rows, cols) == (n, width):
            return self.weights
        return np.pad(self.weights, ((0, n - rows), (0, width - cols)))

    def query_vector(self, query: str) -> np.ndarray:
        counts = np.zeros(self.vector_length, dtype=np.int64)
        for token in tokenize(query, self.rule):
            col = self.index.get(token)
            if col is not None:
                counts[col] += 1
        return query_weights(counts, self.df, len(self.documents))

    def search(self, query: str) -> list[Hit]:
        """Rank every document against ``query``.

        The result always has one hit per document, highest score first.
        """
        if not self.documents:
            return []
        if self.weights_stale:
            if self.stale_policy == "raise":
                raise StaleWeightsError("weights are stale; call recompute_weights() after merge()")
            if self.stale_policy == "warn":
                logger.warning("Searching with stale weights; call recompute_weights() after merge()")

        scores = cosine_scores(self.query_vector(query), self._current_weights())
        logger.debug(f"Scored {len(scores)} documents for query {query!r}")
        return [Hit(copy.deepcopy(self.documents[i]), float(scores[i])) for i in rank_order(scores)]

    def stats(self) -> dict[str, int | str | bool]:
        return {
            "documents": len(self.documents),
            "vector_length": self.vector_length,
            "pending": len(self.pending),
            "state": self.state.value,
            "weights_stale": self.weights_stale,
        }
