from __future__ import annotations

import numpy as np

# Score reported when the query or a document has zero magnitude.
NO_SIMILARITY = 0.0


def cosine_scores(query: np.ndarray, docs: np.ndarray) -> np.ndarray:
    """Cosine similarity of ``query`` against every row of ``docs``.

    Rows with zero magnitude, or a zero-magnitude query, score
    ``NO_SIMILARITY`` so no NaN reaches the caller.
    """
    scores = np.full(docs.shape[0], NO_SIMILARITY, dtype=np.float64)
    q_norm = float(np.linalg.norm(query))
    if q_norm == 0.0 or docs.shape[0] == 0:
        return scores
    d_norms = np.linalg.norm(docs, axis=1)
    mask = d_norms > 0
    scores[mask] = (docs[mask] @ (query / q_norm)) / d_norms[mask]
    return scores


def rank_order(scores: np.ndarray) -> list[int]:
    """Row indices by descending score; equal scores keep their original order."""
    return np.argsort(-scores, kind="stable").tolist()
