from __future__ import annotations

import numpy as np
import pytest

from vector.similarity import NO_SIMILARITY, cosine_scores, rank_order


def test_cosine_scores_basic():
    docs = np.array([[1.0, 0.0], [0.0, 2.0], [1.0, 1.0]])
    scores = cosine_scores(np.array([3.0, 0.0]), docs)
    assert scores.tolist() == pytest.approx([1.0, 0.0, 2**-0.5])


def test_zero_query_scores_no_similarity():
    docs = np.array([[1.0, 0.0], [0.0, 1.0]])
    scores = cosine_scores(np.zeros(2), docs)
    assert scores.tolist() == [NO_SIMILARITY, NO_SIMILARITY]


def test_zero_document_row_scores_no_similarity():
    docs = np.array([[0.0, 0.0], [1.0, 1.0]])
    scores = cosine_scores(np.array([1.0, 0.0]), docs)
    assert not np.isnan(scores).any()
    assert scores[0] == NO_SIMILARITY


def test_no_documents():
    assert cosine_scores(np.zeros(0), np.zeros((0, 0))).shape == (0,)


def test_rank_order_is_stable_for_ties():
    assert rank_order(np.array([0.5, 1.0, 0.5, 1.0])) == [1, 3, 0, 2]
    assert rank_order(np.array([0.0, 0.2, -0.0, 0.0])) == [1, 0, 2, 3]
