from __future__ import annotations

import math

import numpy as np


def idf(df: int, n: int) -> float:
    """log10(N / df). A term no document contains carries no weight.

    Scalar reference form of ``idf_vector``.
    """
    if df <= 0:
        return 0.0
    return math.log10(n / df)


def tfidf(tf: int, idf_value: float) -> float:
    """Scalar reference form of ``tf_weights(tf) * idf``."""
    if tf == 0:
        return 0.0
    return (1.0 + math.log10(tf)) * idf_value


def idf_vector(df: np.ndarray, n: int) -> np.ndarray:
    out = np.zeros(df.shape, dtype=np.float64)
    mask = df > 0
    out[mask] = np.log10(n / df[mask])
    return out


def tf_weights(counts: np.ndarray) -> np.ndarray:
    """Sublinear tf: 1 + log10(tf) where tf > 0, else 0."""
    out = np.zeros(counts.shape, dtype=np.float64)
    mask = counts > 0
    out[mask] = 1.0 + np.log10(counts[mask])
    return out


def document_weights(tf: np.ndarray, df: np.ndarray) -> np.ndarray:
    """Full N x V tf-idf matrix from raw counts and document frequencies."""
    n = int(tf.shape[0])
    return tf_weights(tf) * idf_vector(df, n)


def query_weights(counts: np.ndarray, df: np.ndarray, n: int) -> np.ndarray:
    return tf_weights(counts) * idf_vector(df, n)
