from typing import List, Tuple

import numpy as np

from beritavec.errors import UnknownWordError
from beritavec.vocab import Vocabulary

# Similarity queries over an embedding matrix: cosine, k-NN neighbours, analogy (a - b + c = ?).


def l2_normalize(X: np.ndarray, axis: int = -1) -> np.ndarray:
    """L2-normalize array along the given axis (zero vectors get divisor 1).

    Args:
        X: Input array.
        axis: Axis along which to normalize. Defaults to -1.

    Returns:
        Normalized array, same shape as X.
    """
    norm = np.linalg.norm(X, axis=axis, keepdims=True)
    norm = np.where(norm > 0, norm, 1.0)
    return X / norm


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity dot(a, b) / (|a| |b|) between two vectors (flattened).

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        Scalar in [-1, 1]; 0.0 if either vector is all zeros.
    """
    a = np.asarray(a, dtype=np.float64).ravel()
    b = np.asarray(b, dtype=np.float64).ravel()
    denom = np.linalg.norm(a) * np.linalg.norm(b)
    if denom == 0:
        return 0.0
    return float(np.dot(a, b) / denom)


def _rank(sims: np.ndarray, k: int, exclude: Tuple[int, ...]) -> List[int]:
    """IDs 1..V by descending similarity, ties by ascending ID, skipping exclude."""
    ids = np.arange(1, len(sims))
    # lexsort sorts by the last key first: descending sim, then ascending id
    order = ids[np.lexsort((ids, -sims[1:]))]
    return [int(i) for i in order if int(i) not in exclude][:k]


def nearest(
    word: str,
    matrix: np.ndarray,
    vocab: Vocabulary,
    k: int,
    exclude_self: bool = False,
) -> List[Tuple[str, float]]:
    """Return up to k (word, cosine) pairs closest to word.

    The unknown row (ID 0) is never a candidate. The query word scores 1.0 against itself and
    is included unless exclude_self is set.

    Args:
        word: Query word.
        matrix: Embedding matrix, shape (V + 1, D).
        vocab: Vocabulary matching matrix rows.
        k: Maximum number of neighbours.
        exclude_self: Drop the query word from the result. Defaults to False.

    Returns:
        List of (word, score), descending by score, ties by ascending vocabulary ID.

    Raises:
        UnknownWordError: If word is not in vocab.
    """
    if word not in vocab:
        raise UnknownWordError(word)
    if k < 1:
        return []
    i = vocab.id_of(word)
    E = l2_normalize(np.asarray(matrix, dtype=np.float64), axis=1)
    sims = E @ E[i]
    # A word always matches itself exactly, even with an all-zero row
    sims[i] = 1.0
    exclude = (i,) if exclude_self else ()
    return [(vocab.word_of(j), float(sims[j])) for j in _rank(sims, k, exclude)]


def analogy(
    a: str,
    b: str,
    c: str,
    matrix: np.ndarray,
    vocab: Vocabulary,
    k: int = 1,
) -> List[Tuple[str, float]]:
    """Solve "a is to b as c is to ?" via the offset a - b + c; inputs are excluded.

    Args:
        a: First word of analogy.
        b: Second word.
        c: Third word.
        matrix: Embedding matrix, shape (V + 1, D).
        vocab: Vocabulary matching matrix rows.
        k: Number of candidates to return. Defaults to 1.

    Returns:
        List of up to k (word, score) pairs.

    Raises:
        UnknownWordError: If any of a, b, c is not in vocab.
    """
    for w in (a, b, c):
        if w not in vocab:
            raise UnknownWordError(w)
    ia, ib, ic = vocab.id_of(a), vocab.id_of(b), vocab.id_of(c)
    vec = matrix[ia] - matrix[ib] + matrix[ic]
    E = l2_normalize(np.asarray(matrix, dtype=np.float64), axis=1)
    sims = E @ l2_normalize(vec.astype(np.float64))
    return [(vocab.word_of(j), float(sims[j])) for j in _rank(sims, k, (ia, ib, ic))]
