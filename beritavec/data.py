from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from beritavec.errors import EmptyCorpusError, InvalidConfigError

# Skip-gram sampler: symmetric-window positives per document, uniform negatives over IDs 1..V.
# Pairs are streamed lazily; each epoch gets a freshly constructed stream over a reshuffled corpus.

Pair = Tuple[int, int, int]


class Batch(NamedTuple):
    """One optimization step's input: aligned (target, context, label) arrays of shape (B,)."""

    targets: np.ndarray
    contexts: np.ndarray
    labels: np.ndarray


def count_positive_pairs(length: int, window_size: int) -> int:
    """Number of positive pairs skipgram_pairs yields for a document of this length.

    Each unordered neighbour pair at distance d <= window_size is emitted in both directions.
    """
    return 2 * sum(max(0, length - d) for d in range(1, window_size + 1))


def _check_window(window_size: int, negative_ratio: float) -> None:
    if window_size < 1:
        raise InvalidConfigError("window_size", window_size)
    if not np.isfinite(negative_ratio) or negative_ratio < 0:
        raise InvalidConfigError("negative_ratio", negative_ratio, "must be finite and >= 0")


def skipgram_pairs(
    sequence: Sequence[int],
    window_size: int,
    negative_ratio: float,
    vocab_size: int,
    rng: Optional[np.random.Generator] = None,
) -> Iterator[Pair]:
    """Yield (target, context, label) triples for one document.

    For each position i, every in-bounds neighbour j with 0 < |i - j| <= window_size gives a
    positive (seq[i], seq[j], 1), neighbours visited in ascending position. After each positive
    come its negatives (seq[i], random_id, 0) with random_id uniform over 1..vocab_size. A
    fractional negative_ratio accumulates across the document, so a document with n positives
    yields floor(n * negative_ratio) negatives.

    Args:
        sequence: Document as vocabulary IDs.
        window_size: Half-window size (each side), >= 1.
        negative_ratio: Negatives per positive, >= 0.
        vocab_size: V; negatives are drawn from 1..V.
        rng: Random generator. Defaults to None (new default_rng).

    Yields:
        Tuples (target_id, context_id, label).

    Raises:
        InvalidConfigError: If window_size < 1, negative_ratio < 0, or negatives are requested
            from an empty vocabulary.
    """
    _check_window(window_size, negative_ratio)
    if negative_ratio > 0 and vocab_size < 1:
        raise InvalidConfigError("vocab_size", vocab_size)
    if rng is None:
        rng = np.random.default_rng()
    seq = np.asarray(sequence, dtype=np.int64)
    n = len(seq)
    credit = 0.0
    for i in range(n):
        target = int(seq[i])
        start = max(0, i - window_size)
        end = min(n, i + window_size + 1)
        for j in range(start, end):
            if j == i:
                continue
            yield (target, int(seq[j]), 1)
            if negative_ratio > 0:
                credit += negative_ratio
                k = int(credit)
                credit -= k
                if k:
                    for neg in rng.integers(1, vocab_size + 1, size=k):
                        yield (target, int(neg), 0)


def _to_batch(pairs: List[Pair]) -> Batch:
    arr = np.array(pairs, dtype=np.int64).reshape(-1, 3)
    return Batch(arr[:, 0], arr[:, 1], arr[:, 2])


class SkipGramSampler:
    """Skip-gram pair source over an encoded corpus.

    Not safe for parallel iteration: every stream returned by epoch() or batches() is a
    single-consumer generator. Build a new stream per epoch rather than resuming an old one.

    Attributes:
        documents (List[np.ndarray]): Encoded documents.
        vocab_size (int): V (negatives drawn from 1..V).
        window_size (int): Half-window size.
        negative_ratio (float): Negatives per positive.
    """

    def __init__(
        self,
        documents: Sequence[Sequence[int]],
        vocab_size: int,
        window_size: int,
        negative_ratio: float,
    ):
        _check_window(window_size, negative_ratio)
        if vocab_size < 1:
            raise InvalidConfigError("vocab_size", vocab_size)
        self.documents = [np.asarray(d, dtype=np.int64) for d in documents]
        for d in self.documents:
            if len(d) and (d.min() < 0 or d.max() > vocab_size):
                raise ValueError(f"Document IDs must lie in [0, {vocab_size}]")
        self.vocab_size = vocab_size
        self.window_size = window_size
        self.negative_ratio = negative_ratio

    def num_positive_pairs(self) -> int:
        return sum(count_positive_pairs(len(d), self.window_size) for d in self.documents)

    def epoch(self, rng: Optional[np.random.Generator] = None) -> Iterator[Pair]:
        """One finite pass: shuffle document order, then stream each document's pairs.

        Args:
            rng: Random generator for shuffling and negatives. Defaults to None.

        Yields:
            Tuples (target_id, context_id, label).
        """
        if rng is None:
            rng = np.random.default_rng()
        for doc_idx in rng.permutation(len(self.documents)):
            yield from skipgram_pairs(
                self.documents[doc_idx],
                self.window_size,
                self.negative_ratio,
                self.vocab_size,
                rng,
            )

    def batches(self, batch_size: int, rng: Optional[np.random.Generator] = None) -> Iterator[Batch]:
        """Infinite stream of batches over repeated shuffled passes.

        A pass's leftover pairs are carried into the next pass so every batch has exactly
        batch_size pairs.

        Args:
            batch_size: Pairs per batch.
            rng: Random generator. Defaults to None.

        Yields:
            Batch tuples.

        Raises:
            EmptyCorpusError: If a full pass over the corpus yields no pair.
        """
        if batch_size < 1:
            raise InvalidConfigError("batch_size", batch_size)
        if rng is None:
            rng = np.random.default_rng()
        pending: List[Pair] = []
        while True:
            produced = 0
            for pair in self.epoch(rng):
                produced += 1
                pending.append(pair)
                if len(pending) == batch_size:
                    yield _to_batch(pending)
                    pending = []
            if produced == 0:
                raise EmptyCorpusError(
                    f"No skip-gram pairs in {len(self.documents)} documents "
                    f"(every document shorter than 2 tokens)"
                )
