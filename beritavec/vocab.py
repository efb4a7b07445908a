import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from beritavec.errors import EmptyCorpusError, InvalidConfigError

# Tokenizer: frequency-ranked vocabulary with ID 0 reserved for unknown words. The fitted
# Vocabulary is an immutable value passed explicitly to encode/decode and to similarity queries.

UNK_ID = 0
UNK_TOKEN = "<unk>"

_TOKEN_RE = re.compile(r"[^\W_]+")


def tokenize(text: str) -> List[str]:
    """Lowercase and split on whitespace and punctuation; keep runs of letters/digits.

    Args:
        text: Raw input string.

    Returns:
        List of token strings.
    """
    return _TOKEN_RE.findall(text.lower())


@dataclass(frozen=True)
class Vocabulary:
    """Word <-> ID mapping. words[i] has ID i + 1; ID 0 is the unknown word.

    Attributes:
        words (Tuple[str, ...]): Vocabulary words in ID order (descending frequency).
        counts (Tuple[int, ...]): Corpus count for each word, aligned with words.
    """

    words: Tuple[str, ...]
    counts: Tuple[int, ...] = ()
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "words", tuple(self.words))
        counts = tuple(self.counts) if self.counts else (0,) * len(self.words)
        if len(counts) != len(self.words):
            raise ValueError("counts must align with words")
        object.__setattr__(self, "counts", counts)
        index = {w: i + 1 for i, w in enumerate(self.words)}
        if len(index) != len(self.words):
            raise ValueError("duplicate words in vocabulary")
        object.__setattr__(self, "_index", index)

    @property
    def size(self) -> int:
        """Number of real words V (IDs 1..V)."""
        return len(self.words)

    @property
    def rows(self) -> int:
        """Rows in an embedding matrix for this vocabulary (V + 1, unknown row included)."""
        return len(self.words) + 1

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def id_of(self, word: str) -> int:
        return self._index.get(word, UNK_ID)

    def word_of(self, idx: int) -> str:
        if idx == UNK_ID:
            return UNK_TOKEN
        if not 0 < idx <= len(self.words):
            raise IndexError(f"ID {idx} outside vocabulary of size {len(self.words)}")
        return self.words[idx - 1]

    def count_of(self, word: str) -> int:
        idx = self._index.get(word)
        return 0 if idx is None else self.counts[idx - 1]


def fit(corpus: Sequence[str], max_vocab: int) -> Vocabulary:
    """Build a Vocabulary from the most frequent words of a corpus.

    Ties in frequency are broken by first occurrence in the corpus.

    Args:
        corpus: Documents as raw strings.
        max_vocab: Maximum number of words kept (IDs 1..max_vocab).

    Returns:
        Fitted Vocabulary.

    Raises:
        InvalidConfigError: If max_vocab < 1.
        EmptyCorpusError: If no document contains a token.
    """
    if max_vocab < 1:
        raise InvalidConfigError("max_vocab", max_vocab)
    cnt: Counter = Counter()
    n_docs = 0
    for text in corpus:
        tokens = tokenize(text)
        if tokens:
            n_docs += 1
            cnt.update(tokens)
    if n_docs == 0:
        raise EmptyCorpusError(f"No non-empty documents in corpus of {len(corpus)} records")
    # most_common sorts stably, so equal counts keep insertion (first-seen) order
    kept = cnt.most_common(max_vocab)
    return Vocabulary(tuple(w for w, _ in kept), tuple(c for _, c in kept))


def encode(text: str, vocab: Vocabulary) -> np.ndarray:
    """Map text to vocabulary IDs; out-of-vocabulary tokens map to 0.

    Args:
        text: Raw input string.
        vocab: Fitted Vocabulary.

    Returns:
        One-dimensional int64 array of IDs.
    """
    return np.array([vocab.id_of(w) for w in tokenize(text)], dtype=np.int64)


def decode(ids: Iterable[int], vocab: Vocabulary) -> List[str]:
    return [vocab.word_of(int(i)) for i in ids]


def encode_corpus(corpus: Sequence[str], vocab: Vocabulary, drop_short: Optional[int] = None) -> List[np.ndarray]:
    """Encode every document; optionally drop documents shorter than drop_short tokens.

    Args:
        corpus: Documents as raw strings.
        vocab: Fitted Vocabulary.
        drop_short: Minimum length to keep. Defaults to None (keep all, even empty).

    Returns:
        List of int64 ID arrays, one per kept document.
    """
    docs = [encode(text, vocab) for text in corpus]
    if drop_short is not None:
        docs = [d for d in docs if len(d) >= drop_short]
    return docs
