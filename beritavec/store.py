from typing import List, Optional, Tuple

import numpy as np

from beritavec import eval as sim
from beritavec.errors import UnknownWordError
from beritavec.vocab import UNK_TOKEN, Vocabulary

# Read-only vector store over a trained embedding matrix, with word2vec text-format persistence:
# header "<rows> <dim>", then "word f1 ... fD" per row, row 0 written as <unk>.


class VectorStore:
    """Trained embeddings keyed by word. The matrix is copied and frozen on construction.

    Attributes:
        matrix (np.ndarray): Read-only embedding matrix, shape (V + 1, D).
        vocab (Vocabulary): Vocabulary matching matrix rows.
        exclude_self (bool): Default for nearest(); drop the query word from results.
    """

    def __init__(self, matrix: np.ndarray, vocab: Vocabulary, exclude_self: bool = False):
        matrix = np.array(matrix, dtype=np.float64)
        if matrix.ndim != 2 or matrix.shape[0] != vocab.rows:
            raise ValueError(
                f"Matrix shape {matrix.shape} does not match vocabulary of {vocab.size} words "
                f"(expected {vocab.rows} rows)"
            )
        matrix.setflags(write=False)
        self.matrix = matrix
        self.vocab = vocab
        self.exclude_self = exclude_self

    @property
    def dim(self) -> int:
        return self.matrix.shape[1]

    def vector(self, word: str) -> np.ndarray:
        if word not in self.vocab:
            raise UnknownWordError(word)
        return self.matrix[self.vocab.id_of(word)]

    def similarity(self, w1: str, w2: str) -> float:
        return sim.cosine_similarity(self.vector(w1), self.vector(w2))

    def nearest(self, word: str, k: int = 5, exclude_self: Optional[bool] = None) -> List[Tuple[str, float]]:
        if exclude_self is None:
            exclude_self = self.exclude_self
        return sim.nearest(word, self.matrix, self.vocab, k, exclude_self=exclude_self)

    def analogy(self, a: str, b: str, c: str, k: int = 1) -> List[Tuple[str, float]]:
        return sim.analogy(a, b, c, self.matrix, self.vocab, k=k)

    def save(self, path: str) -> None:
        """Write vectors in word2vec text format (UTF-8)."""
        rows, dim = self.matrix.shape
        with open(path, "w", encoding="utf-8") as f:
            f.write(f"{rows} {dim}\n")
            for idx in range(rows):
                values = " ".join(repr(float(x)) for x in self.matrix[idx])
                f.write(f"{self.vocab.word_of(idx)} {values}\n")

    @classmethod
    def load(cls, path: str, exclude_self: bool = False) -> "VectorStore":
        """Read a file written by save(); word counts are not stored and come back as 0.

        Raises:
            ValueError: If the header, row count, or row widths are inconsistent.
        """
        with open(path, encoding="utf-8") as f:
            header = f.readline().split()
            if len(header) != 2:
                raise ValueError(f"{path}: bad header {header!r}")
            rows, dim = int(header[0]), int(header[1])
            words = []
            matrix = np.zeros((rows, dim), dtype=np.float64)
            n = 0
            for line in f:
                parts = line.rstrip("\n").split(" ")
                if not line.strip():
                    continue
                if n >= rows or len(parts) != dim + 1:
                    raise ValueError(f"{path}: malformed row {n + 1}")
                if n == 0:
                    if parts[0] != UNK_TOKEN:
                        raise ValueError(f"{path}: first row must be {UNK_TOKEN}")
                else:
                    words.append(parts[0])
                matrix[n] = [float(x) for x in parts[1:]]
                n += 1
        if n != rows:
            raise ValueError(f"{path}: expected {rows} rows, found {n}")
        return cls(matrix, Vocabulary(tuple(words)), exclude_self=exclude_self)
