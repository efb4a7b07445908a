import urllib.request
from typing import FrozenSet, Iterable, List, Optional

import pandas as pd

from beritavec.errors import EmptyCorpusError
from beritavec.vocab import tokenize

# Corpus glue: read news records from CSV, load a newline-delimited stopword list (URL or file),
# strip stopwords before fitting the vocabulary.

# Small built-in Indonesian list for the demo corpus; pass --stopwords for a full one.
DEFAULT_STOPWORDS = frozenset(
    """
    yang dan di ke dari ini itu dengan untuk pada adalah dalam tidak akan juga atau
    oleh karena sudah telah saat bahwa lebih para serta namun masih hingga bisa dapat
    kata ia mereka kami kita tersebut sebagai secara antara menjadi ada hal agar
    """.split()
)


def load_texts(path: str, text_column: str = "text", encoding: str = "utf-8") -> List[str]:
    """Read the text column of a CSV file; rows with missing text are dropped.

    Args:
        path: Path to the CSV file.
        text_column: Column holding the free text. Defaults to "text".
        encoding: File encoding. Defaults to "utf-8".

    Returns:
        List of document strings, in file order.

    Raises:
        EmptyCorpusError: If the column is missing.
    """
    df = pd.read_csv(path, encoding=encoding)
    if text_column not in df.columns:
        raise EmptyCorpusError(
            f"{path}: no column {text_column!r} (columns: {', '.join(map(str, df.columns))})"
        )
    return df[text_column].dropna().astype(str).tolist()


def _read_lines(source: str, timeout: float) -> List[str]:
    if source.startswith(("http://", "https://")):
        req = urllib.request.Request(source, headers={"User-Agent": "beritavec/0.1"})
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.read().decode("utf-8", errors="replace").splitlines()
    with open(source, encoding="utf-8") as f:
        return f.read().splitlines()


def load_stopwords(source: str, timeout: float = 30.0) -> FrozenSet[str]:
    """Load a newline-delimited stopword list from an http(s) URL or a local path.

    Args:
        source: URL or file path.
        timeout: Network timeout in seconds. Defaults to 30.

    Returns:
        Lowercased stopwords; blank lines ignored.
    """
    return frozenset(w.strip().lower() for w in _read_lines(source, timeout) if w.strip())


def remove_stopwords(text: str, stopwords: Iterable[str]) -> str:
    """Tokenize text and drop stopwords; returns the remaining tokens space-joined."""
    stop = stopwords if isinstance(stopwords, (set, frozenset)) else set(stopwords)
    return " ".join(t for t in tokenize(text) if t not in stop)


def prepare_documents(texts: Iterable[str], stopwords: Optional[Iterable[str]] = None) -> List[str]:
    """Stopword-strip every document. Documents may come back empty; fit() rejects all-empty corpora."""
    stop = frozenset(stopwords) if stopwords is not None else frozenset()
    return [remove_stopwords(t, stop) for t in texts]
