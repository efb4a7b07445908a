from typing import Any

# Error kinds raised across the package. All carry the offending value so callers can fix input.


class Word2VecError(Exception):
    """Base class for beritavec errors."""


class EmptyCorpusError(Word2VecError, ValueError):
    """No usable documents (nothing to fit a vocabulary on, or no skip-gram pairs)."""


class UnknownWordError(Word2VecError, LookupError):
    """Query word is not in the vocabulary.

    Attributes:
        word (str): The word that was looked up.
    """

    def __init__(self, word: str):
        self.word = word
        super().__init__(f"Unknown word: {word!r}")


class InvalidConfigError(Word2VecError, ValueError):
    """Configuration value out of range.

    Attributes:
        field (str): Name of the offending setting.
        value: The rejected value.
    """

    def __init__(self, field: str, value: Any, reason: str = "must be positive"):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}={value!r}: {reason}")
