import json
import math
from dataclasses import asdict, dataclass, fields

from beritavec.errors import InvalidConfigError

# Training configuration. The six corpus/model settings have no defaults; the optimizer knobs do.

_POSITIVE_INTS = ("max_vocab", "embedding_dim", "window_size", "epochs", "steps_per_epoch", "batch_size")


@dataclass(frozen=True)
class Word2VecConfig:
    """All settings for one training run; validated on construction.

    Attributes:
        max_vocab (int): Vocabulary cap V (IDs 1..V; 0 is unknown).
        embedding_dim (int): Embedding dimension D.
        window_size (int): Half-window of the skip-gram context.
        negative_ratio (float): Negative pairs drawn per positive pair.
        epochs (int): Number of epochs.
        steps_per_epoch (int): Batches consumed per epoch.
        batch_size (int): Pairs per batch.
        lr (float): Learning rate.
        use_adagrad (bool): Adagrad (True) or plain SGD (False) for the NumPy model.
        seed (int): Seed for initialization, shuffling, and negative sampling.
        exclude_self (bool): Drop the query word from nearest-neighbour results.
    """

    max_vocab: int
    embedding_dim: int
    window_size: int
    negative_ratio: float
    epochs: int
    steps_per_epoch: int
    batch_size: int = 128
    lr: float = 0.025
    use_adagrad: bool = True
    seed: int = 42
    exclude_self: bool = False

    def __post_init__(self) -> None:
        for name in _POSITIVE_INTS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfigError(name, value, "must be an integer")
            if value < 1:
                raise InvalidConfigError(name, value)
        if not math.isfinite(self.negative_ratio) or self.negative_ratio < 0:
            raise InvalidConfigError("negative_ratio", self.negative_ratio, "must be finite and >= 0")
        if not math.isfinite(self.lr) or self.lr <= 0:
            raise InvalidConfigError("lr", self.lr, "must be finite and positive")

    @classmethod
    def from_dict(cls, d: dict) -> "Word2VecConfig":
        """Build a config from a plain dict; unknown keys are rejected.

        Raises:
            InvalidConfigError: On unknown keys, missing required keys, or bad values.
        """
        known = {f.name for f in fields(cls)}
        for key in d:
            if key not in known:
                raise InvalidConfigError(key, d[key], "unknown setting")
        try:
            return cls(**d)
        except TypeError as e:
            raise InvalidConfigError("config", d, str(e)) from e

    @classmethod
    def from_json(cls, path: str) -> "Word2VecConfig":
        with open(path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> dict:
        return asdict(self)
