from typing import Protocol, Tuple

import numpy as np

from beritavec.data import Batch

# Skip-gram scorer in pure NumPy: target and context embeddings, dot product, logistic link,
# binary cross-entropy against the pair label. Stability via clipped sigmoid and -softplus(-x).


class TrainableModel(Protocol):
    """What the training loop needs from a model."""

    def train_step(self, batch: Batch) -> float:
        ...

    def parameters(self) -> np.ndarray:
        ...


def _sigmoid(x: np.ndarray) -> np.ndarray:
    """Numerically stable sigmoid; clips input to avoid overflow in exp.

    Args:
        x: Input array (any shape).

    Returns:
        Sigmoid of x, same shape; values in (0, 1).
    """
    x = np.clip(x, -500.0, 500.0)
    return 1.0 / (1.0 + np.exp(-x))


def _log_sigmoid(x: np.ndarray) -> np.ndarray:
    """Log of sigmoid: -softplus(-x), computed in a numerically stable way.

    Args:
        x: Input array (any shape).

    Returns:
        log(sigmoid(x)), same shape as x.
    """
    x = np.clip(x, -500.0, 500.0)
    return np.minimum(x, 0) - np.log(1.0 + np.exp(-np.abs(x)))


class SkipGramNegSampling:
    """Skip-gram with negative sampling as labelled pair classification (no autograd).

    P(label=1 | t, c) = sigmoid(W_target[t] @ W_context[c]). Loss is mean binary cross-entropy
    over the batch. Row 0 of both matrices is the unknown word.

    Attributes:
        W_target (np.ndarray): Target embeddings, shape (V + 1, D).
        W_context (np.ndarray): Context embeddings, shape (V + 1, D).
        V (int): Vocabulary size (without the unknown row).
        D (int): Embedding dimension.
        lr (float): Learning rate.
        use_adagrad (bool): Adagrad if True, else plain SGD.
    """

    def __init__(
        self,
        vocab_size: int,
        dim: int,
        lr: float = 0.025,
        use_adagrad: bool = True,
        seed: int = 42,
    ):
        """Initialize embedding matrices with small random values.

        Args:
            vocab_size: Vocabulary size V; matrices get V + 1 rows.
            dim: Embedding dimension D.
            lr: Learning rate. Defaults to 0.025.
            use_adagrad: Whether to use Adagrad. Defaults to True.
            seed: Random seed for reproducibility. Defaults to 42.
        """
        rng = np.random.default_rng(seed)
        rows = vocab_size + 1
        # Small init so sigmoid isn't saturated
        self.W_target = (rng.standard_normal((rows, dim)) * 0.01).astype(np.float64)
        self.W_context = (rng.standard_normal((rows, dim)) * 0.01).astype(np.float64)
        self.V = vocab_size
        self.D = dim
        self.lr = lr
        self.use_adagrad = use_adagrad
        self._G_target = np.zeros_like(self.W_target)
        self._G_context = np.zeros_like(self.W_context)

    def forward(
        self,
        targets: np.ndarray,
        contexts: np.ndarray,
        labels: np.ndarray,
    ) -> Tuple[float, np.ndarray, np.ndarray]:
        """Compute mean loss and its gradients for a batch.

        Args:
            targets: Target word ids, shape (B,).
            contexts: Context word ids, shape (B,).
            labels: 1 for observed pairs, 0 for negatives, shape (B,).

        Returns:
            Tuple of (loss, dW_target, dW_context); gradients are dL/dW with shape (V + 1, D).
        """
        B = targets.shape[0]
        y = labels.astype(np.float64)
        v_t = self.W_target[targets]  # (B, D)
        u_c = self.W_context[contexts]  # (B, D)
        score = np.sum(v_t * u_c, axis=1)  # (B,)

        # BCE: -y log(sigmoid(s)) - (1 - y) log(sigmoid(-s))
        loss = -(y * _log_sigmoid(score) + (1.0 - y) * _log_sigmoid(-score)).sum() / B

        # dL/ds = sigmoid(s) - y, averaged over the batch
        g = (_sigmoid(score) - y) / B  # (B,)
        dW_target = np.zeros_like(self.W_target)
        dW_context = np.zeros_like(self.W_context)
        # Scatter-add: the same id may appear several times in a batch.
        np.add.at(dW_target, targets, g[:, np.newaxis] * u_c)
        np.add.at(dW_context, contexts, g[:, np.newaxis] * v_t)
        return float(loss), dW_target, dW_context

    def train_step(self, batch: Batch) -> float:
        """One update on a batch; returns the loss measured before the update."""
        loss, dW_target, dW_context = self.forward(batch.targets, batch.contexts, batch.labels)
        if self.use_adagrad:
            self._G_target += dW_target**2
            self._G_context += dW_context**2
            self.W_target -= self.lr * dW_target / (np.sqrt(self._G_target) + 1e-10)
            self.W_context -= self.lr * dW_context / (np.sqrt(self._G_context) + 1e-10)
        else:
            self.W_target -= self.lr * dW_target
            self.W_context -= self.lr * dW_context
        return loss

    def parameters(self) -> np.ndarray:
        """Snapshot of the target embedding matrix, shape (V + 1, D)."""
        return self.W_target.copy()
