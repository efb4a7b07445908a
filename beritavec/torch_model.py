from typing import Optional

import numpy as np
import torch
import torch.nn as nn

from beritavec.data import Batch

# Torch backend for the same pair-classification objective: two embedding tables, dot product,
# BCEWithLogitsLoss, Adam. Needs the optional torch extra (pip install beritavec[torch]).


class TorchSkipGram(nn.Module):
    """Target and context embedding tables of shape (V + 1, D); forward returns pair logits."""

    def __init__(self, vocab_size: int, dim: int):
        super().__init__()
        self.target = nn.Embedding(vocab_size + 1, dim)
        self.context = nn.Embedding(vocab_size + 1, dim)
        nn.init.uniform_(self.target.weight, -0.05, 0.05)
        nn.init.uniform_(self.context.weight, -0.05, 0.05)

    def forward(self, targets: torch.Tensor, contexts: torch.Tensor) -> torch.Tensor:
        """Logits (B,) for target/context id tensors of shape (B,)."""
        return (self.target(targets) * self.context(contexts)).sum(dim=-1)


class TorchTrainer:
    """Wraps a TorchSkipGram with an optimizer so it exposes train_step/parameters.

    Attributes:
        module (TorchSkipGram): The wrapped model.
        device (str): Device string (e.g. "cpu" or "cuda").
    """

    def __init__(
        self,
        module: TorchSkipGram,
        lr: float = 1e-3,
        device: str = "cpu",
        seed: Optional[int] = None,
    ):
        if seed is not None:
            torch.manual_seed(seed)
        self.device = device
        self.module = module.to(device)
        self.optimizer = torch.optim.Adam(self.module.parameters(), lr=lr)
        self.loss_fn = nn.BCEWithLogitsLoss()

    @classmethod
    def build(cls, vocab_size: int, dim: int, lr: float = 1e-3, device: str = "cpu", seed: Optional[int] = None):
        # Seed before the module exists so its initial weights are reproducible too
        if seed is not None:
            torch.manual_seed(seed)
        return cls(TorchSkipGram(vocab_size, dim), lr=lr, device=device)

    def train_step(self, batch: Batch) -> float:
        self.module.train()
        targets = torch.as_tensor(batch.targets, dtype=torch.long, device=self.device)
        contexts = torch.as_tensor(batch.contexts, dtype=torch.long, device=self.device)
        labels = torch.as_tensor(batch.labels, dtype=torch.float32, device=self.device)
        logits = self.module(targets, contexts)
        loss = self.loss_fn(logits, labels)
        self.optimizer.zero_grad()
        loss.backward()
        self.optimizer.step()
        return loss.item()

    def parameters(self) -> np.ndarray:
        return self.module.target.weight.detach().cpu().numpy().astype(np.float64)
