from itertools import islice
from typing import List, Optional

import numpy as np

from beritavec.config import Word2VecConfig
from beritavec.data import SkipGramSampler
from beritavec.errors import InvalidConfigError
from beritavec.model import TrainableModel

# Training loop: fixed epochs x steps_per_epoch, one fresh batch stream per epoch. Works with any
# model exposing train_step/parameters (NumPy, torch, or a test stub).


def train(
    model: TrainableModel,
    sampler: SkipGramSampler,
    config: Word2VecConfig,
    *,
    log_every: int = 100,
    rng: Optional[np.random.Generator] = None,
) -> List[dict]:
    """Run config.epochs epochs of config.steps_per_epoch batches each.

    A failing train_step propagates and stops training; nothing is retried.

    Args:
        model: Object with train_step(batch) -> loss (modified in place).
        sampler: Skip-gram pair source over the encoded corpus.
        config: Run configuration (epochs, steps_per_epoch, batch_size, seed).
        log_every: Print and record history every this many steps. Defaults to 100.
        rng: Random generator for shuffling and negatives. Defaults to one seeded by config.seed.

    Returns:
        List of dicts with keys "epoch", "step", "loss" (one per log point plus each epoch end).

    Raises:
        InvalidConfigError: If log_every < 1.
        EmptyCorpusError: If the corpus yields no skip-gram pairs.
    """
    if log_every < 1:
        raise InvalidConfigError("log_every", log_every)
    if rng is None:
        rng = np.random.default_rng(config.seed)
    total_steps = config.epochs * config.steps_per_epoch
    print(
        f"Training: {config.epochs} epochs x {config.steps_per_epoch} steps = {total_steps} steps, "
        f"batch {config.batch_size}, ~{sampler.num_positive_pairs()} positive pairs per pass"
    )
    history = []
    step = 0
    for epoch in range(config.epochs):
        print(f"Epoch {epoch + 1}/{config.epochs}")
        stream = sampler.batches(config.batch_size, rng)
        epoch_loss = 0.0
        try:
            for batch in islice(stream, config.steps_per_epoch):
                loss = model.train_step(batch)
                epoch_loss += loss
                step += 1
                if step % log_every == 0:
                    history.append({"epoch": epoch + 1, "step": step, "loss": float(loss)})
                    print(f"step {step} loss {loss:.4f}")
        finally:
            stream.close()
        mean_loss = epoch_loss / config.steps_per_epoch
        print(f"epoch {epoch + 1} mean loss {mean_loss:.4f}")
        if not history or history[-1]["step"] != step:
            history.append({"epoch": epoch + 1, "step": step, "loss": float(loss)})
    return history
