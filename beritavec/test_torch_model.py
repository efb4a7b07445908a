import numpy as np
import pytest

torch = pytest.importorskip("torch")

from beritavec.config import Word2VecConfig  # noqa: E402
from beritavec.data import Batch, SkipGramSampler  # noqa: E402
from beritavec.torch_model import TorchSkipGram, TorchTrainer  # noqa: E402
from beritavec.train import train  # noqa: E402

# Torch backend: same train_step/parameters contract as the NumPy model.


def test_forward_shapes():
    module = TorchSkipGram(vocab_size=10, dim=4)
    logits = module(torch.tensor([1, 2, 3]), torch.tensor([4, 5, 0]))
    assert logits.shape == (3,)
    assert module.target.weight.shape == (11, 4)


def test_train_step_decreases_loss():
    trainer = TorchTrainer.build(vocab_size=6, dim=8, lr=0.05, seed=0)
    batch = Batch(np.array([1, 2, 3, 1]), np.array([2, 3, 4, 5]), np.array([1, 1, 1, 0]))
    first = trainer.train_step(batch)
    for _ in range(30):
        last = trainer.train_step(batch)
    assert last < first


def test_parameters_snapshot_and_training_loop():
    config = Word2VecConfig(
        max_vocab=10, embedding_dim=4, window_size=1, negative_ratio=1.0, epochs=2, steps_per_epoch=3, batch_size=4
    )
    sampler = SkipGramSampler([[1, 2, 3, 4]], vocab_size=4, window_size=1, negative_ratio=1.0)
    trainer = TorchTrainer.build(vocab_size=4, dim=4, seed=1)
    before = trainer.parameters()
    history = train(trainer, sampler, config, log_every=2)
    after = trainer.parameters()
    assert before.shape == after.shape == (5, 4)
    assert not np.allclose(before, after)
    assert history[-1]["step"] == 6
