from beritavec.config import Word2VecConfig
from beritavec.data import Batch, SkipGramSampler, skipgram_pairs
from beritavec.errors import EmptyCorpusError, InvalidConfigError, UnknownWordError, Word2VecError
from beritavec.eval import analogy, cosine_similarity, nearest
from beritavec.model import SkipGramNegSampling, TrainableModel
from beritavec.store import VectorStore
from beritavec.train import train
from beritavec.vocab import Vocabulary, decode, encode, fit

# Skip-gram word embeddings with negative sampling for a small Indonesian news corpus.
# NumPy model by default; torch backend in beritavec.torch_model (optional extra).

__all__ = [
    "Batch",
    "EmptyCorpusError",
    "InvalidConfigError",
    "SkipGramNegSampling",
    "SkipGramSampler",
    "TrainableModel",
    "UnknownWordError",
    "VectorStore",
    "Vocabulary",
    "Word2VecConfig",
    "Word2VecError",
    "analogy",
    "cosine_similarity",
    "decode",
    "encode",
    "fit",
    "nearest",
    "skipgram_pairs",
    "train",
]
