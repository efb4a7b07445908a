import argparse
import sys

import numpy as np

from beritavec.config import Word2VecConfig
from beritavec.corpus_utils import DEFAULT_STOPWORDS, load_stopwords, load_texts, prepare_documents
from beritavec.data import SkipGramSampler
from beritavec.errors import InvalidConfigError, UnknownWordError, Word2VecError
from beritavec.model import SkipGramNegSampling
from beritavec.store import VectorStore
from beritavec.train import train
from beritavec.vocab import encode_corpus, fit

# Entry point: train on a news CSV (or the demo corpus) and print neighbours.
# Usage: python -m beritavec.run [--csv path] [--query word ...]

DEMO_TEXTS = [
    "Presiden meresmikan jalan tol baru di Jawa Tengah pada hari Senin",
    "Menteri keuangan mengumumkan anggaran negara untuk tahun depan",
    "Harga beras naik di pasar tradisional Jakarta menjelang lebaran",
    "Pemerintah menaikkan harga bahan bakar minyak bersubsidi",
    "Presiden dan menteri membahas anggaran pembangunan jalan tol",
    "Banjir melanda Jakarta setelah hujan deras sepanjang malam",
    "Warga Jakarta mengeluhkan harga beras dan minyak goreng",
    "Tim nasional sepak bola menang atas Malaysia di stadion Jakarta",
    "Pemain tim nasional berlatih di stadion menjelang pertandingan",
    "Menteri pekerjaan umum meninjau pembangunan jalan tol Sumatra",
    "Banjir dan hujan deras merendam ribuan rumah warga",
    "Harga minyak dunia turun dan pemerintah meninjau harga bahan bakar",
]

DEFAULT_QUERIES = ["jakarta", "harga", "presiden"]


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Skip-gram word embeddings on a news corpus")
    ap.add_argument("--csv", type=str, default=None, help="CSV file with a text column")
    ap.add_argument("--text-column", type=str, default="text")
    ap.add_argument("--stopwords", type=str, default=None, help="Stopword list: URL or file path")
    ap.add_argument("--config", type=str, default=None, help="JSON config; overrides the flags below")
    ap.add_argument("--max-vocab", type=int, default=10000)
    ap.add_argument("--dim", type=int, default=100)
    ap.add_argument("--window", type=int, default=2)
    ap.add_argument("--negative-ratio", type=float, default=1.0)
    ap.add_argument("--epochs", type=int, default=5)
    ap.add_argument("--steps-per-epoch", type=int, default=100)
    ap.add_argument("--batch-size", type=int, default=128)
    ap.add_argument("--lr", type=float, default=0.025)
    ap.add_argument("--no-adagrad", action="store_true", help="Use vanilla SGD (numpy backend)")
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--backend", choices=["numpy", "torch"], default="numpy")
    ap.add_argument("--query", nargs="*", default=None, help="Words to look up")
    ap.add_argument("--k", type=int, default=5)
    ap.add_argument("--exclude-self", action="store_true", help="Drop the query word from results")
    ap.add_argument("--save", type=str, default=None, help="Write vectors (word2vec text format)")
    ap.add_argument("--log-every", type=int, default=50)
    return ap.parse_args(argv)


def build_config(args: argparse.Namespace) -> Word2VecConfig:
    if args.config:
        return Word2VecConfig.from_json(args.config)
    return Word2VecConfig(
        max_vocab=args.max_vocab,
        embedding_dim=args.dim,
        window_size=args.window,
        negative_ratio=args.negative_ratio,
        epochs=args.epochs,
        steps_per_epoch=args.steps_per_epoch,
        batch_size=args.batch_size,
        lr=args.lr,
        use_adagrad=not args.no_adagrad,
        seed=args.seed,
        exclude_self=args.exclude_self,
    )


def build_model(config: Word2VecConfig, vocab_size: int, backend: str):
    if backend == "torch":
        from beritavec.torch_model import TorchTrainer

        return TorchTrainer.build(vocab_size, config.embedding_dim, lr=config.lr, seed=config.seed)
    return SkipGramNegSampling(
        vocab_size,
        config.embedding_dim,
        lr=config.lr,
        use_adagrad=config.use_adagrad,
        seed=config.seed,
    )


def main(argv=None) -> int:
    """Train on CSV or demo corpus; print nearest neighbours; optionally save vectors."""
    args = parse_args(argv)
    # Config errors surface before any file or network access
    config = build_config(args)
    if args.log_every < 1:
        raise InvalidConfigError("log_every", args.log_every)

    texts = load_texts(args.csv, args.text_column) if args.csv else DEMO_TEXTS
    stopwords = load_stopwords(args.stopwords) if args.stopwords else DEFAULT_STOPWORDS
    documents = prepare_documents(texts, stopwords)
    vocab = fit(documents, config.max_vocab)
    encoded = encode_corpus(documents, vocab)
    print(f"Vocab size {vocab.size}, documents {len(encoded)}, tokens {sum(len(d) for d in encoded)}")

    sampler = SkipGramSampler(encoded, vocab.size, config.window_size, config.negative_ratio)
    model = build_model(config, vocab.size, args.backend)
    train(model, sampler, config, log_every=args.log_every, rng=np.random.default_rng(config.seed))

    store = VectorStore(model.parameters(), vocab, exclude_self=config.exclude_self)
    queries = args.query if args.query is not None else [w for w in DEFAULT_QUERIES if w in vocab]
    for w in queries:
        try:
            nn_str = ", ".join(f"{u}({s:.3f})" for u, s in store.nearest(w.lower(), k=args.k))
        except UnknownWordError as e:
            print(f"  {e}")
            continue
        print(f"  '{w}' -> {nn_str}")

    if args.save:
        store.save(args.save)
        print(f"Saved {vocab.size} vectors to {args.save}")
    return 0


def cli() -> int:
    """Console entry point: report input errors without a traceback."""
    try:
        return main()
    except Word2VecError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(cli())
