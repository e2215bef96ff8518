# precompute.py
import argparse
import logging
import time

from rich.console import Console
from rich.logging import RichHandler

from dictionary import Dictionary
from pattern_cache import PairwiseCache
from settings import load_settings

logger = logging.getLogger(__name__)


def build_pattern_data(settings, out_path):
    """Fill the full N x N pattern table for the configured dictionary and save it."""
    dictionary = Dictionary.from_tsv(
        settings["dictionary"],
        max_words=settings["max_words"],
        steepness=settings["sigmoid"]["steepness"],
        midpoint=settings["sigmoid"]["midpoint"],
    )
    cache = PairwiseCache(dictionary)
    logger.info("Building pattern matrix for %d words (%d bytes)...", len(dictionary), cache.nbytes)

    start = time.perf_counter()
    cache.fill()
    cache.save(out_path)
    logger.info("Saved %s in %.1fs", out_path, time.perf_counter() - start)
    return cache


def main(argv=None):
    parser = argparse.ArgumentParser(description="Precompute the guess/answer pattern table.")
    parser.add_argument("--config", help="path to a YAML config file")
    parser.add_argument("--out", default="pattern_data.npz")
    args = parser.parse_args(argv)

    settings = load_settings(args.config)
    logging.basicConfig(level=settings["log_level"], format="%(message)s",
                        datefmt="[%X]", handlers=[RichHandler()])

    cache = build_pattern_data(settings, args.out)
    Console().print(f"[bold green]Done.[/bold green] {cache.matrix.shape} matrix written to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
