import logging
import threading

import numpy as np
import pandas as pd

from feedback import WORD_LENGTH

logger = logging.getLogger(__name__)

# Logistic prior over a word's share of the total frequency
STEEPNESS = 30000000.0
MIDPOINT = 0.00000497


def sigmoid(p, steepness=STEEPNESS, midpoint=MIDPOINT):
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-steepness * (np.asarray(p, dtype=float) - midpoint)))


def is_valid_word(w):
    return len(w) == WORD_LENGTH and w.isascii() and w.isalpha() and w.islower()


class Dictionary:
    """
    Fixed, ordered list of (word, count) pairs. A word's position is its
    index everywhere else (pairwise cache rows/columns, pool entries).
    Never mutated after construction.
    """

    def __init__(self, entries, steepness=STEEPNESS, midpoint=MIDPOINT):
        words = []
        counts = []
        seen = set()
        for word, count in entries:
            word = str(word).strip()
            if not is_valid_word(word):
                logger.debug("Skipping invalid dictionary word %r", word)
                continue
            if word in seen:
                logger.debug("Skipping duplicate dictionary word %r", word)
                continue
            if count < 0:
                raise ValueError(f"Negative frequency for {word!r}: {count}")
            seen.add(word)
            words.append(word)
            counts.append(int(count))

        self.words = words
        self.counts = np.array(counts, dtype=np.int64)
        self.index = {w: i for i, w in enumerate(words)}
        self.indices = np.arange(len(words), dtype=np.int32)
        self.indices.flags.writeable = False
        self.steepness = steepness
        self.midpoint = midpoint

        self._weights = None
        self._weights_lock = threading.Lock()
        # per-thread state (the pairwise cache lives here)
        self.thread_state = threading.local()

    @classmethod
    def from_tsv(cls, path, max_words=None, steepness=STEEPNESS, midpoint=MIDPOINT):
        """Load a tab-separated resource with `word` and `count` columns."""
        df = pd.read_csv(path, sep="\t", dtype={"word": str, "count": "int64"},
                         keep_default_na=False)
        if max_words is not None:
            df = df.head(max_words)
        dictionary = cls(zip(df["word"], df["count"]), steepness=steepness, midpoint=midpoint)
        logger.info("Loaded %d dictionary words from %s", len(dictionary), path)
        return dictionary

    def __len__(self):
        return len(self.words)

    def __contains__(self, word):
        return word in self.index

    def lookup(self, word):
        """Index of `word`, or None."""
        return self.index.get(word)

    @property
    def weights(self):
        """Prior weight per index, computed once on first access."""
        if self._weights is None:
            with self._weights_lock:
                if self._weights is None:
                    total = self.counts.sum()
                    shares = self.counts / total if total > 0 else np.zeros(len(self.counts))
                    weights = sigmoid(shares, self.steepness, self.midpoint)
                    weights.flags.writeable = False
                    self._weights = weights
        return self._weights


_loaded = {}
_loaded_lock = threading.Lock()


def load_dictionary(settings):
    """Process-wide dictionary for `settings`, loaded once."""
    key = (settings["dictionary"], settings["max_words"],
           settings["sigmoid"]["steepness"], settings["sigmoid"]["midpoint"])
    with _loaded_lock:
        if key not in _loaded:
            _loaded[key] = Dictionary.from_tsv(
                settings["dictionary"],
                max_words=settings["max_words"],
                steepness=settings["sigmoid"]["steepness"],
                midpoint=settings["sigmoid"]["midpoint"],
            )
        return _loaded[key]
