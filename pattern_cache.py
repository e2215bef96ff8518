import logging
import threading

import numpy as np

from feedback import UNCOMPUTED, compute, encode

logger = logging.getLogger(__name__)


class PairwiseCache:
    """
    Lazily filled (N x N) uint8 table of packed masks.

    matrix[g, a] is encode(compute(words[a], words[g])), i.e. row = guess,
    column = answer; 0 means not computed yet. Takes N**2 bytes, so bound
    the dictionary (max_words) when memory matters.

    Cells are written without locking. Use one instance per thread (see
    for_thread); sessions on the same thread can share it because every
    cell only ever receives one value.
    """

    def __init__(self, dictionary, matrix=None):
        n = len(dictionary)
        self.dictionary = dictionary
        if matrix is None:
            matrix = np.zeros((n, n), dtype=np.uint8)
        elif matrix.shape != (n, n) or matrix.dtype != np.uint8:
            raise ValueError(f"Pattern matrix must be uint8 of shape {(n, n)}, got {matrix.dtype} {matrix.shape}")
        self.matrix = matrix

    def get_or_compute(self, guess_idx, guess_word, answer_word, answer_idx):
        code = self.matrix[guess_idx, answer_idx]
        if code == UNCOMPUTED:
            code = encode(compute(answer_word, guess_word))
            self.matrix[guess_idx, answer_idx] = code
        return int(code)

    def row(self, guess_idx, guess_word, answer_idxs):
        """Packed masks of `guess_word` against every index in `answer_idxs`."""
        codes = self.matrix[guess_idx, answer_idxs]
        missing = np.flatnonzero(codes == UNCOMPUTED)
        if missing.size:
            words = self.dictionary.words
            for k in missing:
                codes[k] = encode(compute(words[answer_idxs[k]], guess_word))
            self.matrix[guess_idx, answer_idxs[missing]] = codes[missing]
        return codes

    def fill(self):
        words = self.dictionary.words
        for g in range(len(words)):
            self.row(g, words[g], self.dictionary.indices)

    @property
    def computed(self):
        return int(np.count_nonzero(self.matrix))

    @property
    def nbytes(self):
        return self.matrix.nbytes

    def save(self, path):
        np.savez(path,
                 words=np.array(self.dictionary.words, dtype=str),
                 pattern_matrix=self.matrix)

    @classmethod
    def load(cls, path, dictionary):
        with np.load(path) as data:
            words = [str(w) for w in data["words"]]
            if words != dictionary.words:
                raise ValueError(f"{path} was built for a different word list")
            matrix = np.array(data["pattern_matrix"], dtype=np.uint8)
        logger.info("Seeded pattern cache from %s (%d cells)", path, np.count_nonzero(matrix))
        return cls(dictionary, matrix)


def for_thread(dictionary, pattern_data=None):
    """
    The calling thread's cache for `dictionary`, created on first use.

    `pattern_data` only seeds a cache being created; once the thread has a
    cache it is returned as is.
    """
    cache = getattr(dictionary.thread_state, "pattern_cache", None)
    if cache is not None and pattern_data is not None:
        logger.debug("Thread %s already has a pattern cache, not seeding from %s",
                     threading.current_thread().name, pattern_data)
    if cache is None:
        if pattern_data is not None:
            cache = PairwiseCache.load(pattern_data, dictionary)
        else:
            cache = PairwiseCache(dictionary)
        dictionary.thread_state.pattern_cache = cache
        logger.debug("Created pattern cache for thread %s (%d bytes)",
                     threading.current_thread().name, cache.nbytes)
    return cache
