import logging
import math
from collections import namedtuple

import numpy as np

import pattern_cache
from candidates import CandidatePool
from errors import InvariantViolation, UnknownWordError
from feedback import NUM_PATTERNS, WORD_LENGTH, GuessRecord, encode

logger = logging.getLogger(__name__)

FIRST_GUESS = "tares"
TOP_N = 10
# Minimum number of still-possible words scored before stopping early
MIN_EVALUATED = 20

Suggestion = namedtuple("Suggestion", ["word", "score"])


# ---------------
# Scoring helpers
# ---------------
def est_steps_left(entropy):
    """Regression fit of guesses still needed for `entropy` bits left."""
    return math.log(entropy * 3.870 + 3.679)


def shannon_entropy(totals, total_weight):
    """Entropy (bits) of pattern buckets holding accumulated prior weight."""
    p = totals[totals > 0] / total_weight
    return float(-np.sum(p * np.log2(p)))


# -------------------------
# Guesser: one game session
# -------------------------
class Guesser:
    def __init__(self, dictionary, hard_mode=False, opening_word=FIRST_GUESS,
                 top_n=TOP_N, cache=None, pattern_data=None):
        """
        dictionary:   the word list and priors (shared, read-only)
        hard_mode:    only score words that are still possible answers
        opening_word: returned for an empty history
        cache:        PairwiseCache to use; by default the calling thread's
        pattern_data: optional .npz used to seed a new thread cache
        """
        self.dictionary = dictionary
        self.hard_mode = hard_mode
        self.opening_word = opening_word
        self.top_n = top_n
        self.pattern_data = pattern_data
        self._cache = cache

        self.pool = CandidatePool.full(dictionary)
        self.entropy_log = []
        self.last_guess_idx = None

    @property
    def cache(self):
        if self._cache is not None:
            return self._cache
        return pattern_cache.for_thread(self.dictionary, self.pattern_data)

    def guess(self, history):
        """
        Rank next guesses given every (word, mask) played so far.

        Returns up to top_n Suggestion(word, score) sorted by score, highest
        first. The score is minus the expected total number of turns if that
        word is played next.
        """
        history = [GuessRecord(*record) for record in history]
        if history and history[0].word not in self.dictionary:
            raise UnknownWordError(history[0].word)
        for record in history:
            if len(record.mask) != WORD_LENGTH:
                raise InvariantViolation(f"Mask for {record.word!r} has {len(record.mask)} entries")

        turn = len(history)
        cache = self.cache

        if history:
            self.filter_candidates(history[-1], cache)

        if not history:
            idx = self.dictionary.lookup(self.opening_word)
            if idx is None:
                raise InvariantViolation(f"Opening word {self.opening_word!r} is not in the dictionary")
            self.last_guess_idx = idx
            return [Suggestion(self.opening_word, 0.0)]

        if len(self.pool) == 1:
            word, _, idx = next(iter(self.pool))
            self.last_guess_idx = idx
            return [Suggestion(word, 0.0)]

        return self.rank(turn, cache)

    def filter_candidates(self, record, cache):
        """Drop every candidate that would not have produced record.mask."""
        guess_idx = self.dictionary.lookup(record.word)
        if guess_idx is None:
            fallback = self.last_guess_idx if self.last_guess_idx is not None else 0
            logger.warning("Played word %r is not in the dictionary, reusing row of %r",
                           record.word, self.dictionary.words[fallback])
            guess_idx = fallback

        reference = encode(record.mask)
        codes = cache.row(guess_idx, record.word, self.pool.indices)
        keep = codes == reference
        if not keep.any():
            raise InvariantViolation(
                f"No candidate is consistent with {record.word!r}; the answer is not in the dictionary "
                "or the feedback is wrong"
            )
        self.last_guess_idx = guess_idx
        self.pool.retain(keep)

    def rank(self, turn, cache):
        pool = self.pool
        total_weight = pool.total_weight
        remaining_entropy = pool.entropy()
        self.entropy_log.append(remaining_entropy)
        logger.debug("Turn %d: %d candidates, %.3f bits", turn, len(pool), remaining_entropy)

        consider = pool if self.hard_mode else CandidatePool.full(self.dictionary)
        stop = min(max(len(pool) // 3, MIN_EVALUATED), len(pool))

        scored = []
        in_pool_seen = 0
        for word, weight, idx in consider:
            codes = cache.row(idx, word, pool.indices)
            totals = np.bincount(codes, weights=pool.weights, minlength=NUM_PATTERNS + 1)
            e_info = shannon_entropy(totals, total_weight)

            in_pool = pool.contains(idx)
            p_word = weight / total_weight if in_pool else 0.0
            goodness = -(p_word * (turn + 1)
                         + (1 - p_word) * (turn + est_steps_left(remaining_entropy - e_info)))
            scored.append((word, goodness))

            if in_pool:
                in_pool_seen += 1
                if in_pool_seen >= stop:
                    break

        # stable: ties keep evaluation order
        scored.sort(key=lambda s: s[1], reverse=True)
        return [Suggestion(word, score) for word, score in scored[:self.top_n]]
