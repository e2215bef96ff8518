import numpy as np


class CandidatePool:
    """
    Words still consistent with every observed mask, in dictionary order,
    each with its prior weight.

    A fresh pool borrows the dictionary's (read-only) index and weight
    arrays. The first retain() replaces them with a private filtered copy.
    """

    def __init__(self, dictionary, indices, weights, shared=False):
        self.dictionary = dictionary
        self.indices = indices
        self.weights = weights
        self._shared = shared
        self._members = None

    @classmethod
    def full(cls, dictionary):
        return cls(dictionary, dictionary.indices, dictionary.weights, shared=True)

    @property
    def is_shared(self):
        return self._shared

    def __len__(self):
        return len(self.indices)

    def __iter__(self):
        words = self.dictionary.words
        for idx, weight in zip(self.indices, self.weights):
            yield words[idx], float(weight), int(idx)

    @property
    def words(self):
        return [self.dictionary.words[i] for i in self.indices]

    @property
    def total_weight(self):
        return float(self.weights.sum())

    def contains(self, idx):
        if self._members is None:
            members = np.zeros(len(self.dictionary), dtype=bool)
            members[self.indices] = True
            self._members = members
        return bool(self._members[idx])

    def retain(self, keep):
        """
        Keep only some entries. `keep` is either a boolean array aligned with
        the pool or a predicate called as keep(word, weight, idx).
        """
        if callable(keep):
            keep = np.fromiter((keep(*entry) for entry in self), dtype=bool, count=len(self))
        keep = np.asarray(keep, dtype=bool)
        if keep.shape != self.indices.shape:
            raise ValueError(f"Filter of shape {keep.shape} does not fit a pool of {len(self)}")
        self.indices = self.indices[keep]
        self.weights = self.weights[keep]
        self._shared = False
        self._members = None

    def entropy(self):
        """Shannon entropy (bits) of the normalized prior weights."""
        total = self.weights.sum()
        if total <= 0:
            return 0.0
        p = self.weights[self.weights > 0] / total
        return float(-np.sum(p * np.log2(p)))
