class WordleError(Exception):
    pass


class UnknownWordError(WordleError, ValueError):
    """A guess word that is not in the dictionary. Recoverable."""

    def __init__(self, word):
        super().__init__(f"Word not in dictionary: {word}")
        self.word = word


class InvalidFeedbackError(WordleError, ValueError):
    """Feedback that cannot be turned into a correctness mask. Recoverable."""


class InvariantViolation(WordleError, RuntimeError):
    """
    Broken engine precondition (empty pool after filtering, bad word or mask
    length, missing opening word). Callers should not try to continue.
    """
