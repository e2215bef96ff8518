from collections import namedtuple
from enum import Enum

from errors import InvalidFeedbackError, InvariantViolation

WORD_LENGTH = 5
NUM_PATTERNS = 3 ** WORD_LENGTH
# Packed masks are stored +1 so a zeroed uint8 cell means "not computed yet"
UNCOMPUTED = 0


class Correctness(Enum):
    # value doubles as the base-3 digit used by encode()
    CORRECT = 0
    MISPLACED = 1
    WRONG = 2

    @classmethod
    def from_name(cls, name):
        """Accept the lowercase wire names: correct, misplaced, wrong."""
        try:
            return cls[str(name).upper()]
        except KeyError:
            raise InvalidFeedbackError(f"Unknown correctness value: {name!r}") from None


GuessRecord = namedtuple("GuessRecord", ["word", "mask"])

ALL_CORRECT = (Correctness.CORRECT,) * WORD_LENGTH


# ---------------
# Feedback oracle
# ---------------
def compute(answer, guess):
    """
    Feedback for `guess` when the secret is `answer`, as a tuple of five
    Correctness values.

    Pass 1 marks exact matches and counts the answer letters left unmatched.
    Pass 2 walks the guess left to right and marks a letter MISPLACED while
    an unmatched copy of it is still available, WRONG otherwise.
    """
    if len(answer) != WORD_LENGTH or len(guess) != WORD_LENGTH:
        raise InvariantViolation(
            f"Feedback needs two {WORD_LENGTH}-letter words, got {answer!r} and {guess!r}"
        )
    mask = [Correctness.WRONG] * WORD_LENGTH
    available = {}

    # exact
    for i in range(WORD_LENGTH):
        if answer[i] == guess[i]:
            mask[i] = Correctness.CORRECT
        else:
            available[answer[i]] = available.get(answer[i], 0) + 1

    # misplaced
    for i in range(WORD_LENGTH):
        if mask[i] is Correctness.WRONG and available.get(guess[i], 0) > 0:
            mask[i] = Correctness.MISPLACED
            available[guess[i]] -= 1

    return tuple(mask)


def _claim(letter, answer, used):
    for i, ch in enumerate(answer):
        if ch == letter and not used[i]:
            used[i] = True
            return True
    return False


def matches(record, answer):
    """
    True when `answer` could have produced `record.mask` for `record.word`.

    Same result as compute(answer, record.word) == record.mask, but bails
    out as soon as a position disagrees.
    """
    word, mask = record.word, record.mask
    if len(answer) != WORD_LENGTH or len(word) != WORD_LENGTH or len(mask) != WORD_LENGTH:
        raise InvariantViolation(f"Cannot match {word!r}/{answer!r} against a mask of length {len(mask)}")
    used = [False] * WORD_LENGTH

    for i in range(WORD_LENGTH):
        if answer[i] == word[i]:
            if mask[i] is not Correctness.CORRECT:
                return False
            used[i] = True
        elif mask[i] is Correctness.CORRECT:
            return False

    for letter, mark in zip(word, mask):
        if mark is Correctness.CORRECT:
            continue
        if _claim(letter, answer, used) != (mark is Correctness.MISPLACED):
            return False

    # whatever is left is correctly WRONG
    return True


# -------------
# Pattern codec
# -------------
def encode(mask):
    """Pack a mask into 1..243 (base 3, leftmost position most significant)."""
    code = 0
    for c in mask:
        code = code * 3 + c.value
    return code + 1


def decode(code):
    if not 1 <= code <= NUM_PATTERNS:
        raise ValueError(f"Packed mask out of range: {code}")
    code -= 1
    digits = []
    for _ in range(WORD_LENGTH):
        code, digit = divmod(code, 3)
        digits.append(Correctness(digit))
    return tuple(reversed(digits))


# -------------------------
# Console feedback notation
# -------------------------
def parse_feedback(word, feedback_str):
    """
    Convert console feedback for `word` into a mask:
      - the guessed letter itself => CORRECT
      - '-'                       => MISPLACED
      - '+'                       => WRONG
    """
    if len(feedback_str) != WORD_LENGTH or len(word) != WORD_LENGTH:
        raise InvalidFeedbackError(f"Feedback {feedback_str!r} does not fit guess {word!r}")
    mask = []
    for letter, ch in zip(word, feedback_str.lower()):
        if ch == '+':
            mask.append(Correctness.WRONG)
        elif ch == '-':
            mask.append(Correctness.MISPLACED)
        elif ch == letter:
            mask.append(Correctness.CORRECT)
        else:
            raise InvalidFeedbackError(f"Unexpected feedback character {ch!r} for letter {letter!r}")
    return tuple(mask)

