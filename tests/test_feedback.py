import itertools as it
from collections import Counter

import pytest

from errors import InvalidFeedbackError, InvariantViolation
from feedback import (ALL_CORRECT, NUM_PATTERNS, Correctness, GuessRecord, compute, decode,
                      encode, matches, parse_feedback)

C, M, W = Correctness.CORRECT, Correctness.MISPLACED, Correctness.WRONG


def test_same_word_is_all_correct(words):
    for w in words:
        assert compute(w, w) == ALL_CORRECT


def test_no_permutation_shares_a_position():
    assert compute("abcde", "eabcd") == (M, M, M, M, M)


def test_exact_word():
    assert compute("abcde", "abcde") == (C, C, C, C, C)


def test_duplicate_letters_sassy_class():
    # answer sassy, guess class: the 4th letter claims one 's' exactly,
    # the 5th picks up one of the two unmatched ones
    assert compute("sassy", "class") == (W, W, M, C, M)


def test_duplicate_guess_letter_only_marked_once():
    # one 'l' in the answer, already matched exactly
    assert compute("angle", "hello") == (W, M, W, C, W)
    assert compute("melon", "hello") == (W, C, C, W, M)


def test_never_more_marks_than_answer_letters(words):
    for answer, guess in it.product(words, repeat=2):
        mask = compute(answer, guess)
        marked = Counter(g for g, c in zip(guess, mask) if c is not W)
        available = Counter(answer)
        for letter, n in marked.items():
            assert n <= available[letter], (answer, guess, mask)


def test_matches_agrees_with_compute(words):
    for guess, secret in it.product(words, repeat=2):
        record = GuessRecord(guess, compute(secret, guess))
        for answer in words:
            assert matches(record, answer) == (compute(answer, guess) == record.mask)


def test_length_violation():
    with pytest.raises(InvariantViolation):
        compute("abcd", "abcde")
    with pytest.raises(InvariantViolation):
        matches(GuessRecord("tares", (C, C, C, C)), "tares")


def test_codec_round_trip():
    for mask in it.product(Correctness, repeat=5):
        code = encode(mask)
        assert 1 <= code <= NUM_PATTERNS
        assert decode(code) == mask


def test_codec_layout():
    assert encode(ALL_CORRECT) == 1
    assert encode((W, W, W, W, W)) == NUM_PATTERNS
    # leftmost position is the most significant digit
    assert encode((M, C, C, C, C)) == 81 + 1
    assert encode((C, C, C, C, M)) == 1 + 1


def test_decode_rejects_sentinel():
    with pytest.raises(ValueError):
        decode(0)


def test_parse_feedback():
    assert parse_feedback("tares", "t-r++") == (C, M, C, W, W)
    assert parse_feedback("tares", "TARES") == ALL_CORRECT
    with pytest.raises(InvalidFeedbackError):
        parse_feedback("tares", "x-r++")
    with pytest.raises(InvalidFeedbackError):
        parse_feedback("tares", "t-r+")


def test_correctness_from_name():
    assert Correctness.from_name("misplaced") is M
    with pytest.raises(InvalidFeedbackError):
        Correctness.from_name("yellow")
