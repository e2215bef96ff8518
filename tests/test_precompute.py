import numpy as np

import pattern_cache
from dictionary import Dictionary
from feedback import compute, encode
from guesser import Guesser
from pattern_cache import PairwiseCache
from precompute import build_pattern_data
from settings import load_settings


def test_build_pattern_data(dictionary_tsv, tmp_path, words):
    out = tmp_path / "pattern_data.npz"
    settings = load_settings(dictionary=str(dictionary_tsv))
    cache = build_pattern_data(settings, str(out))

    assert out.exists()
    assert cache.computed == len(words) ** 2
    i, j = words.index("class"), words.index("sassy")
    assert cache.matrix[i, j] == encode(compute("sassy", "class"))


def test_seeded_thread_cache(dictionary_tsv, tmp_path):
    out = tmp_path / "pattern_data.npz"
    settings = load_settings(dictionary=str(dictionary_tsv))
    built = build_pattern_data(settings, str(out))

    dictionary = Dictionary.from_tsv(dictionary_tsv)
    seeded = pattern_cache.for_thread(dictionary, str(out))
    assert np.array_equal(seeded.matrix, built.matrix)

    lazy = PairwiseCache(dictionary)
    history = [("tares", compute("angle", "tares"))]
    assert Guesser(dictionary, pattern_data=str(out)).guess(history) == \
        Guesser(dictionary, cache=lazy).guess(history)
