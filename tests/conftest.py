import pytest

from dictionary import Dictionary
from pattern_cache import PairwiseCache

WORDS = [
    ("tares", 900), ("crane", 800), ("slate", 750), ("raise", 700), ("stare", 650),
    ("tears", 600), ("rates", 550), ("crate", 500), ("trace", 450), ("react", 400),
    ("lemon", 380), ("melon", 360), ("angel", 340), ("angle", 320), ("glean", 300),
    ("hello", 280), ("sassy", 260), ("class", 240), ("brass", 220), ("grass", 200),
    ("plumb", 180), ("thumb", 160), ("nymph", 140), ("fjord", 120), ("quick", 100),
    ("zebra", 90), ("stone", 80), ("notes", 70), ("onset", 60), ("tones", 50),
]


@pytest.fixture
def words():
    return [w for w, _ in WORDS]


@pytest.fixture
def dictionary():
    return Dictionary(WORDS)


@pytest.fixture
def cache(dictionary):
    return PairwiseCache(dictionary)


@pytest.fixture
def dictionary_tsv(tmp_path):
    path = tmp_path / "dictionary.tsv"
    lines = ["word\tcount"] + [f"{w}\t{c}" for w, c in WORDS]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
