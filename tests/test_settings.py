import os

import pytest

from settings import DEFAULTS, HERE, load_settings


def test_bundled_config():
    settings = load_settings()
    assert settings["opening_word"] == DEFAULTS["opening_word"]
    assert settings["top_n"] == 10
    assert settings["dictionary"] == os.path.join(HERE, "dictionary.tsv")
    assert settings["sigmoid"]["midpoint"] == pytest.approx(0.00000497)


def test_yaml_overrides(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("hard_mode: true\ndictionary: words.tsv\nsigmoid:\n  steepness: 10.0\n")
    settings = load_settings(str(path))
    assert settings["hard_mode"] is True
    assert settings["dictionary"] == os.path.join(str(tmp_path), "words.tsv")
    assert settings["sigmoid"] == {"steepness": 10.0, "midpoint": DEFAULTS["sigmoid"]["midpoint"]}


def test_keyword_overrides_win(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("top_n: 4\n")
    settings = load_settings(str(path), top_n=2, hard_mode=None)
    assert settings["top_n"] == 2
    assert settings["hard_mode"] is False


@pytest.mark.parametrize("text", ["colour: blue\n", "sigmoid: 3\n", "top_n: 0\n"])
def test_bad_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    with pytest.raises(ValueError):
        load_settings(str(path))
