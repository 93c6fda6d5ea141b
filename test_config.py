import pytest

from DocSearch.config import DEFAULT_CONFIG, load_config
from DocSearch.exceptions import ConfigError


def test_bundled_config_matches_defaults():
    config = load_config()
    assert config["search"]["similarity_limit"] == pytest.approx(5e-4)
    assert config["search"]["max_results"] == 10
    assert config["preprocessing"]["stop_words"]["use"] is True


def test_missing_config_falls_back_to_defaults(tmp_path, capsys):
    config = load_config(str(tmp_path / "missing.json"))
    assert config == DEFAULT_CONFIG
    assert "Warning" in capsys.readouterr().out


def test_partial_config_with_comments_is_merged(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        '{\n'
        '    // only override the result cap\n'
        '    "search": {"max_results": 3}\n'
        '}\n',
        encoding="utf-8"
    )

    config = load_config(str(path))
    assert config["search"]["max_results"] == 3
    assert config["search"]["similarity_limit"] == pytest.approx(5e-4)
    assert config["input"]["encoding"] == "utf-8"


def test_malformed_config_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"search": ', encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(path))
