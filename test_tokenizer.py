import pytest

from DocSearch.preprocessing.tokenizer import LetterTokenizer
from DocSearch.preprocessing.preprocess import (
    LowercasePreprocessor,
    PreprocessingPipeline,
    StopWordsPreprocessor,
    create_pipeline,
    load_stop_words,
    tokenize,
)


def test_tokenize_keeps_duplicates_in_document_order():
    assert tokenize("cat dog cat", set()) == ["cat", "dog", "cat"]


def test_tokenize_drops_digits_punctuation_and_symbols():
    assert tokenize("Hello, World! 42abc x_y $%&", set()) == ["hello", "world", "abc", "x", "y"]


def test_tokenize_lowercases_unicode_letters():
    assert tokenize("Čovjek ŠEĆE gradom.", set()) == ["čovjek", "šeće", "gradom"]


def test_tokenize_filters_stop_words_after_lowercasing():
    assert tokenize("The Cat and THE dog", {"the", "and"}) == ["cat", "dog"]


def test_tokenize_empty_and_letterless_text():
    assert tokenize("", set()) == []
    assert tokenize("123 456 !!!", set()) == []


def test_letter_tokenizer_closes_last_token_and_records_positions():
    tokens = LetterTokenizer().tokenize("ab1cd")
    assert [token.original_form for token in tokens] == ["ab", "cd"]
    assert [token.position for token in tokens] == [0, 3]


def test_pipeline_terms_skip_removed_tokens():
    pipeline = PreprocessingPipeline([LowercasePreprocessor(), StopWordsPreprocessor({"is"})])
    assert pipeline.terms("It IS raining") == ["it", "raining"]


def test_load_stop_words_languages():
    english = load_stop_words("en")
    croatian = load_stop_words("hr")
    both = load_stop_words("both")

    assert "the" in english
    assert "je" in croatian
    assert english | croatian == both


def test_load_stop_words_missing_file_warns(tmp_path, capsys):
    assert load_stop_words("en", stop_words_dir=str(tmp_path)) == frozenset()
    assert "not found" in capsys.readouterr().out


@pytest.mark.parametrize("use_stop_words, expected", [
    (True, ["cat"]),
    (False, ["the", "cat"]),
])
def test_create_pipeline_respects_stop_word_switch(use_stop_words, expected):
    config = {"preprocessing": {"lowercase": True, "stop_words": {"use": use_stop_words, "language": "en"}}}
    pipeline = create_pipeline(config, stop_words={"the"})
    assert pipeline.terms("The cat") == expected
