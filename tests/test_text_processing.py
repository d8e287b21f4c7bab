from collections import Counter

from textkit.text_processing import (
    load_stop_words,
    preprocess_text,
    sentence_split,
    term_frequency,
    tokenize,
    tokenize_and_stem,
)


def test_sentence_split():
    assert sentence_split("Why hello there. General Kenobi!") == ["Why hello there", "General Kenobi"]


def test_sentence_split_keeps_quoted_terminators_in_the_sentence():
    assert sentence_split('He said "Stop!" Then he left.') == ['He said "Stop" Then he left']
    text = 'He said "stop." Then he left... Really?!'
    assert sentence_split(text) == ['He said "stop" Then he left', "Really"]


def test_sentence_split_empty_text():
    assert sentence_split("") == []
    assert sentence_split("  ...  ") == []


def test_tokenize_strips_punctuation_and_keeps_case():
    assert tokenize("Why hello there. General Kenobi!") == ["Why", "hello", "there", "General", "Kenobi"]


def test_preprocess_text():
    assert preprocess_text("Hello, World!") == "hello world"


def test_term_frequency():
    tokens = [
        "fear", "leads", "to", "anger", "anger", "leads", "to", "hatred", "hatred",
        "leads", "to", "conflict", "conflict", "leads", "to", "suffering",
    ]
    assert term_frequency(tokens) == Counter({
        "fear": 1, "leads": 4, "to": 4, "anger": 2, "hatred": 2, "conflict": 2, "suffering": 1,
    })


def test_stop_words_are_loaded_once():
    stop_words = load_stop_words()
    assert isinstance(stop_words, frozenset)
    assert "the" in stop_words
    assert load_stop_words() is stop_words


def test_tokenize_and_stem():
    assert tokenize_and_stem("I betrayed the bees!") == ["betrai", "bee"]


def test_tokenize_and_stem_keeping_stop_words():
    assert tokenize_and_stem("I betrayed the bees!", remove_stop_words=False) == ["i", "betrai", "the", "bee"]
