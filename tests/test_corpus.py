import numpy as np
import pytest

from textkit.corpus import Corpus


def test_vocabulary_is_sorted_and_indexed():
    corpus = Corpus([["the", "cat", "sat"], ["the", "dog", "sat"]])
    assert corpus.vocabulary == ("cat", "dog", "sat", "the")
    assert corpus.term_index["sat"] == 2
    assert len(corpus) == 2


def test_term_counts_are_documents_by_terms():
    corpus = Corpus([["b", "a", "b"], ["c"]])
    counts = corpus.term_counts()
    assert counts.shape == (2, 3)
    np.testing.assert_array_equal(counts, [[1.0, 2.0, 0.0], [0.0, 0.0, 1.0]])


def test_document_frequency_and_term_frequencies():
    corpus = Corpus([["a", "a", "b"], ["a"], []])
    assert corpus.document_frequency("a") == 2
    assert corpus.document_frequency("z") == 0
    assert corpus.term_frequencies(0)["a"] == 2
    assert corpus[2] == ()


def test_term_frequencies_returns_a_copy():
    corpus = Corpus([["a"]])
    corpus.term_frequencies(0)["a"] += 5
    assert corpus.term_frequencies(0)["a"] == 1


def test_input_lists_are_not_aliased():
    documents = [["a", "b"]]
    corpus = Corpus(documents)
    documents[0].append("c")
    assert corpus[0] == ("a", "b")


def test_from_texts_stems_and_drops_stop_words():
    corpus = Corpus.from_texts(["The cats sat", "Dogs barked", "the and of"])
    assert corpus.documents == (("cat", "sat"), ("dog", "bark"), ())


def test_from_texts_without_stemming():
    corpus = Corpus.from_texts(["The cats sat"], stem=False, remove_stop_words=False)
    assert corpus[0] == ("the", "cats", "sat")


def test_titles_must_match_documents():
    with pytest.raises(ValueError):
        Corpus([["a"]], titles=["one", "two"])


def test_empty_corpus_is_representable():
    corpus = Corpus([])
    assert len(corpus) == 0
    assert corpus.vocabulary == ()
    assert corpus.term_counts().shape == (0, 0)


def test_raw_strings_are_rejected():
    with pytest.raises(TypeError):
        Corpus(["the cat sat", "the dog sat"])
    with pytest.raises(TypeError):
        Corpus([["the", "cat"], "the dog"])
