import numpy as np
import pytest

from textkit.corpus import Corpus
from textkit.similarity import (
    cosine_similarity_matrix,
    lsa_cosine_similarity_matrix,
    most_similar,
)
from textkit.tfidf import build_tfidf


@pytest.fixture
def sample_matrix(frequency_documents):
    return build_tfidf(frequency_documents)


def test_two_documents_without_shared_weighted_terms():
    matrix = build_tfidf([["the", "cat", "sat"], ["the", "dog", "sat"]])
    similarity = cosine_similarity_matrix(matrix)
    np.testing.assert_array_equal(similarity, [[1.0, 0.0], [0.0, 1.0]])


def test_sample_similarity(sample_matrix):
    similarity = cosine_similarity_matrix(sample_matrix)
    expected = np.array([
        [1., 0., 0., 0.],
        [0., 1., 0., 0.],
        [0., 0., 1., 0.149071198499986],
        [0., 0., 0.149071198499986, 1.],
    ])
    np.testing.assert_allclose(similarity, expected, atol=1e-12)


def test_similarity_is_symmetric_with_unit_diagonal():
    corpus = Corpus.from_texts([
        "The cat sat on the mat",
        "A cat and a dog sat together",
        "Dogs chase cats in the yard",
        "Stock markets rallied today",
    ])
    similarity = cosine_similarity_matrix(build_tfidf(corpus))
    n = len(corpus)
    assert similarity.shape == (n, n)
    for i in range(n):
        assert similarity[i, i] == 1.0
        for j in range(n):
            assert similarity[i, j] == similarity[j, i]
            assert 0.0 <= similarity[i, j] <= 1.0


def test_empty_document_has_zero_self_similarity():
    corpus = Corpus.from_texts(["The cats sat", "Dogs barked", "the and of"])
    similarity = cosine_similarity_matrix(build_tfidf(corpus))
    assert similarity[2, 2] == 0.0
    np.testing.assert_array_equal(similarity[2], [0.0, 0.0, 0.0])


def test_identical_documents_are_fully_similar():
    matrix = build_tfidf([["red", "apple"], ["red", "apple"], ["green", "pear"]])
    similarity = cosine_similarity_matrix(matrix)
    assert similarity[0, 1] == pytest.approx(1.0)
    assert similarity[0, 1] <= 1.0


def test_lsa_at_full_rank_matches_cosine_similarity(sample_matrix):
    full_rank = min(sample_matrix.n_documents, sample_matrix.n_terms)
    lsa = lsa_cosine_similarity_matrix(sample_matrix, full_rank)
    np.testing.assert_allclose(lsa, cosine_similarity_matrix(sample_matrix), atol=1e-9)


def test_lsa_is_symmetric(sample_matrix):
    lsa = lsa_cosine_similarity_matrix(sample_matrix, 2)
    np.testing.assert_array_equal(lsa, lsa.T)
    assert lsa.shape == (4, 4)


@pytest.mark.parametrize("k", [0, 5])
def test_lsa_rank_out_of_range(sample_matrix, k):
    with pytest.raises(ValueError):
        lsa_cosine_similarity_matrix(sample_matrix, k)


def test_most_similar_ranks_other_documents(sample_matrix):
    similarity = cosine_similarity_matrix(sample_matrix)
    ranked = most_similar(similarity, 2, limit=2)
    assert ranked[0][0] == 3
    assert ranked[0][1] == pytest.approx(0.149071198499986)
    assert all(index != 2 for index, _ in ranked)
    assert len(ranked) == 2


def test_most_similar_rejects_bad_index(sample_matrix):
    similarity = cosine_similarity_matrix(sample_matrix)
    with pytest.raises(IndexError):
        most_similar(similarity, 4)

