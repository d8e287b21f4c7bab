import logging

import numpy as np

from .tfidf import WeightedMatrix

logger = logging.getLogger(__name__)


def _similarity_from_unit_rows(rows: np.ndarray) -> np.ndarray:
    """
    Pairwise cosine similarity of rows that are unit length or all zero.

    Only the upper triangle is taken from the dot products; it is mirrored so
    the result is exactly symmetric. A zero row has self-similarity 0.0.
    """
    n = rows.shape[0]
    products = rows @ rows.T
    upper = np.triu(np.clip(products, -1.0, 1.0), k=1)
    similarity = upper + upper.T

    non_empty = np.any(rows != 0, axis=1)
    similarity[np.arange(n), np.arange(n)] = np.where(non_empty, 1.0, 0.0)
    return similarity


def cosine_similarity_matrix(matrix: WeightedMatrix) -> np.ndarray:
    """
    Document-by-document cosine similarity of a TF-IDF matrix.

    Rows are already normalised, so each cell is a plain dot product. The
    diagonal is 1.0 for documents with weighted content and 0.0 otherwise.
    """
    return _similarity_from_unit_rows(matrix.weights)


def lsa_cosine_similarity_matrix(matrix: WeightedMatrix, k: int) -> np.ndarray:
    """
    Cosine similarity after projecting documents onto the top ``k`` singular
    directions of the TF-IDF matrix (latent semantic analysis).
    """
    max_rank = min(matrix.n_documents, matrix.n_terms)
    if not 1 <= k <= max_rank:
        raise ValueError(f"LSA rank must be between 1 and {max_rank}, got {k}")

    u, s, _ = np.linalg.svd(matrix.weights, full_matrices=False)
    reduced = u[:, :k] * s[:k]

    norms = np.linalg.norm(reduced, axis=1)
    # singular directions of all-zero documents are numerical noise
    non_empty = norms > 1e-12
    reduced[~non_empty] = 0.0
    reduced[non_empty] /= norms[non_empty, np.newaxis]
    logger.debug(f"LSA projection to rank {k} of {max_rank}")
    return _similarity_from_unit_rows(reduced)


def most_similar(similarity: np.ndarray, index: int, limit: int = 5) -> list[tuple[int, float]]:
    """Rank the other documents by similarity to document ``index``."""
    n = similarity.shape[0]
    if not 0 <= index < n:
        raise IndexError(f"Document index {index} out of range for {n} documents")

    scores = [(other, float(similarity[index, other])) for other in range(n) if other != index]
    scores.sort(key=lambda x: x[1], reverse=True)
    return scores[:limit]
