import bisect
import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .corpus import Corpus
from .text_processing import term_frequency

logger = logging.getLogger(__name__)


class EmptyCorpusError(ValueError):
    """Raised when a TF-IDF matrix is requested for a corpus with no documents."""

    def __init__(self) -> None:
        super().__init__("Cannot build a TF-IDF matrix from an empty corpus")


@dataclass(frozen=True, eq=False)
class WeightedMatrix:
    """
    TF-IDF weights, one row per document and one column per term.

    Every row with a non-zero weight has unit Euclidean norm; rows of documents
    without weighted content stay all zero. Both arrays are read-only.
    """
    terms: tuple[str, ...]
    weights: np.ndarray
    idf: np.ndarray

    @property
    def n_documents(self) -> int:
        return self.weights.shape[0]

    @property
    def n_terms(self) -> int:
        return self.weights.shape[1]

    def term_position(self, term: str) -> int | None:
        position = bisect.bisect_left(self.terms, term)
        if position < len(self.terms) and self.terms[position] == term:
            return position
        return None

    def document_vector(self, index: int) -> np.ndarray:
        return self.weights[index]

    def weight(self, term: str, index: int) -> float:
        position = self.term_position(term)
        if position is None:
            return 0.0
        return float(self.weights[index, position])

    def idf_for(self, term: str) -> float:
        position = self.term_position(term)
        if position is None:
            return 0.0
        return float(self.idf[position])

    def norms(self) -> np.ndarray:
        return np.linalg.norm(self.weights, axis=1)

    def is_empty_document(self, index: int) -> bool:
        return not np.any(self.weights[index])


def inverse_document_frequency(n_documents: int, document_frequency: int) -> float:
    """ln(N / n_t); 0.0 for a term that occurs in no document."""
    if document_frequency <= 0:
        return 0.0
    return math.log(n_documents / document_frequency)


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


def build_tfidf(documents: Corpus | Sequence[Iterable[str]]) -> WeightedMatrix:
    """
    Build the L2-normalised TF-IDF matrix for a corpus.

    Accepts a ``Corpus`` or any sequence of token sequences. Raises
    ``EmptyCorpusError`` when there are no documents.
    """
    corpus = documents if isinstance(documents, Corpus) else Corpus(documents)
    n_documents = len(corpus)
    if n_documents == 0:
        raise EmptyCorpusError()

    counts = corpus.term_counts()
    document_frequency = np.count_nonzero(counts, axis=0)
    idf = np.array(
        [inverse_document_frequency(n_documents, int(df)) for df in document_frequency],
        dtype=np.float64,
    )

    weights = counts * idf
    norms = np.linalg.norm(weights, axis=1)
    weighted_rows = norms > 0
    weights[weighted_rows] /= norms[weighted_rows, np.newaxis]

    empty_rows = np.flatnonzero(~weighted_rows)
    if empty_rows.size:
        logger.debug(f"Documents without weighted terms: {empty_rows.tolist()}")
    logger.info(f"Built TF-IDF matrix: {n_documents} documents x {len(corpus.vocabulary)} terms")

    return WeightedMatrix(
        terms=corpus.vocabulary,
        weights=_read_only(weights),
        idf=_read_only(idf),
    )


def query_vector(matrix: WeightedMatrix, tokens: Iterable[str]) -> np.ndarray:
    """Weight a query with the corpus idf and normalise it like a document row."""
    vector = np.zeros(matrix.n_terms, dtype=np.float64)
    for term, count in term_frequency(tokens).items():
        position = matrix.term_position(term)
        if position is not None:
            vector[position] = count * matrix.idf[position]
    norm = np.linalg.norm(vector)
    if norm > 0:
        vector /= norm
    return vector
