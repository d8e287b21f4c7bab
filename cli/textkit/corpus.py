import logging
from collections import Counter
from typing import Iterable, Sequence

import numpy as np

from .text_processing import tokenize, preprocess_text, load_stop_words, term_frequency
from .stemmer import stem as stem_token

logger = logging.getLogger(__name__)


class Corpus:
    """
    A fixed batch of tokenized documents.

    Documents are addressed by position. The vocabulary is kept in lexicographic
    order, which fixes the term axis of every matrix built from the corpus.
    """

    def __init__(self, documents: Iterable[Iterable[str]], titles: Sequence[str] | None = None) -> None:
        documents = list(documents)
        if any(isinstance(doc, str) for doc in documents):
            raise TypeError("documents must be token sequences, not strings; use Corpus.from_texts for raw text")
        self.documents: tuple[tuple[str, ...], ...] = tuple(tuple(doc) for doc in documents)
        if titles is not None and len(titles) != len(self.documents):
            raise ValueError("titles must match the number of documents")
        self.titles: tuple[str, ...] | None = tuple(titles) if titles is not None else None

        self._frequencies: tuple[Counter, ...] = tuple(term_frequency(doc) for doc in self.documents)
        vocabulary: set[str] = set()
        for counts in self._frequencies:
            vocabulary.update(counts)
        self.vocabulary: tuple[str, ...] = tuple(sorted(vocabulary))
        self.term_index: dict[str, int] = {term: i for i, term in enumerate(self.vocabulary)}

    @classmethod
    def from_texts(
        cls,
        texts: Iterable[str],
        titles: Sequence[str] | None = None,
        stem: bool = True,
        remove_stop_words: bool = True,
    ) -> "Corpus":
        stop_words = load_stop_words() if remove_stop_words else frozenset()
        documents = []
        for text in texts:
            tokens = [t for t in tokenize(preprocess_text(text)) if t not in stop_words]
            if stem:
                tokens = [stem_token(t) for t in tokens]
            documents.append(tokens)
        corpus = cls(documents, titles)
        logger.debug(
            f"Corpus built from text: {len(corpus)} documents, {len(corpus.vocabulary)} terms"
        )
        return corpus

    def __len__(self) -> int:
        return len(self.documents)

    def __getitem__(self, index: int) -> tuple[str, ...]:
        return self.documents[index]

    def term_frequencies(self, index: int) -> Counter:
        return Counter(self._frequencies[index])

    def document_frequency(self, term: str) -> int:
        return sum(1 for counts in self._frequencies if term in counts)

    def term_counts(self) -> np.ndarray:
        """Raw counts as a dense (documents x terms) array."""
        counts = np.zeros((len(self.documents), len(self.vocabulary)), dtype=np.float64)
        for row, frequencies in enumerate(self._frequencies):
            for term, count in frequencies.items():
                counts[row, self.term_index[term]] = count
        return counts
