import logging
import pickle
from collections import defaultdict
from pathlib import Path

import numpy as np

from .corpus import Corpus
from .search_utils import CACHE_DIR, DEFAULT_SEARCH_LIMIT, SCORE_PRECISION, load_documents
from .similarity import cosine_similarity_matrix, lsa_cosine_similarity_matrix, most_similar
from .text_processing import tokenize_and_stem
from .tfidf import WeightedMatrix, build_tfidf, query_vector

logger = logging.getLogger(__name__)


class DocumentIndex:
    def __init__(self, cache_dir: Path = CACHE_DIR) -> None:
        # token -> set(doc_id)
        self.index: dict[str, set[int]] = defaultdict(set)

        # doc_id -> full document
        self.docmap: dict[int, dict] = {}

        # doc_id -> row of the corpus and TF-IDF matrix
        self.doc_ids: list[int] = []

        self.corpus: Corpus | None = None
        self.matrix: WeightedMatrix | None = None

        self.cache_dir = Path(cache_dir)
        self.index_path = self.cache_dir / "index.pkl"
        self.docmap_path = self.cache_dir / "docmap.pkl"
        self.corpus_path = self.cache_dir / "corpus.pkl"

    def build(self, documents: list[dict] | None = None) -> None:
        if documents is None:
            documents = load_documents()

        self.index = defaultdict(set)
        self.docmap = {}
        self.doc_ids = []

        token_lists = []
        for doc in documents:
            doc_id = doc["id"]
            self.docmap[doc_id] = doc
            self.doc_ids.append(doc_id)

            text = f"{doc['title']} {doc['text']}"
            tokens = tokenize_and_stem(text)
            token_lists.append(tokens)
            for token in tokens:
                self.index[token].add(doc_id)

        titles = [doc["title"] for doc in documents]
        self.corpus = Corpus(token_lists, titles)
        self.matrix = build_tfidf(self.corpus)
        logger.info(f"Indexed {len(self.doc_ids)} documents, {len(self.index)} distinct terms")

    def save(self) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        with self.index_path.open("wb") as f:
            pickle.dump(dict(self.index), f)

        with self.docmap_path.open("wb") as f:
            pickle.dump(self.docmap, f)

        with self.corpus_path.open("wb") as f:
            pickle.dump((self.doc_ids, self.corpus), f)

    def load(self) -> None:
        with self.index_path.open("rb") as f:
            self.index = defaultdict(set, pickle.load(f))

        with self.docmap_path.open("rb") as f:
            self.docmap = pickle.load(f)

        with self.corpus_path.open("rb") as f:
            self.doc_ids, self.corpus = pickle.load(f)

        # the weighted matrix is cheap to derive and is not cached
        self.matrix = build_tfidf(self.corpus)

    def _single_token(self, term: str) -> str:
        tokens = tokenize_and_stem(term)
        if len(tokens) != 1:
            raise ValueError("Term must resolve to exactly one token")
        return tokens[0]

    def _row(self, doc_id: int) -> int:
        try:
            return self.doc_ids.index(doc_id)
        except ValueError:
            raise IndexError(f"Unknown document id: {doc_id}") from None

    def get_documents(self, term: str) -> list[int]:
        token = self._single_token(term)
        return sorted(self.index.get(token, set()))

    def get_tf(self, doc_id: int, term: str) -> int:
        token = self._single_token(term)
        return self.corpus.term_frequencies(self._row(doc_id)).get(token, 0)

    def get_idf(self, term: str) -> float:
        token = self._single_token(term)
        return self.matrix.idf_for(token)

    def get_tfidf(self, doc_id: int, term: str) -> float:
        """Normalised TF-IDF weight of a term in a document."""
        token = self._single_token(term)
        return self.matrix.weight(token, self._row(doc_id))

    def similarity_matrix(self) -> np.ndarray:
        return cosine_similarity_matrix(self.matrix)

    def lsa_similarity_matrix(self, k: int) -> np.ndarray:
        return lsa_cosine_similarity_matrix(self.matrix, k)

    def similar_documents(self, doc_id: int, limit: int = DEFAULT_SEARCH_LIMIT) -> list[dict]:
        ranked = most_similar(self.similarity_matrix(), self._row(doc_id), limit)
        return [self._result(row, score) for row, score in ranked]

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[dict]:
        query_tokens = tokenize_and_stem(query)
        vector = query_vector(self.matrix, query_tokens)
        if not np.any(vector):
            return []

        scores = self.matrix.weights @ vector
        ranked = sorted(
            ((row, float(score)) for row, score in enumerate(scores) if score > 0),
            key=lambda x: x[1],
            reverse=True,
        )
        return [self._result(row, score) for row, score in ranked[:limit]]

    def _result(self, row: int, score: float) -> dict:
        doc_id = self.doc_ids[row]
        return {
            "id": doc_id,
            "title": self.docmap[doc_id]["title"],
            "score": round(score, SCORE_PRECISION),
        }
