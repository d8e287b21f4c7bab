import numpy as np
import pytest

from textkit.document_index import DocumentIndex
from textkit.sentiment import SentimentLexicon


# term frequencies of a four-document sample; rows are terms t00..t10
SAMPLE_FREQUENCIES = np.array([
    [1, 0, 0, 0],
    [0, 1, 0, 0],
    [0, 0, 1, 1],
    [1, 0, 0, 0],
    [1, 0, 0, 0],
    [2, 0, 0, 0],
    [0, 0, 0, 1],
    [0, 1, 0, 0],
    [0, 0, 0, 1],
    [0, 0, 1, 0],
    [1, 0, 0, 0],
])


@pytest.fixture
def frequency_documents() -> list[list[str]]:
    documents = []
    for column in SAMPLE_FREQUENCIES.T:
        doc = []
        for row, count in enumerate(column):
            doc.extend([f"t{row:02d}"] * int(count))
        documents.append(doc)
    return documents


@pytest.fixture
def sample_documents() -> list[dict]:
    return [
        {"id": 1, "title": "Cats", "text": "The cat sat on the mat."},
        {"id": 2, "title": "Dogs", "text": "The dog sat on the log."},
        {"id": 3, "title": "Birds", "text": "Birds sing in the morning."},
    ]


@pytest.fixture
def index(tmp_path, sample_documents) -> DocumentIndex:
    index = DocumentIndex(cache_dir=tmp_path / "cache")
    index.build(sample_documents)
    return index


@pytest.fixture
def lexicon() -> SentimentLexicon:
    return SentimentLexicon.from_dict({
        "abduction": {"word": "abduction", "stem": "abduct", "avg": [2.76, 5.53], "std": [2.06, 2.43]},
        "betrayed": {"word": "betrayed", "stem": "betrai", "avg": [2.57, 7.24], "std": [1.83, 2.06]},
        "bees": {"word": "bees", "stem": "bee", "avg": [3.2, 6.51], "std": [2.07, 2.14]},
    })
