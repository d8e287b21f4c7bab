import re
import string
from collections import Counter
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from nltk.tokenize import RegexpTokenizer, WhitespaceTokenizer

from .search_utils import STOPWORDS_PATH
from .stemmer import stem

PUNCTUATION_TABLE = str.maketrans("", "", string.punctuation)

# a terminator inside a closing quote does not end the sentence
QUOTED_TERMINATOR = re.compile(r"[.!?]\"")
sentence_tokenizer = RegexpTokenizer(r"[.!?]+\s*", gaps=True)
word_tokenizer = WhitespaceTokenizer()


@lru_cache(maxsize=None)
def load_stop_words(path: Path = STOPWORDS_PATH) -> frozenset[str]:
    with Path(path).open() as f:
        return frozenset(line.strip() for line in f if line.strip())


def preprocess_text(text: str) -> str:
    text = text.lower()
    text = text.translate(PUNCTUATION_TABLE)
    return text


def sentence_split(text: str) -> list[str]:
    sentences = sentence_tokenizer.tokenize(QUOTED_TERMINATOR.sub("\"", text))
    return [s.strip() for s in sentences if s.strip()]


def tokenize(text: str) -> list[str]:
    """Split text into word tokens with punctuation removed. Case is preserved."""
    return word_tokenizer.tokenize(text.translate(PUNCTUATION_TABLE))


def term_frequency(tokens: Iterable[str]) -> Counter:
    return Counter(tokens)


def tokenize_and_stem(text: str, remove_stop_words: bool = True) -> list[str]:
    tokens = tokenize(preprocess_text(text))
    stop_words = load_stop_words() if remove_stop_words else frozenset()
    return [
        stem(token)
        for token in tokens
        if token and token not in stop_words
    ]
