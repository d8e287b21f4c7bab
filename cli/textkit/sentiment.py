"""
Valence/arousal lexicon lookups.

Entries follow the ANEW layout: ``avg`` and ``std`` hold (valence, arousal)
pairs on a 1-9 scale. Terms are matched against words first, then stems.
"""
import json
import logging
import math
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple

from .search_utils import LEXICON_PATH
from .stemmer import stem

logger = logging.getLogger(__name__)

VALENCE = 0
AROUSAL = 1

# angular slices of the circumplex, shared by the upper and lower half
ANGULAR_CUTOFFS = (0.0, 18.43, 45.0, 71.57, 90.0, 108.43, 135.0, 161.57, 180.0)
LOWER_TERMS = ("contented", "serene", "relaxed", "calm", "bored", "lethargic", "depressed", "sad")
UPPER_TERMS = ("happy", "elated", "excited", "alert", "tense", "nervous", "stressed", "upset")


class TermExistsError(ValueError):
    def __init__(self, term: str) -> None:
        super().__init__(f"Term already exists: {term}")
        self.term = term


class LexiconEntry(NamedTuple):
    word: str
    stem: str
    avg: tuple[float, float]
    std: tuple[float, float]


class SentimentLexicon:
    def __init__(self, entries: Mapping[str, LexiconEntry]) -> None:
        self._words = MappingProxyType(dict(entries))
        self._stems = MappingProxyType({entry.stem: entry for entry in entries.values()})

    @classmethod
    def from_dict(cls, data: Mapping[str, dict]) -> "SentimentLexicon":
        entries = {}
        for term, value in data.items():
            std = tuple(value["std"])
            # weights are 1/sqrt(2*pi*std^2)
            if any(s <= 0 for s in std):
                raise ValueError(f"Standard deviations for '{term}' must be positive, got {std}")
            entries[term] = LexiconEntry(
                word=value.get("word", term),
                stem=value.get("stem") or stem(term),
                avg=tuple(value["avg"]),
                std=std,
            )
        return cls(entries)

    @classmethod
    def load(cls, path: Path = LEXICON_PATH) -> "SentimentLexicon":
        with open(path, "r") as f:
            return cls.from_dict(json.load(f))

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, term: str) -> bool:
        return term in self._words or term in self._stems

    def entry(self, term: str) -> LexiconEntry | None:
        if term in self._words:
            return self._words[term]
        return self._stems.get(term)

    def _raw(self, term: str, axis: int) -> tuple[float, float]:
        entry = self.entry(term)
        if entry is None:
            return 0.0, 0.0
        return entry.avg[axis], entry.std[axis]

    def raw_arousal(self, term: str) -> tuple[float, float]:
        return self._raw(term, AROUSAL)

    def raw_valence(self, term: str) -> tuple[float, float]:
        return self._raw(term, VALENCE)

    def arousal_lookup(self, term: str) -> float | None:
        entry = self.entry(term)
        return None if entry is None else entry.avg[AROUSAL]

    def valence_lookup(self, term: str) -> float | None:
        entry = self.entry(term)
        return None if entry is None else entry.avg[VALENCE]

    def _weighted_mean(self, terms: Iterable[str], axis: int) -> float:
        """Mean of the known terms, each weighted by its Gaussian density peak."""
        weights = []
        means = []
        for term in terms:
            entry = self.entry(term)
            if entry is None:
                continue
            weights.append(1.0 / math.sqrt(2 * math.pi * entry.std[axis] ** 2))
            means.append(entry.avg[axis])
        total = sum(weights)
        if total == 0:
            return 0.0
        return sum(w / total * m for w, m in zip(weights, means))

    def arousal_for_terms(self, terms: Iterable[str]) -> float:
        return self._weighted_mean(terms, AROUSAL)

    def valence_for_terms(self, terms: Iterable[str]) -> float:
        return self._weighted_mean(terms, VALENCE)

    def sentiment_for_term(self, term: str) -> dict[str, float]:
        return {
            "valence": self.raw_valence(term)[0],
            "arousal": self.raw_arousal(term)[0],
        }

    def sentiment_for_terms(self, terms: Iterable[str]) -> dict[str, float]:
        terms = list(terms)
        return {
            "valence": self.valence_for_terms(terms),
            "arousal": self.arousal_for_terms(terms),
        }

    def term_description(self, term: str) -> str:
        sentiment = self.sentiment_for_term(term)
        if sentiment["arousal"] == 0.0:
            return "unknown"
        return describe(sentiment["valence"], sentiment["arousal"])

    def terms_description(self, terms: Iterable[str]) -> str:
        sentiment = self.sentiment_for_terms(terms)
        if sentiment["arousal"] == 0.0:
            return "unknown"
        return describe(sentiment["valence"], sentiment["arousal"])

    def with_term(self, term: str, valence: float, arousal: float, replace: bool = False) -> "SentimentLexicon":
        """Return a new lexicon that also carries ``term``."""
        existing = self.entry(term)
        if existing is not None and not replace:
            raise TermExistsError(term)

        entries = dict(self._words)
        if existing is not None:
            entries[existing.word] = existing._replace(avg=(valence, arousal))
        else:
            entries[term] = LexiconEntry(term, stem(term), (valence, arousal), (1.0, 1.0))
        return SentimentLexicon(entries)


def describe(valence: float, arousal: float) -> str:
    """Russell-circumplex description of a (valence, arousal) point on a 1-9 scale."""
    if not (1.0 <= valence <= 9.0 and 1.0 <= arousal <= 9.0):
        logger.warning("Valence and arousal must be bound between 1 and 9 (inclusive)")
        return "unknown"
    if valence == 5.0 and arousal == 5.0:
        return "average"

    normalized_valence = (valence - 5.0) / 4.0
    normalized_arousal = (arousal - 5.0) / 4.0
    radius = math.hypot(normalized_valence, normalized_arousal)
    direction = math.degrees(math.acos(normalized_valence / radius))

    # radius is scaled to the square's edge so strength stays within [0, 1]
    if direction <= 45.0 or direction >= 135.0:
        radius /= math.sqrt(normalized_arousal**2 + 1.0)
    else:
        radius /= math.sqrt(normalized_valence**2 + 1.0)

    if radius <= 0.25:
        modifier = "slightly "
    elif radius <= 0.5:
        modifier = "moderately "
    elif radius > 0.75:
        modifier = "very "
    else:
        modifier = ""

    terms = UPPER_TERMS if normalized_arousal > 0.0 else LOWER_TERMS
    for index, term in enumerate(terms):
        if ANGULAR_CUTOFFS[index] <= direction <= ANGULAR_CUTOFFS[index + 1]:
            return f"{modifier}{term}"

    logger.warning(f"Unexpected angle {direction} did not match any term")
    return "unknown"


@lru_cache(maxsize=None)
def default_lexicon() -> SentimentLexicon:
    lexicon = SentimentLexicon.load()
    logger.debug(f"Loaded sentiment lexicon with {len(lexicon)} entries")
    return lexicon


def arousal_lookup(term: str) -> float | None:
    return default_lexicon().arousal_lookup(term)
