"""
Porter stemmer expressed as ordered rule tables.

Every step is a tuple of ``Rule`` records. A step scans its rules in order and
stops at the first rule whose suffix matches the word; that rule's condition,
evaluated on the stem left once the suffix is removed, decides whether the
rewrite is applied. ``run_step`` is the only routine that interprets the tables.

    caresses -> caress     ponies -> poni      agreed -> agre
    matting  -> mat        mating -> mate      feed   -> feed
"""
from typing import Callable, Iterable, NamedTuple

VOWELS = frozenset("aeiou")


class Rule(NamedTuple):
    suffix: str
    replacement: str
    condition: Callable[[str], bool] | None = None


def is_consonant(word: str, i: int) -> bool:
    """y counts as a consonant at the start of a word or after a vowel."""
    if word[i] in VOWELS:
        return False
    if word[i] == "y":
        return i == 0 or not is_consonant(word, i - 1)
    return True


def measure(word: str) -> int:
    """
    Count the VC sequences of ``word`` written as [C](VC)^m[V].

        tr, ee, tree, y, by          -> 0
        trouble, oats, trees, ivy    -> 1
        troubles, private, oaten     -> 2
    """
    m = 0
    i = 0
    n = len(word)
    while i < n and is_consonant(word, i):
        i += 1
    while i < n:
        while i < n and not is_consonant(word, i):
            i += 1
        if i >= n:
            break
        m += 1
        while i < n and is_consonant(word, i):
            i += 1
    return m


def has_vowel(word: str) -> bool:
    return any(not is_consonant(word, i) for i in range(len(word)))


def ends_double_consonant(word: str) -> bool:
    return len(word) >= 2 and word[-1] == word[-2] and is_consonant(word, len(word) - 1)


def ends_cvc(word: str) -> bool:
    """consonant-vowel-consonant ending where the last consonant is not w, x or y."""
    n = len(word)
    if n < 3:
        return False
    return (
        is_consonant(word, n - 3)
        and not is_consonant(word, n - 2)
        and is_consonant(word, n - 1)
        and word[-1] not in "wxy"
    )


def _m_above(threshold: int) -> Callable[[str], bool]:
    return lambda stem: measure(stem) > threshold


def _undoubled(letter: str) -> Rule:
    # the stem keeps one of the two letters, so the double check runs on stem + letter
    return Rule(letter * 2, letter, lambda stem: ends_double_consonant(stem + letter * 2))


def _short_cvc(stem: str) -> bool:
    return measure(stem) == 1 and ends_cvc(stem)


def _drop_final_e(stem: str) -> bool:
    m = measure(stem)
    return m > 1 or (m == 1 and not ends_cvc(stem))


def _ion_removable(stem: str) -> bool:
    return stem[-1:] in ("s", "t") and measure(stem) > 1


STEP_1A = (
    Rule("sses", "ss"),
    Rule("ies", "i"),
    Rule("ss", "ss"),
    Rule("s", ""),
)

STEP_1B = (
    Rule("eed", "ee", _m_above(0)),
    Rule("ed", "", has_vowel),
    Rule("ing", "", has_vowel),
)

# applied only after -ed or -ing was removed in step 1b
STEP_1B_CLEANUP = (
    Rule("at", "ate"),
    Rule("bl", "ble"),
    Rule("iz", "ize"),
    *(_undoubled(letter) for letter in "bcdfghjkmnpqrtvwxy"),
    Rule("", "e", _short_cvc),
)

STEP_1C = (
    Rule("y", "i", has_vowel),
)

STEP_2 = tuple(
    Rule(suffix, replacement, _m_above(0))
    for suffix, replacement in (
        ("ational", "ate"),
        ("tional", "tion"),
        ("enci", "ence"),
        ("anci", "ance"),
        ("izer", "ize"),
        ("bli", "ble"),
        ("alli", "al"),
        ("entli", "ent"),
        ("eli", "e"),
        ("ousli", "ous"),
        ("ization", "ize"),
        ("ation", "ate"),
        ("ator", "ate"),
        ("alism", "al"),
        ("iveness", "ive"),
        ("fulness", "ful"),
        ("ousness", "ous"),
        ("aliti", "al"),
        ("iviti", "ive"),
        ("biliti", "ble"),
        ("logi", "log"),
    )
)

STEP_3 = tuple(
    Rule(suffix, replacement, _m_above(0))
    for suffix, replacement in (
        ("icate", "ic"),
        ("ative", ""),
        ("alize", "al"),
        ("iciti", "ic"),
        ("ical", "ic"),
        ("ful", ""),
        ("ness", ""),
    )
)

STEP_4 = tuple(
    Rule(suffix, "", _ion_removable if suffix == "ion" else _m_above(1))
    for suffix in (
        "al", "ance", "ence", "er", "ic", "able", "ible", "ant", "ement",
        "ment", "ent", "ion", "ou", "ism", "ate", "iti", "ous", "ive", "ize",
    )
)

STEP_5A = (
    Rule("e", "", _drop_final_e),
)

STEP_5B = (
    Rule("ll", "l", lambda stem: measure(stem + "ll") > 1),
)


def run_step(word: str, rules: tuple[Rule, ...]) -> tuple[str, Rule | None]:
    """Apply at most one rule of a step. Returns the word and the rule that fired."""
    for rule in rules:
        if not word.endswith(rule.suffix):
            continue
        stem = word[: len(word) - len(rule.suffix)]
        if rule.condition is None or rule.condition(stem):
            return stem + rule.replacement, rule
        return word, None
    return word, None


def _step_1b(word: str) -> str:
    word, fired = run_step(word, STEP_1B)
    if fired is not None and fired.suffix in ("ed", "ing"):
        word, _ = run_step(word, STEP_1B_CLEANUP)
    return word


def stem(token: str) -> str:
    """Reduce ``token`` to its Porter stem. Never raises."""
    if len(token) <= 2:
        return token

    word = token.lower()
    word, _ = run_step(word, STEP_1A)
    word = _step_1b(word)
    for rules in (STEP_1C, STEP_2, STEP_3, STEP_4, STEP_5A, STEP_5B):
        word, _ = run_step(word, rules)
    return word


def stem_tokens(tokens: Iterable[str]) -> list[str]:
    return [stem(token) for token in tokens]
