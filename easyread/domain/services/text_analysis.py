"""Readability analysis of Korean text.

Pure and deterministic: no I/O, no model calls. Every input string, including
the empty string, yields fully populated metrics; ratios whose denominator is
zero are defined as 0.
"""

import re

from ..entities.analysis import AnalysisMetrics

# Particles, conjunctions and common function words.
KOREAN_STOPWORDS = frozenset({
    "이", "가", "은", "는", "을", "를", "의", "에", "에서", "에게", "께", "한테",
    "로", "으로", "과", "와",
    "그리고", "그래서", "그러나", "하지만", "그런데", "또는", "및",
    "것", "수", "때", "등", "저", "저희", "그", "그녀", "우리",
    "있다", "없다", "이다", "아니다", "되다", "하다",
})

HANGUL_SYLLABLE_FIRST = 0xAC00
HANGUL_SYLLABLE_LAST = 0xD7A3

SENTENCE_WEIGHT = 0.6
WORD_WEIGHT = 0.4

_SENTENCE_BOUNDARY = re.compile(r"[.?!]+")
_WORD_PUNCTUATION = re.compile(r"[.,?!'\"]")


def split_sentences(text: str) -> list[str]:
    """Split on runs of ``.``, ``?`` and ``!``, dropping blank fragments."""
    if not text:
        return []
    return [s for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]


def split_words(text: str) -> list[str]:
    """Strip punctuation and split on whitespace runs."""
    if not text:
        return []
    return _WORD_PUNCTUATION.sub("", text.strip()).split()


def count_hangul_syllables(text: str) -> int:
    """Count precomposed Hangul syllables (U+AC00..U+D7A3)."""
    return sum(
        1 for ch in text
        if HANGUL_SYLLABLE_FIRST <= ord(ch) <= HANGUL_SYLLABLE_LAST
    )


def readability_score(avg_sentence_length: float, avg_word_syllable_length: float) -> float:
    """Weighted sentence and word length. Lower is easier to read."""
    return SENTENCE_WEIGHT * avg_sentence_length + WORD_WEIGHT * avg_word_syllable_length


def analyze_text(text: str) -> AnalysisMetrics:
    """Compute structural and readability metrics for ``text``."""
    sentences = split_sentences(text)
    words = split_words(text)

    word_count = len(words)
    sentence_count = len(sentences)
    syllable_count = count_hangul_syllables(text)

    avg_sentence_length = word_count / sentence_count if sentence_count > 0 else 0.0
    avg_word_syllable_length = syllable_count / word_count if word_count > 0 else 0.0

    return AnalysisMetrics(
        char_count=len(text),
        word_count=word_count,
        sentence_count=sentence_count,
        syllable_count=syllable_count,
        stopword_count=sum(1 for word in words if word in KOREAN_STOPWORDS),
        avg_sentence_length=avg_sentence_length,
        avg_word_syllable_length=avg_word_syllable_length,
        readability_score=readability_score(avg_sentence_length, avg_word_syllable_length),
    )
