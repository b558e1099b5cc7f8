"""Pure text helpers: case conversion, whole-word search, and counts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List


class CaseMode(str, Enum):
    UPPER = "upper"
    LOWER = "lower"
    TITLE = "title"


def to_upper(text: str) -> str:
    return text.upper()


def to_lower(text: str) -> str:
    return text.lower()


def to_title(text: str) -> str:
    """Capitalise the first letter of each whitespace-separated word.

    Every other letter is lower-cased and non-letters pass through. A word
    that begins with punctuation or a digit still gets its first letter
    capitalised: ``"(hello 3rd"`` becomes ``"(Hello 3Rd"``.
    """

    chars: List[str] = []
    new_word = True
    for char in text:
        if new_word and char.isalpha():
            chars.append(char.upper())
            new_word = False
        elif char.isspace():
            chars.append(char)
            new_word = True
        else:
            chars.append(char.lower())
    return "".join(chars)


CASE_CONVERTERS: Dict[CaseMode, Callable[[str], str]] = {
    CaseMode.UPPER: to_upper,
    CaseMode.LOWER: to_lower,
    CaseMode.TITLE: to_title,
}


def contains_word(line: str, keyword: str) -> bool:
    """True when ``keyword`` occurs in ``line`` bounded by non-alphanumerics."""

    if not keyword:
        return False
    width = len(keyword)
    pos = line.find(keyword)
    while pos != -1:
        end = pos + width
        starts_clean = pos == 0 or not line[pos - 1].isalnum()
        ends_clean = end == len(line) or not line[end].isalnum()
        if starts_clean and ends_clean:
            return True
        pos = line.find(keyword, pos + 1)
    return False


def search_lines(lines: Iterable[str], keyword: str) -> List[int]:
    """1-based numbers of the lines holding ``keyword`` as a whole word."""

    if not keyword:
        return []
    return [
        number
        for number, line in enumerate(lines, start=1)
        if contains_word(line, keyword)
    ]


def filter_lines(lines: Iterable[str], keyword: str) -> List[str]:
    return [line for line in lines if keyword in line]


@dataclass(frozen=True, slots=True)
class TextStats:
    lines: int
    words: int
    characters: int


def word_count(lines: Iterable[str]) -> int:
    return sum(len(line.split()) for line in lines)


def char_count(lines: Iterable[str]) -> int:
    return sum(len(line) for line in lines)


def collect_stats(lines: Iterable[str]) -> TextStats:
    materialized = list(lines)
    return TextStats(
        lines=len(materialized),
        words=word_count(materialized),
        characters=char_count(materialized),
    )


__all__ = [
    "CASE_CONVERTERS",
    "CaseMode",
    "TextStats",
    "char_count",
    "collect_stats",
    "contains_word",
    "filter_lines",
    "search_lines",
    "to_lower",
    "to_title",
    "to_upper",
    "word_count",
]
