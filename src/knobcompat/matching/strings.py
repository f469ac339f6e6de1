"""String comparison strategies used by compatibility rules."""

import string
from dataclasses import dataclass
from enum import Enum

# Only A-Z fold; non-ASCII letters compare exactly
_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class MatchStrategy(Enum):
    """How a subject string is compared against a rule pattern."""
    EQUALS = "equals"
    EQUALS_CASE_INSENSITIVE = "equals_case_insensitive"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"


@dataclass(frozen=True)
class StringMatch:
    """A pattern and the strategy used to compare subjects against it."""
    pattern: str
    strategy: MatchStrategy = MatchStrategy.EQUALS


def ascii_fold(text: str) -> str:
    return text.translate(_ASCII_FOLD)


def matches(subject: str, match: StringMatch) -> bool:
    """Return True if ``subject`` satisfies ``match``."""
    pattern = match.pattern
    strategy = match.strategy

    if strategy is MatchStrategy.EQUALS:
        return subject == pattern
    if strategy is MatchStrategy.EQUALS_CASE_INSENSITIVE:
        return ascii_fold(subject) == ascii_fold(pattern)
    if strategy is MatchStrategy.STARTS_WITH:
        return subject.startswith(pattern)
    if strategy is MatchStrategy.ENDS_WITH:
        return subject.endswith(pattern)
    raise ValueError(f"Unknown match strategy: {strategy!r}")
