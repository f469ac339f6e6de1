"""Version triples and open-ended version ranges."""

from dataclasses import dataclass
from typing import NamedTuple

# Caller-supplied field whose value is not known
UNKNOWN = -1
# Range bound field that does not constrain
UNBOUNDED = -1


class VersionTriple(NamedTuple):
    major: int = UNKNOWN
    minor: int = UNKNOWN
    revision: int = UNKNOWN


UNKNOWN_VERSION = VersionTriple()


@dataclass(frozen=True)
class VersionRange:
    """Inclusive lower/upper bounds; either side may be left open.

    A bound field set to UNBOUNDED removes that field and every finer field
    from the comparison, so ``max=(1, -1, -1)`` accepts any 1.x.y.
    """
    min: VersionTriple = UNKNOWN_VERSION
    max: VersionTriple = UNKNOWN_VERSION


def _compare(candidate: VersionTriple, bound: VersionTriple) -> int:
    """Compare field by field, stopping at the first open or unknown field.

    Returns -1, 0 or 1 like a classic cmp(); 0 also means "not constrained".
    """
    for have, want in zip(candidate, bound):
        if have == UNKNOWN or want == UNBOUNDED:
            return 0
        if have != want:
            return -1 if have < want else 1
    return 0


def in_range(candidate: VersionTriple, version_range: VersionRange | None) -> bool:
    """Return True if ``candidate`` lies within ``version_range``.

    An unknown candidate major disables the check, as does a missing range.
    """
    if version_range is None or candidate.major == UNKNOWN:
        return True
    if _compare(candidate, version_range.min) < 0:
        return False
    if _compare(candidate, version_range.max) > 0:
        return False
    return True


def parse_version(text: str | None) -> VersionTriple:
    """Parse ``"2"``, ``"2.2"`` or ``"2.2.99"`` into a VersionTriple.

    Missing fields are UNKNOWN. Empty text and ``"-1"`` give the fully
    unknown version.
    """
    if text is None:
        return UNKNOWN_VERSION
    text = text.strip()
    if not text or text == str(UNKNOWN):
        return UNKNOWN_VERSION

    parts = text.split(".")
    if len(parts) > 3:
        raise ValueError(f"Version has more than three fields: {text!r}")
    try:
        fields = [int(p) for p in parts]
    except ValueError:
        raise ValueError(f"Version fields must be integers: {text!r}") from None
    if any(f < UNKNOWN for f in fields):
        raise ValueError(f"Version fields must be >= -1: {text!r}")
    return VersionTriple(*fields)
