"""Load catalogue.yaml into an immutable Registry."""

import os
from pathlib import Path

import yaml

from knobcompat.matching.plugins import PluginConstraint
from knobcompat.matching.strings import MatchStrategy, StringMatch
from knobcompat.matching.versions import UNBOUNDED, VersionRange, VersionTriple
from knobcompat.rules.model import (
    CatalogueError,
    NameAlternative,
    NameRule,
    OptionRule,
    Registry,
)

CATALOGUE_PATH = Path(
    os.environ.get(
        "KNOBCOMPAT_CATALOGUE",
        str(Path(__file__).parent / "catalogue.yaml"),
    )
)

SUPPORTED_SCHEMAS = {"1.0"}


def _strategy(raw: dict, default: MatchStrategy) -> MatchStrategy:
    name = raw.get("strategy")
    if name is None:
        return default
    try:
        return MatchStrategy(name)
    except ValueError:
        raise CatalogueError(f"Unknown match strategy: {name!r}") from None


def _version(raw) -> VersionTriple:
    """[2, 2, 99] → VersionTriple; missing trailing fields are open."""
    if not isinstance(raw, list) or len(raw) > 3:
        raise CatalogueError(f"Version bound must be a list of up to 3 ints: {raw!r}")
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in raw):
        raise CatalogueError(f"Version bound fields must be integers: {raw!r}")
    fields = list(raw) + [UNBOUNDED] * (3 - len(raw))
    return VersionTriple(*fields)


def _version_range(raw) -> VersionRange | None:
    if raw is None:
        return None
    if not isinstance(raw, dict) or not set(raw) <= {"min", "max"}:
        raise CatalogueError(f"Version range must only have 'min'/'max': {raw!r}")
    return VersionRange(
        min=_version(raw.get("min", [])),
        max=_version(raw.get("max", [])),
    )


def _string_match(raw, key: str, default: MatchStrategy) -> StringMatch:
    """Accept either a bare string or a mapping with ``key`` and ``strategy``."""
    if isinstance(raw, str):
        return StringMatch(raw, default)
    if not isinstance(raw, dict) or not isinstance(raw.get(key), str):
        raise CatalogueError(f"Expected a string or a mapping with '{key}': {raw!r}")
    return StringMatch(raw[key], _strategy(raw, default))


def _plugin(raw) -> PluginConstraint:
    ident = _string_match(raw, "id", MatchStrategy.EQUALS_CASE_INSENSITIVE)
    version = _version_range(raw.get("version")) if isinstance(raw, dict) else None
    return PluginConstraint(ident, version)


def _list(raw: dict, key: str) -> list:
    """Return ``raw[key]`` as a list; absent or empty gives []."""
    value = raw.get(key) or []
    if not isinstance(value, list):
        raise CatalogueError(f"'{key}' must be a list: {raw!r}")
    return value


def _alternative(raw) -> NameAlternative:
    name = _string_match(raw, "match", MatchStrategy.EQUALS)
    plugins = _list(raw, "plugins") if isinstance(raw, dict) else []
    return NameAlternative(name, tuple(_plugin(p) for p in plugins))


def _rule_fields(raw: dict) -> dict:
    if not isinstance(raw, dict):
        raise CatalogueError(f"Rule must be a mapping: {raw!r}")
    return {
        "alternatives": tuple(_alternative(a) for a in _list(raw, "names")),
        "replacement": str(raw.get("replacement") or ""),
        "host_version": _version_range(raw.get("host_version")),
    }


def build_registry(data: dict) -> Registry:
    """Build a Registry from already-parsed catalogue data."""
    if not isinstance(data, dict):
        raise CatalogueError("Catalogue must be a mapping")
    schema = str(data.get("schema_version", ""))
    if schema not in SUPPORTED_SCHEMAS:
        raise CatalogueError(f"Unsupported catalogue schema_version: {schema!r}")

    name_rules = tuple(NameRule(**_rule_fields(r)) for r in data.get("name_rules") or [])

    option_rules = []
    for raw in data.get("option_rules") or []:
        fields = _rule_fields(raw)
        fields["options"] = tuple(
            _string_match(o, "match", MatchStrategy.EQUALS_CASE_INSENSITIVE)
            for o in _list(raw, "options")
        )
        option_rules.append(OptionRule(**fields))

    return Registry(name_rules=name_rules, option_rules=tuple(option_rules))


def load_registry(path: Path | None = None) -> Registry:
    """Load a catalogue file and return its Registry.

    Raises CatalogueError for malformed rules; the whole catalogue is
    rejected, rules are never skipped individually.
    """
    path = path or CATALOGUE_PATH
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return build_registry(data)
