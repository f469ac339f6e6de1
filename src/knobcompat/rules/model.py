"""Immutable rule records for knob name and choice option rewriting.

Every record validates itself on construction, so a Registry that exists is
a well-formed one. Catalogue mistakes surface as CatalogueError at load
time, never during a lookup.
"""

from dataclasses import dataclass

from knobcompat.matching.plugins import PluginConstraint, plugin_matches
from knobcompat.matching.strings import StringMatch, matches
from knobcompat.matching.versions import VersionRange, VersionTriple, in_range


class CatalogueError(ValueError):
    """Raised when rule data violates the catalogue invariants."""


@dataclass(frozen=True)
class NameAlternative:
    """One accepted parameter name, optionally limited to some plugins."""
    name: StringMatch
    plugins: tuple[PluginConstraint, ...] = ()

    def accepts(self, name: str, plugin_id: str, plugin_version: VersionTriple) -> bool:
        return plugin_matches(plugin_id, plugin_version, self.plugins) and matches(name, self.name)


@dataclass(frozen=True)
class NameRule:
    """Rewrite a legacy parameter name to ``replacement``."""
    alternatives: tuple[NameAlternative, ...]
    replacement: str
    host_version: VersionRange | None = None

    def __post_init__(self):
        if not self.replacement:
            raise CatalogueError("Rule replacement must not be empty")

    def applies_to(
        self,
        name: str,
        plugin_id: str,
        plugin_version: VersionTriple,
        host_version: VersionTriple,
    ) -> bool:
        """Host version gate, then any alternative accepting the name.

        A rule without alternatives applies to every parameter name.
        """
        if not in_range(host_version, self.host_version):
            return False
        if not self.alternatives:
            return True
        return any(alt.accepts(name, plugin_id, plugin_version) for alt in self.alternatives)


@dataclass(frozen=True)
class OptionRule(NameRule):
    """Rewrite a legacy choice option of matching parameters to ``replacement``.

    The alternatives gate on the owning parameter's name; ``options`` are
    tested against the selected option value.
    """
    options: tuple[StringMatch, ...] = ()

    def __post_init__(self):
        super().__post_init__()
        if not self.options:
            raise CatalogueError(f"Option rule for {self.replacement!r} has no option patterns")

    def match_option(self, value: str) -> bool:
        return any(matches(value, option) for option in self.options)


@dataclass(frozen=True)
class Registry:
    """The ordered rule tables consulted by the lookup functions."""
    name_rules: tuple[NameRule, ...] = ()
    option_rules: tuple[OptionRule, ...] = ()
