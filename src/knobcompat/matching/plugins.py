"""Plugin identity constraints attached to rule alternatives."""

from dataclasses import dataclass

from knobcompat.matching.strings import StringMatch, matches
from knobcompat.matching.versions import VersionRange, VersionTriple, in_range


@dataclass(frozen=True)
class PluginConstraint:
    """A plugin ID pattern, optionally limited to a range of plugin versions."""
    plugin_id: StringMatch
    version: VersionRange | None = None


def plugin_matches(
    plugin_id: str,
    plugin_version: VersionTriple,
    constraints: tuple[PluginConstraint, ...],
) -> bool:
    """Return True if any constraint accepts the plugin.

    No constraints means the alternative applies to every plugin.
    """
    if not constraints:
        return True
    for constraint in constraints:
        if not matches(plugin_id, constraint.plugin_id):
            continue
        if in_range(plugin_version, constraint.version):
            return True
    return False
