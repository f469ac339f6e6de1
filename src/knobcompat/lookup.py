"""Rewrite legacy knob names and choice options to their current identifiers.

Callers pass the plugin and host versions a project was saved with. Any
version field may be -1 when unknown, which disables the corresponding
version gates for that call.

The default registry is loaded once, when this module is first imported,
and is read-only afterwards; lookups are safe to call from any thread.
"""

from knobcompat.matching.versions import VersionTriple
from knobcompat.rules.model import Registry
from knobcompat.rules.registry_loader import load_registry

DEFAULT_REGISTRY = load_registry()


def filter_knob_name_compat(
    plugin_id: str,
    plugin_version: VersionTriple,
    host_version: VersionTriple,
    name: str,
    registry: Registry | None = None,
) -> tuple[bool, str]:
    """Return ``(True, replacement)`` for a legacy knob name, else ``(False, name)``.

    The first rule whose host gate and name alternatives accept the knob wins.
    """
    if registry is None:
        registry = DEFAULT_REGISTRY
    for rule in registry.name_rules:
        if rule.applies_to(name, plugin_id, plugin_version, host_version):
            return True, rule.replacement
    return False, name


def filter_knob_choice_option_compat(
    plugin_id: str,
    plugin_version: VersionTriple,
    host_version: VersionTriple,
    param_name: str,
    value: str,
    registry: Registry | None = None,
) -> tuple[bool, str]:
    """Return ``(True, replacement)`` for a legacy option of ``param_name``.

    Rules gate on the parameter name. When a gate matches but none of the
    rule's options match ``value``, later rules are still tried.
    """
    if registry is None:
        registry = DEFAULT_REGISTRY
    for rule in registry.option_rules:
        if not rule.applies_to(param_name, plugin_id, plugin_version, host_version):
            continue
        if rule.match_option(value):
            return True, rule.replacement
    return False, value


def filter_name(
    plugin_id: str,
    plugin_version_major: int,
    plugin_version_minor: int,
    host_version_major: int,
    host_version_minor: int,
    host_version_revision: int,
    name: str,
    registry: Registry | None = None,
) -> tuple[bool, str]:
    return filter_knob_name_compat(
        plugin_id,
        VersionTriple(plugin_version_major, plugin_version_minor),
        VersionTriple(host_version_major, host_version_minor, host_version_revision),
        name,
        registry,
    )


def filter_option(
    plugin_id: str,
    plugin_version_major: int,
    plugin_version_minor: int,
    host_version_major: int,
    host_version_minor: int,
    host_version_revision: int,
    param_name: str,
    value: str,
    registry: Registry | None = None,
) -> tuple[bool, str]:
    return filter_knob_choice_option_compat(
        plugin_id,
        VersionTriple(plugin_version_major, plugin_version_minor),
        VersionTriple(host_version_major, host_version_minor, host_version_revision),
        param_name,
        value,
        registry,
    )
