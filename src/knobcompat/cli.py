"""CLI entry point for knobcompat commands."""

import argparse
import sys
from pathlib import Path


def _load(args):
    """Registry for this invocation: --catalogue if given, else the default."""
    from knobcompat.rules.model import CatalogueError
    from knobcompat.rules.registry_loader import load_registry

    path = Path(args.catalogue) if args.catalogue else None
    try:
        return load_registry(path)
    except (CatalogueError, OSError) as e:
        print(f"  ERROR: Cannot load catalogue: {e}")
        sys.exit(1)


def _versions(args):
    from knobcompat.matching.versions import parse_version

    try:
        return parse_version(args.plugin_version), parse_version(args.host_version)
    except ValueError as e:
        print(f"  ERROR: {e}")
        sys.exit(1)


def _format_match(match) -> str:
    return f"{match.strategy.value}({match.pattern!r})"


def _format_range(version_range) -> str:
    if version_range is None:
        return "any"
    low = ".".join(str(v) for v in version_range.min)
    high = ".".join(str(v) for v in version_range.max)
    return f"[{low} .. {high}]"


def cmd_name(args):
    """Rewrite a single legacy knob name."""
    from knobcompat.lookup import filter_knob_name_compat

    registry = _load(args)
    plugin_version, host_version = _versions(args)

    print(f"NAME — {args.plugin_id} / {args.name}")
    rewritten, name = filter_knob_name_compat(
        args.plugin_id, plugin_version, host_version, args.name, registry,
    )
    if rewritten:
        print(f"  Rewritten: {args.name} → {name}")
    else:
        print(f"  Unchanged: {name}")


def cmd_option(args):
    """Rewrite a single legacy choice option."""
    from knobcompat.lookup import filter_knob_choice_option_compat

    registry = _load(args)
    plugin_version, host_version = _versions(args)

    print(f"OPTION — {args.plugin_id} / {args.param_name} = {args.value}")
    rewritten, value = filter_knob_choice_option_compat(
        args.plugin_id, plugin_version, host_version, args.param_name, args.value, registry,
    )
    if rewritten:
        print(f"  Rewritten: {args.value} → {value}")
    else:
        print(f"  Unchanged: {value}")


def cmd_rules(args):
    """List every rule in the order lookups consult them."""
    registry = _load(args)

    print(f"RULES — {len(registry.name_rules)} name rules, {len(registry.option_rules)} option rules")
    print("\n  Name rules:")
    for i, rule in enumerate(registry.name_rules, 1):
        names = ", ".join(_format_match(alt.name) for alt in rule.alternatives)
        print(f"    {i:>2}. {names} → {rule.replacement}  host {_format_range(rule.host_version)}")

    print("\n  Option rules:")
    for i, rule in enumerate(registry.option_rules, 1):
        names = ", ".join(_format_match(alt.name) for alt in rule.alternatives)
        options = ", ".join(o.pattern for o in rule.options)
        print(f"    {i:>2}. [{names}] {options} → {rule.replacement}"
              f"  host {_format_range(rule.host_version)}")


def cmd_check(args):
    """Validate a catalogue file without using it."""
    args.catalogue = args.path
    print(f"CHECK — {args.path}")
    registry = _load(args)
    print(f"  OK: {len(registry.name_rules)} name rules, {len(registry.option_rules)} option rules")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="knobcompat",
        description="Rewrite legacy knob names and choice options to current identifiers",
    )
    parser.add_argument("--catalogue", help="Rule catalogue YAML (default: packaged catalogue)")
    sub = parser.add_subparsers(dest="command")

    # name
    p_name = sub.add_parser("name", help="Rewrite a legacy knob name")
    p_name.add_argument("plugin_id")
    p_name.add_argument("name")
    p_name.add_argument("--plugin-version", help="e.g. 1.0 (default: unknown)")
    p_name.add_argument("--host-version", help="e.g. 2.2.99 (default: unknown)")
    p_name.set_defaults(func=cmd_name)

    # option
    p_option = sub.add_parser("option", help="Rewrite a legacy choice option")
    p_option.add_argument("plugin_id")
    p_option.add_argument("param_name", help="Name of the choice knob owning the option")
    p_option.add_argument("value")
    p_option.add_argument("--plugin-version", help="e.g. 1.0 (default: unknown)")
    p_option.add_argument("--host-version", help="e.g. 2.2.99 (default: unknown)")
    p_option.set_defaults(func=cmd_option)

    # rules
    p_rules = sub.add_parser("rules", help="List catalogue rules in lookup order")
    p_rules.set_defaults(func=cmd_rules)

    # check
    p_check = sub.add_parser("check", help="Validate a catalogue file")
    p_check.add_argument("path")
    p_check.set_defaults(func=cmd_check)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)
    args.func(args)


if __name__ == "__main__":
    main()
