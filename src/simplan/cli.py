"""
Command-line interface for SimPlan.
"""

from __future__ import annotations

import argparse
import logging
import sys

import yaml

from simplan import __version__
from simplan.core.codec import export_plan, import_plan
from simplan.core.compare import compare_plans
from simplan.core.config import DisplayOptions
from simplan.core.errors import PlanError
from simplan.core.model_loader import load_model
from simplan.core.moments import MITRange
from simplan.core.plan import Plan

EXAMPLE_MODEL = {
    "variables": ["y", "pi", "r"],
    "shocks": ["y_shk", "pi_shk", "r_shk"],
    "maxlag": 1,
    "maxlead": 1,
    "autoexogenize": {"y": "y_shk", "pi": "pi_shk", "r": "r_shk"},
}


def _delim(value: str) -> str:
    """Decode a delimiter given on the command line (``\\t`` or ``tab`` for a tab)."""
    if value in ("\\t", "tab"):
        return "\t"
    return value


def cmd_example(_) -> int:
    """Print a minimal model YAML usable with ``simplan new``."""
    sys.stdout.write(yaml.safe_dump(EXAMPLE_MODEL, sort_keys=False))
    return 0


def cmd_new(args) -> int:
    """Build the default plan of a model and export it."""
    try:
        model = load_model(args.model)
        rng = MITRange.parse(args.range)
        plan = Plan(model, rng)
        if args.output:
            export_plan(plan, args.output, delim=args.delim)
            print(f"Plan saved to {args.output}")
        else:
            sys.stdout.write(export_plan(plan, delim=args.delim))
        return 0

    except (PlanError, OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error creating plan: {e}", file=sys.stderr)
        return 1


def cmd_show(args) -> int:
    """Pretty-print a plan file."""
    try:
        plan = import_plan(args.input)
        options = DisplayOptions(limit=False) if args.full else None
        print(plan.show(options))
        return 0

    except (PlanError, OSError) as e:
        print(f"Error reading plan: {e}", file=sys.stderr)
        return 1


def cmd_convert(args) -> int:
    """Re-export a plan file with other formatting options."""
    try:
        plan = import_plan(args.input)
        export_plan(
            plan,
            args.output,
            alphabetical=args.alphabetical or None,
            exog_mark=args.exog_mark,
            endo_mark=args.endo_mark,
            delim=args.delim,
        )
        print(f"Plan saved to {args.output}")
        return 0

    except (PlanError, OSError) as e:
        print(f"Error converting plan: {e}", file=sys.stderr)
        return 1


def cmd_compare(args) -> int:
    """Compare two plan files."""
    try:
        left = import_plan(args.left)
        right = import_plan(args.right)
        kwargs = {"alphabetical": args.alphabetical, "pagelines": args.pagelines}
        if args.output:
            compare_plans(left, right, args.output, **kwargs)
            print(f"Comparison saved to {args.output}")
        else:
            sys.stdout.write(compare_plans(left, right, **kwargs))
        return 0

    except (PlanError, OSError) as e:
        print(f"Error comparing plans: {e}", file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="simplan", description="SimPlan - Simulation plans for dynamic models"
    )

    # Version argument
    parser.add_argument("--version", action="version", version=f"SimPlan {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(
        dest="cmd", required=True, help="Available commands"
    )

    # Example command
    example_parser = subparsers.add_parser(
        "example", help="Print a minimal model YAML"
    )
    example_parser.set_defaults(func=cmd_example)

    # New command
    new_parser = subparsers.add_parser(
        "new", help="Create the default plan of a model"
    )
    new_parser.add_argument(
        "-m", "--model", required=True, help="Model YAML or JSON file"
    )
    new_parser.add_argument(
        "-r", "--range", required=True, help="Simulation range (e.g. 2020Q1:2024Q4)"
    )
    new_parser.add_argument(
        "-o", "--output", help="Output plan file (default: print to stdout)"
    )
    new_parser.add_argument(
        "--delim", type=_delim, default=" ", help="Column delimiter (default: space)"
    )
    new_parser.set_defaults(func=cmd_new)

    # Show command
    show_parser = subparsers.add_parser("show", help="Pretty-print a plan file")
    show_parser.add_argument("input", help="Plan file")
    show_parser.add_argument(
        "--full", action="store_true", help="Do not truncate to the terminal size"
    )
    show_parser.set_defaults(func=cmd_show)

    # Convert command
    convert_parser = subparsers.add_parser(
        "convert", help="Re-export a plan file with other formatting options"
    )
    convert_parser.add_argument("input", help="Plan file")
    convert_parser.add_argument(
        "-o", "--output", required=True, help="Output plan file"
    )
    convert_parser.add_argument("--delim", type=_delim, help="Column delimiter")
    convert_parser.add_argument("--exog-mark", help="Marker for exogenous points")
    convert_parser.add_argument("--endo-mark", help="Marker for endogenous points")
    convert_parser.add_argument(
        "--alphabetical", action="store_true", help="Sort variables by name"
    )
    convert_parser.set_defaults(func=cmd_convert)

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare two plan files")
    compare_parser.add_argument("left", help="Left plan file")
    compare_parser.add_argument("right", help="Right plan file")
    compare_parser.add_argument(
        "-o", "--output", help="Output file (default: print to stdout)"
    )
    compare_parser.add_argument(
        "--pagelines", type=int, default=0, help="Repeat the header every N rows (default: 0, off)"
    )
    compare_parser.add_argument(
        "--alphabetical", action="store_true", help="Sort variables by name"
    )
    compare_parser.set_defaults(func=cmd_compare)

    # Parse arguments and execute
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
