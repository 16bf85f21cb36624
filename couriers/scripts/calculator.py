"""
Courier Shipping Cost Calculator
================================

Compares the courier rate plans for one package and prints the cheapest
option. Without arguments the built-in sample package is used.

Usage:
    python -m couriers.scripts.calculator
    python -m couriers.scripts.calculator --weight 2 --length 10 --width 10 --height 10
    python -m couriers.scripts.calculator --plan "Rappi Courier" --plan "DHL Express"
    python -m couriers.scripts.calculator --stress 100000
"""

import argparse
import logging

from shared.rate_plans import InvalidPackageError, NoRatesAvailableError, Package, RatePlan
from couriers.calculate_costs import find_cheapest, quote_all
from couriers.data import SAMPLE_PACKAGE
from couriers.rate_plans import ALL, get_rate_plan, rate_plan_names
from couriers.scripts.stress_test import print_result, run_stress_test
from couriers.version import VERSION


logger = logging.getLogger(__name__)


def build_package(args: argparse.Namespace) -> Package:
    """Sample package with any command-line overrides applied."""
    sample = SAMPLE_PACKAGE
    return Package.from_values(
        weight_kg=args.weight if args.weight is not None else sample.weight_kg,
        length_cm=args.length if args.length is not None else sample.dimensions.length_cm,
        width_cm=args.width if args.width is not None else sample.dimensions.width_cm,
        height_cm=args.height if args.height is not None else sample.dimensions.height_cm,
    )


def select_plans(names: list[str] | None) -> list[RatePlan]:
    """
    Rate plans to compare: all of them, or the named subset.

    The subset keeps ALL order whatever order the names were given in, so
    ties still go to the plan listed first in ALL.
    """
    if names is None:
        return list(ALL)
    wanted = {get_rate_plan(n).name for n in names}
    return [p for p in ALL if p.name in wanted]


def print_results(package: Package, rate_plans: list[RatePlan]) -> None:
    """Print each plan's cost and the cheapest option."""
    print("\n=== Courier Shipping Cost Optimizer ===")
    print(f"Version: {VERSION}")
    print("-" * 40)

    dims = package.dimensions
    print(f"\nPackage: {package.weight_kg} kg, "
          f"{dims.length_cm}x{dims.width_cm}x{dims.height_cm} cm "
          f"({package.volume_cm3:,.0f} cm3)")

    print("\nServices and their costs:")
    for quote in quote_all(package, rate_plans):
        print(f"- {quote.plan_name}: ${quote.cost:.2f}")

    print("\n" + "-" * 40)
    best = find_cheapest(package, rate_plans)
    print(f"Cheapest shipping option: {best}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find the cheapest courier for a package."
    )
    parser.add_argument("--weight", type=float, help="Weight in kg")
    parser.add_argument("--length", type=float, help="Length in cm")
    parser.add_argument("--width", type=float, help="Width in cm")
    parser.add_argument("--height", type=float, help="Height in cm")
    parser.add_argument("--plan", action="append", metavar="NAME",
                        help=(f"Restrict to a rate plan (repeatable): {', '.join(rate_plan_names())}. "
                              "Plans are always compared in this order; ties go to the earliest."))
    parser.add_argument("--stress", type=int, default=0, metavar="COUNT",
                        help="Also run the stress test over COUNT random packages")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the stress test")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        package = build_package(args)
    except InvalidPackageError as e:
        print(f"Error: {e}")
        return 2

    try:
        rate_plans = select_plans(args.plan)
    except KeyError as e:
        print(f"Error: {e.args[0]}")
        return 2

    logger.debug("Comparing %d rate plan(s): %s", len(rate_plans), [p.name for p in rate_plans])

    try:
        print_results(package, rate_plans)
        if args.stress > 0:
            print_result(run_stress_test(rate_plans, count=args.stress, seed=args.seed))
    except NoRatesAvailableError:
        print("No rates available")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
