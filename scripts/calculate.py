"""CLI script for one-off withholding calculations.

Usage:
    # Withholdings on a gross payment
    python scripts/calculate.py --gross 5000 --dependents 2

    # Gross payment needed for a target net payment
    python scripts/calculate.py --net 3577.28 --dependents 2

    # Payment not subject to service tax, printed as JSON
    python scripts/calculate.py --gross 5000 --no-service-tax --json

    # Verbose logging
    python scripts/calculate.py --net 3577.28 -v
"""

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.calculators.errors import InvalidInputError
from src.calculators.models import InversionRequest, TaxInput, TaxSummary
from src.engine import TaxEngine

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Calculate contractor payment withholdings")
    amount = parser.add_mutually_exclusive_group(required=True)
    amount.add_argument("--gross", type=Decimal, help="Gross payment to withhold from")
    amount.add_argument("--net", type=Decimal, help="Target net payment to solve the gross for")
    parser.add_argument("--dependents", type=int, default=0, help="Number of dependents (default: 0)")
    parser.add_argument(
        "--service-tax-rate",
        type=Decimal,
        default=Decimal("5"),
        help="Service tax rate in percent (default: 5)",
    )
    parser.add_argument("--no-service-tax", action="store_true", help="Payment is not subject to service tax")
    parser.add_argument("--tolerance", type=Decimal, default=Decimal("0.01"), help="Net tolerance for --net")
    parser.add_argument("--max-iterations", type=int, default=100, help="Iteration budget for --net")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def format_summary(summary: TaxSummary) -> str:
    """Render a summary as an aligned plain-text table."""
    rows = [
        ("Gross amount", summary.gross_amount),
        (f"Contribution ({summary.contribution.rate_percent}%)", summary.contribution.amount),
        (f"Income tax ({summary.income_tax.rate_percent}%)", summary.income_tax.amount),
        (f"Service tax ({summary.service_tax.rate_percent}%)", summary.service_tax.amount),
        ("Total tax", summary.total_tax),
        ("Net amount", summary.net_amount),
    ]
    width = max(len(label) for label, _ in rows)
    lines = [f"{label:<{width}}  {value:>12,.2f}" for label, value in rows]
    lines.append(f"{'Total tax %':<{width}}  {summary.total_tax_percent:>12}")
    return "\n".join(lines)


def run(args: argparse.Namespace, engine: TaxEngine) -> int:
    include_service_tax = not args.no_service_tax
    try:
        if args.gross is not None:
            summary = engine.compute_summary(
                TaxInput(
                    gross_amount=args.gross,
                    dependents=args.dependents,
                    service_tax_rate=args.service_tax_rate,
                    include_service_tax=include_service_tax,
                )
            )
            print(summary.model_dump_json(indent=2) if args.json else format_summary(summary))
            return 0

        result = engine.solve_gross_from_net(
            InversionRequest(
                target_net_amount=args.net,
                dependents=args.dependents,
                service_tax_rate=args.service_tax_rate,
                include_service_tax=include_service_tax,
                tolerance=args.tolerance,
                max_iterations=args.max_iterations,
            )
        )
    except InvalidInputError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print(format_summary(result.summary))
        print(f"Iterations: {result.iterations_used}")
        if result.warning:
            print(f"Warning: {result.warning}")
    return 0 if result.converged else 1


def main() -> None:
    args = parse_args()

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    sys.exit(run(args, TaxEngine.from_settings()))


if __name__ == "__main__":
    main()
