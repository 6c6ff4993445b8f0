"""
Command-Line Interface for the traced solvers.

Usage:
    python run_solver.py [OPTIONS]

Options:
    --config PATH       Load the system from a JSON file
    --example NAME      Use a built-in example system (default: default)
    --method METHOD     Solve with a single method and print its trace
    --compare           Run every method and print the recommendation
    --output PATH       Write an Excel comparison report
    --markdown          Print the comparison as Markdown
    --strict            Fail when the solution contains inf/nan
    --verbose           Print every trace step
    --list-examples     List the built-in example systems
    --save-config PATH  Write the selected system to a JSON file
"""

import argparse
import sys
from typing import List, Optional

from .comparison import ComparisonResult, compare_all_methods
from .config import SystemConfiguration
from .examples import EXAMPLES, load_example
from .linalg import LinearSystemError, has_zero_diagonal, is_diagonally_dominant
from .methods import METHODS, normalize_method, solve
from .report import ComparisonReporter, generate_markdown_summary
from .trace import SolveResult


def ensure_finite(result: SolveResult) -> SolveResult:
    """Raise ``LinearSystemError`` if ``result`` holds inf/nan values."""
    if not result.is_finite:
        name = result.method or "solver"
        raise LinearSystemError(f"Singular matrix: {name} produced a non-finite solution")
    return result


def _format_vector(values) -> str:
    return "[" + ", ".join(f"{v:.4f}" for v in values) + "]"


def print_trace(result: SolveResult, verbose: bool = False) -> None:
    """Print a solve result, optionally with every recorded step."""
    if verbose:
        for index, step in enumerate(result.steps, 1):
            print(f"  [{index:3d}] {step.description}")
            if step.x_current is not None:
                print(f"        x = {_format_vector(step.x_current)}")
            else:
                for row, rhs in zip(step.matrix, step.vector):
                    print(f"        {_format_vector(row)} | {rhs:.4f}")

    print(f"\nSteps: {len(result.steps)}")
    if result.is_iterative:
        status = "converged" if result.converged else "did not converge"
        print(f"Iterations: {result.iterations} ({status})")
    print(f"Final Solution: {result.format_solution()}")


def print_comparison(comparison: ComparisonResult) -> None:
    best = comparison.best_metric
    print(f"Recommended Method: {best.name if best else '-'}")
    print(f"  {comparison.reason}")
    print()
    print(f"  {'Method':<22} {'Type':<10} {'Steps':>5}  {'Status':<12} {'Eff.':>5}  Score")
    print("  " + "-" * 66)
    for item in comparison.ranking():
        metric = item.metric
        if metric.is_direct:
            status = "Direct"
        else:
            status = "Converged" if metric.converged else "No Conv."
        marker = "*" if metric.key == comparison.best_method else " "
        print(
            f"{marker} {metric.name:<22} {metric.type:<10} {metric.steps:>5}  {status:<12} "
            f"{metric.efficiency * 100:>4.0f}%  {item.score:.2f}"
        )


def list_examples() -> None:
    """List the built-in example systems."""
    print("\nAvailable examples:")
    print("-" * 60)
    for name in EXAMPLES:
        config = load_example(name)
        print(f"  {name}")
        print(f"      {config.label} ({config.size}x{config.size})")
        if config.description:
            print(f"      {config.description}")
    print()


def _load_system(args: argparse.Namespace) -> SystemConfiguration:
    if args.config:
        return SystemConfiguration.from_json(args.config)
    return load_example(args.example)


def _warn_about_system(config: SystemConfiguration, iterative: bool) -> None:
    if has_zero_diagonal(config.matrix):
        print("Warning: zero on the diagonal; methods without pivoting will divide by zero.")
    if iterative and not is_diagonally_dominant(config.matrix):
        print("Warning: matrix is not strictly diagonally dominant; iterative methods may not converge.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve A x = b step by step and compare direct and iterative methods",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_solver.py                              # Gauss elimination on the default system
  python run_solver.py --method seidel --verbose    # Full Gauss-Seidel trace
  python run_solver.py --example pivot --compare    # Compare all methods
  python run_solver.py --config system.json --compare --output reports/comparison.xlsx
        """
    )

    parser.add_argument("--config", "-c", help="System JSON file (matrix, vector, method, ...)")
    parser.add_argument(
        "--example", "-e",
        default="default",
        help=f"Built-in example system ({', '.join(EXAMPLES)})"
    )
    parser.add_argument(
        "--method", "-m",
        help=f"Method to run ({', '.join(METHODS)}); defaults to the configuration's method"
    )
    parser.add_argument("--compare", action="store_true", help="Run and rank every method")
    parser.add_argument("--tolerance", "-t", type=float, help="Convergence tolerance for iterative methods")
    parser.add_argument("--max-iter", type=int, help="Iteration cap for iterative methods")
    parser.add_argument("--output", "-o", help="Excel report path (with --compare)")
    parser.add_argument("--markdown", action="store_true", help="Print the comparison as Markdown")
    parser.add_argument("--strict", action="store_true", help="Fail if the solution contains inf/nan")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print every trace step")
    parser.add_argument("--list-examples", "-l", action="store_true", help="List built-in example systems")
    parser.add_argument("--save-config", metavar="PATH", help="Write the selected system to a JSON file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.list_examples:
        list_examples()
        return 0

    try:
        config = _load_system(args)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}")
        return 1

    if args.save_config:
        try:
            config.save(args.save_config)
        except OSError as exc:
            print(f"Error: {exc}")
            return 1
        print(f"System saved to: {args.save_config}")

    if args.verbose:
        label = config.label or "custom system"
        print(f"System: {label} ({config.size}x{config.size})")

    if args.compare:
        _warn_about_system(config, iterative=True)
        comparison = compare_all_methods(config.matrix, config.vector)
        print_comparison(comparison)
        if args.markdown:
            print("\n" + generate_markdown_summary(comparison))
        if args.output:
            ComparisonReporter(config.matrix, config.vector, comparison, label=config.label).save(args.output)
            print(f"\nReport saved to: {args.output}")
        if args.strict:
            try:
                for result in comparison.results.values():
                    ensure_finite(result)
            except LinearSystemError as exc:
                print(f"Error: {exc}")
                return 1
        return 0

    try:
        method = normalize_method(args.method or config.method)
        _warn_about_system(config, iterative=METHODS[method].is_iterative)
        result = solve(
            method,
            config.matrix,
            config.vector,
            tolerance=args.tolerance if args.tolerance is not None else config.tolerance,
            max_iter=args.max_iter if args.max_iter is not None else config.max_iter,
        )
        print(f"Method: {METHODS[result.method].label}")
        print_trace(result, verbose=args.verbose)
        if not result.is_finite:
            print("Warning: solution contains inf/nan; the matrix is singular for this method.")
        if args.strict:
            ensure_finite(result)
    except (ValueError, LinearSystemError) as exc:
        print(f"Error: {exc}")
        return 1

    if result.is_iterative and not result.converged:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
