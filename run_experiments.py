"""
Run Confidence and Power Simulations

Simulates many A/B experiments with known true rates and reports how often
an estimator's "B beats A" calls are right.

Usage:
    # Default: 1000 experiments, 100 trials per group, alpha=0.1, summation
    uv run python run_experiments.py

    # Normal approximation with a 10% relative minimum effect
    uv run python run_experiments.py --method normal_approx --delta-type relative --delta 0.1

    # Grid over significance levels and sample sizes
    uv run python run_experiments.py --alpha 0.1 0.05 --per-experiment 20 100 500

    # Print the raw report dict
    uv run python run_experiments.py --quiet
"""

import argparse
import logging
import sys

from beta_ab import Delta
from beta_ab.estimators.registry import ComparisonMethod
from beta_ab.sampling.binomial import BINOMIAL_SAMPLERS
from beta_ab.simulation.experiments import (
    run_experiments_find_confidence_and_power,
    sweep_confidence_and_power,
)


def print_report(report, alpha: float, n_per_experiment: int):
    """Pretty-print one ExperimentReport."""
    print("\n" + "="*80)
    print(f"alpha={alpha} | n per experiment={n_per_experiment} | experiments={report.n_experiments}")
    print("="*80)
    print(f"  True positives:  {report.n_true_positives:>6}   False positives: {report.n_false_positives:>6}")
    print(f"  False negatives: {report.n_false_negatives:>6}   True negatives:  {report.n_true_negatives:>6}")
    lo, hi = report.p_value_ci
    print(f"\n  Empirical p-value:    {report.empirical_p_value:.4f}  (95% CI {lo:.4f} - {hi:.4f})")
    print(f"  Empirical confidence: {report.empirical_confidence:.4f}")
    lo, hi = report.power_ci
    print(f"  Empirical power:      {report.empirical_power:.4f}  (95% CI {lo:.4f} - {hi:.4f})")
    print(f"  Hypothesized FPs:     {report.hypothesized_false_positives:.2f}")

    status = "✓" if report.empirical_p_value < alpha else "✗"
    print(f"\n{status} Empirical p-value {'below' if status == '✓' else 'NOT below'} alpha={alpha}")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Simulate A/B experiments to measure estimator confidence and power",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_experiments.py
  python run_experiments.py --method monte_carlo --experiments 200
  python run_experiments.py --delta-type constant --delta 0.05
  python run_experiments.py --alpha 0.2 0.1 0.05 --per-experiment 10 50 200
        """
    )

    parser.add_argument('--experiments', type=int, default=1000,
                        help='Number of simulated experiments (default: 1000)')
    parser.add_argument('--per-experiment', type=int, nargs='+', default=[100],
                        help='Trials per group per experiment (default: 100)')
    parser.add_argument('--alpha', type=float, nargs='+', default=[0.1],
                        help='Significance level(s) (default: 0.1)')
    parser.add_argument('--method', choices=[m.value for m in ComparisonMethod], default=None,
                        help='Estimator (default: summation, or integration with a delta)')
    parser.add_argument('--delta-type', choices=['constant', 'relative', 'logit'], default=None,
                        help='Type of hypothesized minimum effect')
    parser.add_argument('--delta', type=float, default=0.0,
                        help='Value of the hypothesized minimum effect (default: 0.0)')
    parser.add_argument('--binomial', choices=list(BINOMIAL_SAMPLERS), default='optimized',
                        help='Binomial generator (default: optimized)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--quiet', action='store_true',
                        help='Print the raw report dict instead of the formatted report '
                             '(sweeps always print a table) and skip error tracebacks')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')

    args = parser.parse_args()
    verbose = not args.quiet

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        delta = Delta(args.delta_type, args.delta) if args.delta_type else None
        common = dict(
            delta=delta,
            binomial_type=args.binomial,
            comparison_method=args.method,
        )

        if len(args.alpha) == 1 and len(args.per_experiment) == 1:
            report = run_experiments_find_confidence_and_power(
                n_experiments=args.experiments,
                n_per_experiment=args.per_experiment[0],
                significance=args.alpha[0],
                random_state=args.seed,
                **common,
            )
            if verbose:
                print_report(report, args.alpha[0], args.per_experiment[0])
            else:
                print(report.to_dict())
            return 0

        df = sweep_confidence_and_power(
            alphas=args.alpha,
            sample_sizes=args.per_experiment,
            n_experiments=args.experiments,
            random_state=args.seed,
            **common,
        )
        columns = ['significance', 'n_per_experiment', 'empirical_p_value',
                   'empirical_confidence', 'empirical_power', 'hypothesized_false_positives']
        print(df[columns].to_string(index=False))
        return 0

    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        if verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
