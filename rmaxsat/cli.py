import argparse
import logging

from rmaxsat.experiment import compute_bounds, default_configs, run_all
from rmaxsat.problems.cnf import generate_formula, solvable_formula, unsolvable_formula
from rmaxsat.problems.max_sat import MaxSatProblem
from rmaxsat.problems.read_cnf import read_dimacs
from rmaxsat.solver.relaxation.gateway import RelaxationGateway
from rmaxsat.utils.const import DEFAULT_REPETITIONS, DEFAULT_SEED, EXACT_TIMEOUT, RELAXATION_TIMEOUT
from rmaxsat.utils.report import SEPARATOR, format_exact, format_header, format_relaxation, format_result


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Randomised MAX-SAT approximation algorithms")
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--formula', choices=['solvable', 'unsolvable', 'random'], default='solvable',
                        help='Built-in formula or a generated one')
    source.add_argument('--dimacs', help='Read the formula from a DIMACS cnf file')
    parser.add_argument('-n', type=int, default=20, help='Variables of a generated formula')
    parser.add_argument('-m', type=int, default=3000, help='Clauses of a generated formula')
    parser.add_argument('-k', type=int, default=None, help='Literals per clause of a generated formula')
    parser.add_argument('--k-min', type=int, default=None)
    parser.add_argument('--k-max', type=int, default=None)
    parser.add_argument('--repetitions', type=int, default=DEFAULT_REPETITIONS)
    parser.add_argument('--seed', type=int, default=DEFAULT_SEED, help='Master seed of the experiments')
    parser.add_argument('--generation-seed', type=int, default=DEFAULT_SEED)
    parser.add_argument('--timeout', type=float, default=RELAXATION_TIMEOUT, help='Seconds for the LP relaxation')
    parser.add_argument('--exact-timeout', type=float, default=EXACT_TIMEOUT, help='Seconds for the exact solve')
    parser.add_argument('--no-bounds', action='store_true', help='Skip the exact and relaxed bounds')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser.parse_args(argv)


def load_formula(args):
    if args.dimacs:
        return read_dimacs(args.dimacs)
    if args.formula == 'random':
        k = args.k if args.k is not None or args.k_min is not None else 3
        formula = generate_formula(args.n, args.m, k, k_min=args.k_min, k_max=args.k_max, seed=args.generation_seed)
        return formula, args.n
    formula = solvable_formula() if args.formula == 'solvable' else unsolvable_formula()
    return formula, formula.n


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )

    # configuration errors surface here, before anything is solved
    configs = default_configs(args.repetitions, args.seed)
    formula, n = load_formula(args)
    problem = MaxSatProblem(formula, n=n)

    print(format_header(formula, n))
    if not args.no_bounds:
        exact, relaxation = compute_bounds(formula, n, args.exact_timeout, args.timeout)
        print(format_exact(exact, args.exact_timeout))
        print(format_relaxation(relaxation))

    gateway = RelaxationGateway(timeout=args.timeout)
    for result in run_all(problem, configs, gateway=gateway):
        print(SEPARATOR)
        print(format_result(result, formula))

    print(SEPARATOR)
    print(problem.solution_summary().to_string(index=False))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
