import numpy as np

from rmaxsat.problems.cnf import Formula
from rmaxsat.solver.params import StrategyParameters
from rmaxsat.solver.solution import TrialResult


def probabilistic_randomised(params: StrategyParameters) -> TrialResult:
    """
    Algorithm A - sets every variable to TRUE or FALSE with probability 1/2.
    One draw per variable, x1 first, so a seed always gives the same assignment.
    """
    rng = np.random.default_rng(params.seed)
    assignment = rng.random(params.n) < 0.5
    return TrialResult.of(params.formula, assignment)


def randomised_rounding(params: StrategyParameters) -> TrialResult:
    """
    Algorithm B - sets x_i to TRUE with probability pi(x_i), where x_i is the
    fractional value of the variable in the LP relaxation.
    """
    relaxation = params.relaxation()
    rng = np.random.default_rng(params.seed)
    u = rng.random(params.n)
    p = params.bias(relaxation.x[:params.n])
    return TrialResult.of(params.formula, u < p)


def expected_satisfied(formula: Formula, probabilities: np.ndarray) -> float:
    """
    Expected number of satisfied clauses when x_i is TRUE independently with
    probability ``probabilities[i-1]``. Fixed variables have probability 0 or 1.
    """
    if formula.m == 0:
        return 0.0
    index, positive, valid = formula.literal_arrays
    p = np.asarray(probabilities, dtype=float)[index]
    literal_false = np.where(positive, 1.0 - p, p)
    clause_false = np.prod(np.where(valid, literal_false, 1.0), axis=1)
    return float(np.sum(1.0 - clause_false))


def derandomised_rounding(params: StrategyParameters) -> TrialResult:
    """
    Method of conditional expectations on top of Algorithm B: fixes x1, x2, ...
    in turn to the value with the larger expected number of satisfied clauses,
    the remaining variables still being rounded with pi(x_i). The result is at
    least the expectation of Algorithm B and does not depend on the seed.
    """
    relaxation = params.relaxation()
    probabilities = np.array(params.bias(relaxation.x[:params.n]), dtype=float)
    for i in range(params.n):
        probabilities[i] = 1.0
        if_true = expected_satisfied(params.formula, probabilities)
        probabilities[i] = 0.0
        if_false = expected_satisfied(params.formula, probabilities)
        probabilities[i] = 1.0 if if_true >= if_false else 0.0
    return TrialResult.of(params.formula, probabilities > 0.5)
