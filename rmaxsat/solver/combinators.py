import numpy as np

from rmaxsat.problems.cnf import ConfigurationError
from rmaxsat.solver.params import StrategyParameters
from rmaxsat.solver.rounding import probabilistic_randomised, randomised_rounding
from rmaxsat.solver.solution import TrialResult

# entropy tag of the stream C_pa dispatches with, kept apart from the trial stream A and B consume
DISPATCH_STREAM = 1


def algorithm_c_all(params: StrategyParameters) -> TrialResult:
    """
    Algorithm C_all - runs Algorithm A and Algorithm B with the trial seed and
    returns the better result, A's on a tie
    """
    result_a = probabilistic_randomised(params)
    result_b = randomised_rounding(params)
    if result_b.satisfied > result_a.satisfied:
        return result_b
    return result_a


def algorithm_c_pa(params: StrategyParameters) -> TrialResult:
    """
    Algorithm C_pa - runs Algorithm A with probability pa, otherwise Algorithm B
    """
    if params.pa is None:
        raise ConfigurationError("Algorithm C_pa needs a probability pa")
    draw = np.random.default_rng([params.seed, DISPATCH_STREAM]).random()
    if draw < params.pa:
        return probabilistic_randomised(params)
    return randomised_rounding(params)
