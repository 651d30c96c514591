"""
Experiment harness: runs one strategy many times against a formula and keeps
the best and the average number of satisfied clauses.

Reproducibility comes from two levels of seeding. A master stream seeded with
``master_seed`` hands out one seed per trial, and every trial builds its own
stream from that seed. All trial seeds are drawn before the first trial runs,
so the outcome, including which assignment counts as best, depends on
``master_seed`` alone.
"""
from dataclasses import KW_ONLY, dataclass, field
import logging
import time
from typing import List

import numpy as np

from rmaxsat.problems.cnf import ConfigurationError, Formula
from rmaxsat.problems.max_sat import MaxSatProblem
from rmaxsat.solver.params import Bias, StrategyParameters, check_pa
from rmaxsat.solver.relaxation.gateway import RelaxationGateway
from rmaxsat.solver.relaxation.lp import solve_exact, solve_relaxation
from rmaxsat.solver.solution import Solution, TrialResult
from rmaxsat.solver.solver_base import ApproximationSolver
from rmaxsat.solver.strategies import Strategy
from rmaxsat.utils.const import DEFAULT_REPETITIONS, DEFAULT_SEED, EXACT_TIMEOUT, RELAXATION_TIMEOUT


logger = logging.getLogger(__name__)


@dataclass
class ExperimentConfig:
    strategy: Strategy
    _: KW_ONLY
    repetitions: int = field(default=DEFAULT_REPETITIONS, metadata={'help': 'Number of trials'})
    master_seed: int = field(default=DEFAULT_SEED, metadata={'help': 'Seed of the stream the trial seeds come from'})
    bias: Bias = field(default=Bias.IDENTITY, metadata={'help': 'pi for Algorithm B'})
    pa: float = field(default=None, metadata={'help': 'Probability of running Algorithm A in C_pa'})
    name: str = field(default=None, metadata={'help': 'Name used in reports'})

    def __post_init__(self):
        self.strategy = Strategy.parse(self.strategy)
        self.bias = Bias.parse(self.bias)
        check_pa(self.pa)
        if self.strategy.uses_pa and self.pa is None:
            raise ConfigurationError(f"{self.strategy.value} needs a probability pa")
        if self.repetitions < 1:
            raise ConfigurationError(f"repetitions must be positive, got {self.repetitions}")
        if self.name is None:
            self.name = self.strategy.label(self.bias, self.pa)


@dataclass(frozen=True)
class ExperimentResult:
    name: str
    duration_ms: float
    best: TrialResult
    average: float
    solution: Solution = field(repr=False)


def draw_trial_seeds(master_seed: int, repetitions: int) -> List[int]:
    """the seeds of all trials, in the order the trials run"""
    rng = np.random.default_rng(master_seed)
    return [int(seed) for seed in rng.integers(0, np.iinfo(np.int64).max, size=repetitions, dtype=np.int64)]


class RandomisedMaxSatSolver(ApproximationSolver):

    def __init__(self, config: ExperimentConfig, gateway: RelaxationGateway = None, logger: logging.Logger = None):
        super().__init__()
        self.config = config
        self.gateway = gateway
        self.logger = logger if logger is not None else logging.getLogger(self.__class__.__name__)

    def solve(self, problem: MaxSatProblem) -> Solution:
        config = self.config
        breadcrumbs = Solution(name=config.name)
        with_ratio = problem.ref_cost is not None

        for seed in draw_trial_seeds(config.master_seed, config.repetitions):
            params = StrategyParameters(
                problem.formula, problem.n, seed,
                bias=config.bias, pa=config.pa, gateway=self.gateway,
            )
            start = time.perf_counter()
            result = config.strategy(params)
            breadcrumbs.add_step(
                result,
                seed=seed,
                elapsed_time=time.perf_counter() - start,
                approx_ratio=problem.approx_ratio(result.assignment) if with_ratio else None,
            )

        self.logger.debug("%s: best %s, average %s over %d trials",
                          config.name, breadcrumbs.cost, breadcrumbs.average, len(breadcrumbs))
        return breadcrumbs

    def run(self, problem: MaxSatProblem) -> ExperimentResult:
        start = time.perf_counter()
        breadcrumbs = self.solve(problem)
        duration_ms = (time.perf_counter() - start) * 1000
        problem.add_solution(self.config.name, breadcrumbs)
        return ExperimentResult(
            name=self.config.name,
            duration_ms=duration_ms,
            best=breadcrumbs.best,
            average=breadcrumbs.average,
            solution=breadcrumbs,
        )


def run_experiment(
    strategy,
    formula: Formula,
    n: int,
    repetitions: int,
    master_seed: int,
    gateway: RelaxationGateway = None,
    **extra
) -> ExperimentResult:
    """
    Run ``strategy`` ``repetitions`` times on ``formula``. ``extra`` takes the
    strategy specific ``bias``, ``pa`` and ``name``.
    """
    config = ExperimentConfig(strategy, repetitions=repetitions, master_seed=master_seed, **extra)
    problem = MaxSatProblem(formula, n=n, name=formula.name)
    return RandomisedMaxSatSolver(config, gateway=gateway).run(problem)


def run_all(problem: MaxSatProblem, configs: List[ExperimentConfig], gateway: RelaxationGateway = None):
    results = []
    for config in configs:
        logger.info("Running %s with %d repetitions", config.name, config.repetitions)
        results.append(RandomisedMaxSatSolver(config, gateway=gateway).run(problem))
    return results


def default_configs(repetitions: int = DEFAULT_REPETITIONS, master_seed: int = DEFAULT_SEED):
    common = dict(repetitions=repetitions, master_seed=master_seed)
    return [
        ExperimentConfig(Strategy.A, **common),
        ExperimentConfig(Strategy.B, bias=Bias.IDENTITY, **common),
        ExperimentConfig(Strategy.B, bias=Bias.SHRINK, **common),
        ExperimentConfig(Strategy.C_ALL, bias=Bias.IDENTITY, **common),
        ExperimentConfig(Strategy.C_PA, bias=Bias.IDENTITY, pa=0.5, **common),
    ]


def compute_bounds(formula: Formula, n: int,
                   exact_timeout: float = EXACT_TIMEOUT, relaxation_timeout: float = RELAXATION_TIMEOUT):
    """the exact optimum (or the best integral value found in time) and the LP upper bound"""
    exact = solve_exact(formula, n, accuracy=1, timeout=exact_timeout)
    relaxation = solve_relaxation(formula, n, timeout=relaxation_timeout)
    return exact, relaxation
