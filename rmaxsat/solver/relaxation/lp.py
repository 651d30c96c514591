from dataclasses import dataclass
from enum import Enum
import logging

import cvxpy as cp
import numpy as np

from rmaxsat.problems.cnf import Formula
from rmaxsat.utils.const import EXACT_TIMEOUT, RELAXATION_TIMEOUT


logger = logging.getLogger(__name__)


class SolverStatus(Enum):
    OPTIMAL = 'optimal'
    FEASIBLE = 'feasible'
    INFEASIBLE = 'infeasible'
    UNKNOWN = 'unknown'


@dataclass(frozen=True)
class RelaxationResult:
    """
    Fractional truth values ``x`` of the variables and ``z`` of the clauses.
    Shared between trials, so both arrays are read-only.
    """
    status: SolverStatus
    x: np.ndarray
    z: np.ndarray

    def __post_init__(self):
        for name in ('x', 'z'):
            values = np.array(getattr(self, name), dtype=float)
            values.setflags(write=False)
            object.__setattr__(self, name, values)

    @property
    def objective(self) -> float:
        return float(self.z.sum())

    @property
    def is_optimal(self) -> bool:
        return self.status is SolverStatus.OPTIMAL

    @classmethod
    def unknown(cls, n: int, m: int):
        return cls(SolverStatus.UNKNOWN, np.zeros(n), np.zeros(m))


def _status(problem: cp.Problem, x: cp.Variable) -> SolverStatus:
    if problem.status == cp.OPTIMAL:
        return SolverStatus.OPTIMAL
    if problem.status in (cp.INFEASIBLE, cp.INFEASIBLE_INACCURATE):
        return SolverStatus.INFEASIBLE
    if problem.status in (cp.OPTIMAL_INACCURATE, cp.USER_LIMIT) and x.value is not None:
        return SolverStatus.FEASIBLE
    return SolverStatus.UNKNOWN


def _solve(formula: Formula, n: int, accuracy: int, timeout: float, integer: bool) -> RelaxationResult:
    m = formula.m
    if m == 0:
        return RelaxationResult(SolverStatus.OPTIMAL, np.zeros(n), np.zeros(0))

    # raises IndexError for literals outside [1, n]
    pos, neg = formula.incidence(n)

    x = cp.Variable(n, integer=integer)
    ox = cp.Variable(n, integer=integer)
    z = cp.Variable(m, integer=integer)

    constraints = [
        x >= 0,
        ox >= 0,
        x + ox == accuracy,
        z >= 0,
        z <= accuracy,
        z <= pos @ x + neg @ ox,
    ]
    problem = cp.Problem(cp.Maximize(cp.sum(z)), constraints)

    try:
        problem.solve(solver=cp.SCIPY, scipy_options={'time_limit': float(timeout)})
    except cp.SolverError as e:
        logger.warning("Solver failed for %r: %s", formula, e)
        return RelaxationResult.unknown(n, m)

    status = _status(problem, x)
    if status in (SolverStatus.UNKNOWN, SolverStatus.INFEASIBLE):
        logger.warning("No solution for %r within %.1f seconds (status %s)", formula, timeout, problem.status)
        return RelaxationResult(status, np.zeros(n), np.zeros(m))

    x_val, z_val = x.value, z.value
    if integer:
        x_val, z_val = np.rint(x_val), np.rint(z_val)
    x_val = np.clip(x_val / accuracy, 0.0, 1.0)
    z_val = np.clip(z_val / accuracy, 0.0, 1.0)
    return RelaxationResult(status, x_val, z_val)


def solve_relaxation(formula: Formula, n: int, timeout: float = RELAXATION_TIMEOUT) -> RelaxationResult:
    """
    Solve the LP relaxation of MAX-SAT.

    Every variable gets a pair ``x_i + ox_i = 1`` of fractional truth values,
    every clause a value ``z_j <= 1`` bounded by the sum of its relaxed
    literals. Maximizing ``sum(z)`` gives an upper bound on the number of
    clauses any assignment satisfies.
    """
    return _solve(formula, n, accuracy=1, timeout=timeout, integer=False)


def solve_exact(formula: Formula, n: int, accuracy: int = 1, timeout: float = EXACT_TIMEOUT) -> RelaxationResult:
    """
    Solve the same model over the integers ``[0, accuracy]``, returning values
    in steps of ``1/accuracy``. With ``accuracy=1`` this is exact MAX-SAT.
    """
    if accuracy < 1:
        raise ValueError(f"accuracy must be a positive integer, got {accuracy}")
    return _solve(formula, n, accuracy=int(accuracy), timeout=timeout, integer=True)
