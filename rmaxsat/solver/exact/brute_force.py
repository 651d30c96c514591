import numpy as np

from rmaxsat.solver.solver_base import ExactSolver
from rmaxsat.solver.solution import Solution, TrialResult


class BruteForceMaxSatSolver(ExactSolver):
    """
    brute-force solver for max sat
    """
    def __init__(self, max_n: int = 20):
        super().__init__()
        self.max_n = max_n

    def sanity_check(self, problem):
        if problem.n > self.max_n:
            raise ValueError(f"Number of variables in problem is greater than the maximum allowed: {problem.n} > {self.max_n}")

    def solve(self, problem):
        best_assignments, best_value = self._solve(problem)
        breadcrumbs = Solution(name='exact')
        breadcrumbs.add_step(
            TrialResult(best_value, best_assignments[0]),
            elapsed_time=0,
            n_optimal=len(best_assignments)
        )
        return breadcrumbs

    def _solve(self, problem):
        self.sanity_check(problem)

        n = problem.n
        formula = problem.formula
        # Enumerate all possible assignments (2^n of them), x1 is the lowest bit
        assignments = ((np.arange(1 << n)[:, None] & (1 << np.arange(n))) > 0)  # shape (2^n, n)
        if formula.m == 0:
            return assignments, 0

        # literal truth values for every assignment at once, shape (2^n, m, k)
        index, positive, valid = formula.literal_arrays
        literal_true = assignments[:, index] == positive
        satisfied = np.any(literal_true & valid, axis=2).sum(axis=1)  # shape (2^n,)

        best_value = int(satisfied.max())
        best_assignments = assignments[satisfied == best_value]
        return best_assignments, best_value
