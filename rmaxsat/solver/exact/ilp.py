from rmaxsat.solver.relaxation.lp import SolverStatus, solve_exact
from rmaxsat.solver.solver_base import ExactSolver
from rmaxsat.solver.solution import Solution, TrialResult
from rmaxsat.utils.const import EXACT_TIMEOUT


class IlpMaxSatSolver(ExactSolver):
    """
    Exact MAX-SAT through the integral version of the LP relaxation
    """
    def __init__(self, timeout: float = EXACT_TIMEOUT):
        super().__init__()
        self.timeout = timeout
        self.status = None

    def solve(self, problem):
        result = solve_exact(problem.formula, problem.n, accuracy=1, timeout=self.timeout)
        self.status = result.status
        breadcrumbs = Solution(name='exact')
        if result.status in (SolverStatus.UNKNOWN, SolverStatus.INFEASIBLE):
            return breadcrumbs

        assignment = result.x > 0.5
        breadcrumbs.add_step(
            TrialResult.of(problem.formula, assignment),
            elapsed_time=0,
            status=result.status,
            objective=result.objective,
        )
        return breadcrumbs
