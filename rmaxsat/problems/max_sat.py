import warnings

from rmaxsat.problems.cnf import Formula, generate_formula
from rmaxsat.problems.problem_base import MaxSatProblemBase
from rmaxsat.solver.exact import BruteForceMaxSatSolver
from rmaxsat.utils.const import ArrayLike, DEFAULT_SEED


class MaxSatProblem(MaxSatProblemBase):

    @property
    def n(self):
        return self._n

    @property
    def m(self):
        return self.formula.m

    @property
    def k(self):
        return self.formula.k

    def __init__(self,
                 formula: Formula,
                 n: int = None,
                 solve=False,
                 solution_value=None,
                 name=None,
                 exact_solver=BruteForceMaxSatSolver,
        ):
        super().__init__(formula=formula, name=name)
        if n is None:
            n = formula.n
        elif n < formula.n:
            raise IndexError(f"Formula references x{formula.n} but n={n}")
        self._n = n

        self.ref_cost = None
        self.ref_solution_arr = None

        if solve:
            solution = exact_solver().solve(self)
            if len(solution) > 0:
                self.ref_solution_arr = solution.z
                self.ref_cost = solution.cost
                self.add_solution("exact", solution)
        if solution_value is not None:
            self.ref_cost = solution_value

    @classmethod
    def generate_random_maxsat_problem(
        cls,
        n: int,
        m: int,
        k: int = None,
        k_min: int = None,
        k_max: int = None,
        seed: int = DEFAULT_SEED,
        solve: bool = False,
        **kwargs):
        formula = generate_formula(n, m, k, k_min=k_min, k_max=k_max, seed=seed)
        return cls(formula, n=n, solve=solve, **kwargs)

    def evaluate_solution(self, solution: ArrayLike):
        return self.formula.evaluate(solution)

    def approx_ratio(self, solution: ArrayLike):
        if self.ref_cost is None:
            warnings.warn("Reference solution not available - cannot compute approximation ratio, returning None")
            return None
        if self.ref_cost == 0:
            return 1.0
        return self.evaluate_solution(solution) / self.ref_cost
