from rmaxsat.problems.problem_base import MaxSatProblemBase
from rmaxsat.solver.solution import Solution


class SolverBase:
    """
    A solver turns a MAX-SAT problem into a Solution whose steps record every
    assignment it tried
    """
    solution_quality: str = None

    def solve(self, problem: MaxSatProblemBase) -> Solution:
        raise NotImplementedError(f"{self.__class__.__name__} does not implement solve")


class ExactSolver(SolverBase):
    """the best step of the solution is a maximum assignment"""
    solution_quality = 'exact'


class ApproximationSolver(SolverBase):
    solution_quality = 'approximate'
