from rmaxsat.problems.cnf import (
    ConfigurationError,
    Formula,
    GenerationError,
    MalformedFormulaError,
    evaluate,
    generate_formula,
    solvable_formula,
    unsolvable_formula,
)
from rmaxsat.problems.max_sat import MaxSatProblem
from rmaxsat.solver.params import Bias, StrategyParameters
from rmaxsat.solver.relaxation import RelaxationGateway, RelaxationResult, SolverStatus, solve_exact, solve_relaxation
from rmaxsat.solver.solution import Solution, TrialResult
from rmaxsat.solver.strategies import Strategy
from rmaxsat.experiment import ExperimentConfig, ExperimentResult, draw_trial_seeds, run_experiment

__version__ = '0.1.0'
