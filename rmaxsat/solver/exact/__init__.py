from rmaxsat.solver.exact.brute_force import BruteForceMaxSatSolver
from rmaxsat.solver.exact.ilp import IlpMaxSatSolver
