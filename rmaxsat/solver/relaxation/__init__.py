from rmaxsat.solver.relaxation.lp import RelaxationResult, SolverStatus, solve_exact, solve_relaxation
from rmaxsat.solver.relaxation.gateway import RelaxationGateway, default_gateway
