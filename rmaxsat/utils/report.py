from rmaxsat.problems.cnf import Formula
from rmaxsat.solver.relaxation.lp import RelaxationResult, SolverStatus
from rmaxsat.utils.const import MAX_PRINTABLE_CLAUSE_LENGTH

SEPARATOR = '-' * 89


def format_header(formula: Formula, n: int) -> str:
    return (f"MaxSAT randomised approximation for (n,m)-formula in conjunctive normal form "
            f"with n={n}, m={formula.m}, k={formula.k}")


def format_exact(result: RelaxationResult, timeout: float) -> str:
    satisfied = round(result.objective)
    if result.status is SolverStatus.OPTIMAL:
        return f"The optimal solution of the integer linear program has {satisfied} true clauses."
    if result.status is SolverStatus.FEASIBLE:
        return (f"The optimal solution of the integer linear program has >= {satisfied} true clauses. "
                f"Timed out before finding the optimal solution.")
    return (f"Failed to find optimal solution for the ILP in {timeout:f} seconds. "
            f"Problem size is too big.")


def format_relaxation(result: RelaxationResult) -> str:
    if not result.is_optimal:
        return (f"The relaxed linear program was not solved to optimality ({result.status.value}), "
                f"(sum of Zj)={result.objective} is not an upper bound.")
    return f"The solution of the relaxed linear program has a (sum of Zj)={result.objective:g}"


def format_result(result, formula: Formula) -> str:
    lines = [
        f"Ran {result.name} for {result.duration_ms:.0f} ms.",
        f"{result.name} - best: {result.best.satisfied}; average: {result.average:f}",
    ]
    if formula.k <= MAX_PRINTABLE_CLAUSE_LENGTH:
        lines.append(f"Best variable assignment: {result.best.format_assignment()}")
    return '\n'.join(lines)
