from pathlib import Path

from rmaxsat.problems.cnf import Formula, MalformedFormulaError
from rmaxsat.problems.max_sat import MaxSatProblem


def read_cnf(filename, solve=False, solution_value=None, name=None):
    formula, n = read_dimacs(filename)
    if name is None:
        name = Path(filename).stem
    return MaxSatProblem(formula, n=n, solve=solve, solution_value=solution_value, name=name)


def read_dimacs(filename):
    with open(filename, 'r') as f:
        return parse_dimacs(f.read(), name=Path(filename).stem)


def parse_dimacs(text, name=None):
    """
    Parse a DIMACS cnf file, returning the formula and the number of variables
    declared in its header. Clauses end with 0 and may span several lines.
    """
    n_vars, n_clauses = None, None
    clauses, current = [], []

    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if line.startswith('%'):
            # SATLIB end marker, a lone 0 follows
            break
        if not line or line.startswith('c'):
            continue
        if line.startswith('p'):
            parts = line.split()
            if len(parts) != 4 or parts[1] != 'cnf':
                raise MalformedFormulaError(f"Invalid header in line {line_no}: {line}")
            n_vars, n_clauses = int(parts[2]), int(parts[3])
            continue
        if n_vars is None:
            raise MalformedFormulaError(f"Clause before 'p cnf' header in line {line_no}")
        for token in line.split():
            literal = int(token)
            if literal == 0:
                clauses.append(current)
                current = []
            else:
                current.append(literal)

    if current:
        clauses.append(current)
    if n_vars is None:
        raise MalformedFormulaError("Missing 'p cnf' header")
    if len(clauses) != n_clauses:
        raise MalformedFormulaError(f"Header declares {n_clauses} clauses, found {len(clauses)}")

    formula = Formula(clauses, name=name)
    if formula.n > n_vars:
        raise MalformedFormulaError(f"Header declares {n_vars} variables, formula references x{formula.n}")
    return formula, n_vars


def format_dimacs(formula, n=None):
    if n is None:
        n = formula.n
    lines = [f"p cnf {n} {formula.m}"]
    lines.extend(' '.join(map(str, clause)) + ' 0' for clause in formula)
    return '\n'.join(lines) + '\n'


def write_dimacs(formula, filename, n=None):
    with open(filename, 'w') as f:
        f.write(format_dimacs(formula, n))
