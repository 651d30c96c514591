# Third party imports
import pandas as pd

# Local imports
from rmaxsat.problems.cnf import Formula
from rmaxsat.solver.solution import Solution


class MaxSatProblemBase:

    def solution_summary(self):

        data = []
        for solution_type, breadcrumbs in self._solutions.items():
            if breadcrumbs is not None and len(breadcrumbs) > 0:
                row = {
                    'Solution Type': solution_type,
                    'Satisfied Clauses': breadcrumbs.cost,
                    'Average': breadcrumbs.average,
                    'Approximation Ratio': breadcrumbs.approx_ratio,
                    'Number of Trials': len(breadcrumbs),
                    'First Seen': breadcrumbs.first_sight_optimal(),
                }
                data.append(row)

        if not data:
            print(f"No solutions found for {self.name}")
            return None

        df = pd.DataFrame(data)
        df = df.sort_values('Satisfied Clauses', ascending=False, kind='stable')
        return df

    def __init__(self, formula: Formula, name: str = None):
        self._formula = formula
        self._metadata = {
            'name': name if name is not None else formula.name,
        }
        self._solutions = {
            'exact': None
        }

    @property
    def formula(self):
        return self._formula

    @property
    def name(self):
        return self._metadata['name']

    def solutions(self, solution_type: str = None):
        if solution_type is not None:
            return self._solutions[solution_type]
        else:
            return self._solutions

    def add_solution(self, solution_type: str, solution: Solution):
        self._solutions[solution_type] = solution
