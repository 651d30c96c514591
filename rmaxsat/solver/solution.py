import copy
from dataclasses import dataclass

import numpy as np

from rmaxsat.problems.cnf import Formula, evaluate
from rmaxsat.utils.const import ArrayLike


@dataclass(frozen=True)
class TrialResult:
    """Number of satisfied clauses and the assignment x1...xn that produced it"""
    satisfied: int
    assignment: np.ndarray

    def __post_init__(self):
        if self.satisfied < 0:
            raise ValueError(f"satisfied must be >= 0, got {self.satisfied}")
        assignment = np.array(self.assignment, dtype=bool)
        assignment.setflags(write=False)
        object.__setattr__(self, 'assignment', assignment)

    @classmethod
    def of(cls, formula: Formula, assignment: ArrayLike):
        return cls(evaluate(formula, assignment), assignment)

    @property
    def bitstring(self):
        return ''.join(str(int(x)) for x in self.assignment)

    def format_assignment(self):
        return ''.join(f"x{i + 1}={'TRUE ' if value else 'FALSE'} " for i, value in enumerate(self.assignment))

    def __eq__(self, other):
        if not isinstance(other, TrialResult):
            return NotImplemented
        return self.satisfied == other.satisfied and np.array_equal(self.assignment, other.assignment)


class Solution:
    """
    The trials of one experiment, in the order they ran
    """

    @property
    def data(self):
        # summary of the best trial as dictionary
        result = copy.deepcopy(self._best_step)
        result['first_seen'] = self.first_sight_optimal()
        result['total_steps'] = len(self)
        result['average'] = self.average
        return result

    @property
    def cost(self):
        return self._best_step['cost']

    @property
    def z(self):
        return self._best_step['solution']

    @property
    def best(self) -> TrialResult:
        return self._best_step['result']

    @property
    def average(self):
        if not self._breadcrumbs:
            return None
        return self._total / len(self._breadcrumbs)

    @property
    def approx_ratio(self):
        return self._best_step['approx_ratio']

    def __init__(self, name: str = None):
        self.name = name
        self._step_template = {
            'result': None,
            'solution': None,
            'cost': None,
            'seed': None,
            'time': None,
            'approx_ratio': None,
        }
        self._breadcrumbs = []
        self._total = 0
        self._best_step = dict(self._step_template, n_steps=None)

    def add_step(
        self,
        result: TrialResult,
        seed: int = None,
        elapsed_time: float = None,
        approx_ratio: float = None,
        **kwargs
    ):
        step = self._step_template.copy()
        step['result'] = result
        step['solution'] = result.assignment
        step['cost'] = result.satisfied
        step['seed'] = seed
        step['time'] = elapsed_time
        step['approx_ratio'] = approx_ratio
        step['n_steps'] = len(self._breadcrumbs) + 1
        for k, v in kwargs.items():
            step[k] = v
        self._breadcrumbs.append(step)
        self._total += result.satisfied

        # strictly better only, so the first trial reaching the maximum stays the best
        if self._best_step['cost'] is None or result.satisfied > self._best_step['cost']:
            self._best_step = step.copy()

        return self

    def first_sight_optimal(self):
        return self._best_step['n_steps']

    def __getitem__(self, index):
        return self._breadcrumbs[index]

    def __str__(self):
        return (f"Solution: {self.best.bitstring if self.best is not None else None} \n"
                f"Satisfied Clauses: {self.cost} \nAverage: {self.average} \nApproximation Ratio: {self.approx_ratio}")

    def __len__(self):
        return len(self._breadcrumbs)

    def get_history(self, *keys):
        import pandas as pd

        if not keys:
            keys = ('n_steps', 'seed', 'cost')
        history = {}
        for key in keys:
            history[key] = [step.get(key) for step in self._breadcrumbs]

        return pd.DataFrame(history)
