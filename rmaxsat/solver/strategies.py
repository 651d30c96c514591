from enum import Enum
from fractions import Fraction

from rmaxsat.problems.cnf import ConfigurationError
from rmaxsat.solver.combinators import algorithm_c_all, algorithm_c_pa
from rmaxsat.solver.params import Bias, StrategyParameters
from rmaxsat.solver.rounding import derandomised_rounding, probabilistic_randomised, randomised_rounding
from rmaxsat.solver.solution import TrialResult


class Strategy(Enum):
    A = 'A'
    B = 'B'
    B_DERANDOMISED = 'B_derandomised'
    C_ALL = 'C_all'
    C_PA = 'C_pa'

    def __call__(self, params: StrategyParameters) -> TrialResult:
        return _STRATEGIES[self](params)

    @property
    def uses_pa(self):
        return self is Strategy.C_PA

    def label(self, bias: Bias = Bias.IDENTITY, pa: float = None):
        if self is Strategy.A:
            return "Algorithm A"
        bias = Bias.parse(bias)
        if self is Strategy.C_PA:
            pa_label = 'pa' if pa is None else str(Fraction(pa).limit_denominator(1000))
            return f"Algorithm C_{pa_label}[{bias.label}]"
        return f"Algorithm {self.value}[{bias.label}]"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(
                f"Invalid strategy: {value}, expected one of {[s.value for s in cls]}") from None


_STRATEGIES = {
    Strategy.A: probabilistic_randomised,
    Strategy.B: randomised_rounding,
    Strategy.B_DERANDOMISED: derandomised_rounding,
    Strategy.C_ALL: algorithm_c_all,
    Strategy.C_PA: algorithm_c_pa,
}
