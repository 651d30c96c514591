from dataclasses import KW_ONLY, dataclass, field
from enum import Enum

from rmaxsat.problems.cnf import ConfigurationError, Formula
from rmaxsat.solver.relaxation.gateway import RelaxationGateway, default_gateway


class Bias(Enum):
    """
    The functions pi mapping a fractional value x_i to the probability of
    setting x_i to TRUE in Algorithm B
    """
    IDENTITY = 'identity'
    SHRINK = 'shrink'

    def __call__(self, x):
        if self is Bias.SHRINK:
            # pulls every probability into [1/4, 3/4]
            return 0.5 * x + 0.25
        return x

    @property
    def label(self):
        if self is Bias.SHRINK:
            return 'pi(x)=1/2*x+1/4'
        return 'pi(x)=x'

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(f"Invalid bias: {value}, expected one of {[b.value for b in cls]}") from None


def check_pa(pa):
    if pa is not None and not 0.0 <= pa <= 1.0:
        raise ConfigurationError(f"pa must lie in [0, 1], got {pa}")
    return pa


@dataclass(frozen=True)
class StrategyParameters:
    """Everything a strategy needs for a single trial"""
    formula: Formula
    n: int
    seed: int
    _: KW_ONLY
    bias: Bias = field(default=Bias.IDENTITY, metadata={'help': 'pi for Algorithm B'})
    pa: float = field(default=None, metadata={'help': 'probability of running Algorithm A in C_pa'})
    gateway: RelaxationGateway = field(default=None, compare=False, metadata={'help': 'LP relaxation cache'})

    def __post_init__(self):
        object.__setattr__(self, 'bias', Bias.parse(self.bias))
        check_pa(self.pa)
        if self.formula.n > self.n:
            raise IndexError(f"Formula references x{self.formula.n} but n={self.n}")

    def relaxation(self):
        gateway = self.gateway if self.gateway is not None else default_gateway()
        return gateway.solve(self.formula, self.n)
