from dataclasses import KW_ONLY, dataclass, field
import logging
import threading
from typing import Callable, MutableMapping

from rmaxsat.problems.cnf import Formula, formula_fingerprint
from rmaxsat.solver.relaxation.lp import RelaxationResult, solve_relaxation
from rmaxsat.utils.const import RELAXATION_TIMEOUT


@dataclass
class RelaxationGateway:
    """
    Solves the LP relaxation once per distinct formula and hands out the cached
    result afterwards. Formulas are told apart by their fingerprint only, two
    formulas with colliding fingerprints share a result. Nothing is evicted.

    A cached result covers every ``n`` up to the length of its ``x``. A caller
    asking for more variables triggers a new solve that replaces the entry.
    """
    _: KW_ONLY
    solver: Callable[[Formula, int, float], RelaxationResult] = field(
        default=solve_relaxation, metadata={'help': 'solve(formula, n, timeout) -> RelaxationResult'})
    fingerprint: Callable[[Formula], object] = field(
        default=formula_fingerprint, metadata={'help': 'Cache key of a formula'})
    cache: MutableMapping = field(default_factory=dict)
    timeout: float = field(default=RELAXATION_TIMEOUT, metadata={'help': 'Seconds per solve'})
    logger: logging.Logger = field(default=None, metadata={'help': 'Logger'})

    def __post_init__(self):
        if self.logger is None:
            self.logger = logging.getLogger(self.__class__.__name__)
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def solve(self, formula: Formula, n: int) -> RelaxationResult:
        key = self.fingerprint(formula)
        # the first caller solves while holding the lock, later callers wait for its result
        with self._lock:
            result = self.cache.get(key)
            if result is not None and len(result.x) >= n:
                self.hits += 1
                return result

            self.misses += 1
            if result is None:
                self.logger.debug("Solving relaxation for %r", formula)
            else:
                self.logger.debug("Re-solving relaxation for %r with %d instead of %d variables",
                                  formula, n, len(result.x))
            result = self.solver(formula, n, self.timeout)
            if not result.is_optimal:
                self.logger.warning("Relaxation for %r is not optimal (%s), rounding uses degraded values",
                                    formula, result.status.value)
            self.cache[key] = result
            return result

    def cache_info(self):
        return {'hits': self.hits, 'misses': self.misses, 'size': len(self.cache)}

    def clear(self):
        with self._lock:
            self.cache.clear()
            self.hits = 0
            self.misses = 0


_default_gateway = None
_default_lock = threading.Lock()


def default_gateway() -> RelaxationGateway:
    global _default_gateway
    with _default_lock:
        if _default_gateway is None:
            _default_gateway = RelaxationGateway()
        return _default_gateway
