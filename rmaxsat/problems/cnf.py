"""
Boolean formulas in conjunctive normal form.

A literal is a nonzero integer: its magnitude is the 1-based variable index and
its sign the polarity. A clause is a tuple of literals, a formula a tuple of
clauses. Assignments are boolean arrays where variable ``i`` lives in slot ``i-1``.
"""
from functools import cached_property
import hashlib
from typing import Iterable, Tuple

import numpy as np

from rmaxsat.utils.const import ArrayLike, DEFAULT_SEED, MAX_GENERATION_ATTEMPTS


Clause = Tuple[int, ...]


class MalformedFormulaError(ValueError):
    pass


class ConfigurationError(ValueError):
    pass


class GenerationError(ConfigurationError):
    pass


def check_clause(clause: Iterable[int]) -> Clause:
    """
    Normalize a clause to a tuple of ints, rejecting empty clauses, zero
    literals and clauses mentioning the same variable twice
    """
    clause = tuple(int(literal) for literal in clause)
    if len(clause) == 0:
        raise MalformedFormulaError("Clauses must contain at least one literal")
    if 0 in clause:
        raise MalformedFormulaError(f"0 is not a valid literal: {clause}")
    magnitudes = [abs(literal) for literal in clause]
    if len(set(magnitudes)) != len(magnitudes):
        raise MalformedFormulaError(f"Variable appears twice in clause {clause}")
    return clause


def formula_fingerprint(formula: "Formula") -> str:
    # clause boundaries are part of the digest so (1 2)(3) and (1)(2 3) differ
    digest = hashlib.sha256()
    for clause in formula:
        digest.update(" ".join(map(str, clause)).encode())
        digest.update(b"|")
    return digest.hexdigest()


class Formula:

    @property
    def clauses(self) -> Tuple[Clause, ...]:
        return self._clauses

    @property
    def name(self):
        return self._name

    @cached_property
    def n(self) -> int:
        """largest variable index referenced"""
        return max((abs(literal) for clause in self._clauses for literal in clause), default=0)

    @property
    def m(self) -> int:
        return len(self._clauses)

    @property
    def k(self) -> int:
        return max(self.clause_lengths, default=0)

    @property
    def k_min(self) -> int:
        return min(self.clause_lengths, default=0)

    @property
    def clause_lengths(self):
        return [len(clause) for clause in self._clauses]

    @cached_property
    def fingerprint(self) -> str:
        return formula_fingerprint(self)

    def __init__(self, clauses: Iterable[Iterable[int]], name: str = None):
        self._clauses = tuple(check_clause(clause) for clause in clauses)
        self._name = name

    @classmethod
    def from_clauses(cls, *clauses, name=None):
        return cls(clauses, name=name)

    def evaluate(self, assignment: ArrayLike) -> int:
        return evaluate(self, assignment)

    def polarity_complete(self) -> bool:
        """every variable in [1, n] appears at least once positive and once negated"""
        literals = {literal for clause in self._clauses for literal in clause}
        return len(literals) == 2 * self.n

    @cached_property
    def literal_arrays(self):
        """
        Padded (m, k) arrays describing the literals of each clause:
        0-based variable index, positive polarity and a mask of the real entries
        """
        m, k = self.m, self.k
        index = np.zeros((m, k), dtype=int)
        positive = np.zeros((m, k), dtype=bool)
        valid = np.zeros((m, k), dtype=bool)
        for j, clause in enumerate(self._clauses):
            for i, literal in enumerate(clause):
                index[j, i] = abs(literal) - 1
                positive[j, i] = literal > 0
                valid[j, i] = True
        for arr in (index, positive, valid):
            arr.setflags(write=False)
        return index, positive, valid

    def incidence(self, n: int = None):
        """
        (m, n) 0/1 matrices of positive and negated occurrences of every variable
        """
        if n is None:
            n = self.n
        if self.n > n:
            raise IndexError(f"Formula references x{self.n} but only {n} variables are available")
        pos = np.zeros((self.m, n))
        neg = np.zeros((self.m, n))
        for j, clause in enumerate(self._clauses):
            for literal in clause:
                if literal > 0:
                    pos[j, literal - 1] = 1
                else:
                    neg[j, -literal - 1] = 1
        return pos, neg

    def __iter__(self):
        return iter(self._clauses)

    def __len__(self):
        return len(self._clauses)

    def __getitem__(self, index):
        return self._clauses[index]

    def __eq__(self, other):
        if not isinstance(other, Formula):
            return NotImplemented
        return self._clauses == other._clauses

    def __hash__(self):
        return hash(self._clauses)

    def __repr__(self):
        return f"Formula(n={self.n}, m={self.m}, k={self.k})"

    def __str__(self):
        def literal_str(literal):
            return f"x{literal}" if literal > 0 else f"!x{-literal}"
        return " ^ ".join("(" + " v ".join(map(literal_str, clause)) + ")" for clause in self._clauses)


def evaluate(formula: Formula, assignment: ArrayLike) -> int:
    """
    Count the clauses of ``formula`` satisfied by ``assignment``.

    A clause is satisfied as soon as one of its literals is true. An assignment
    that is too short for the formula is a contract violation and raises
    ``IndexError``.
    """
    if len(assignment) < formula.n:
        raise IndexError(f"Assignment has {len(assignment)} variables, formula references x{formula.n}")
    satisfied = 0
    for clause in formula:
        for literal in clause:
            if bool(assignment[abs(literal) - 1]) == (literal > 0):
                satisfied += 1
                break
    return satisfied


def generate_formula(
    n: int,
    m: int,
    k: int = None,
    *,
    k_min: int = None,
    k_max: int = None,
    seed: int = DEFAULT_SEED,
    max_attempts: int = MAX_GENERATION_ATTEMPTS,
) -> Formula:
    """
    Generate a random (n, m) formula with ``k`` literals per clause, or with
    clause lengths drawn uniformly from [k_min, k_max].

    Every variable appears at least once positive and once negated and no
    clause repeats a variable. The result only depends on the arguments.
    """
    if k is not None:
        if k_min is not None or k_max is not None:
            raise ConfigurationError("Pass either k or k_min/k_max, not both")
        k_min = k_max = k
    if k_min is None or k_max is None:
        raise ConfigurationError("Clause length k (or k_min and k_max) is required")
    if n < 1 or m < 1:
        raise ConfigurationError(f"Need at least one variable and one clause, got n={n}, m={m}")
    if k_min < 1:
        raise ConfigurationError(f"Clauses need at least one literal, got k_min={k_min}")
    if k_max > n:
        raise ConfigurationError(f"Can't generate a valid formula for k_max > n ({k_max} > {n})")
    if k_max < k_min:
        raise ConfigurationError(f"Can't generate a valid formula for k_max < k_min ({k_max} < {k_min})")

    rng = np.random.default_rng(seed)
    lengths = rng.integers(k_min, k_max + 1, size=m)

    for _ in range(max_attempts):
        clauses = []
        for length in lengths:
            variables = rng.choice(n, size=length, replace=False) + 1
            signs = np.where(rng.random(length) < 0.5, 1, -1)
            clauses.append(tuple(int(v) for v in variables * signs))
        formula = Formula(clauses)
        if formula.n == n and formula.polarity_complete():
            return formula

    raise GenerationError(
        f"Failed to generate a valid formula for n: {n}, m: {m}, k_min: {k_min}, k_max: {k_max} "
        f"after {max_attempts} attempts"
    )


def solvable_formula() -> Formula:
    """n = 5, m = 21, k = 3, satisfiable"""
    return Formula([
        (1, 2, 3), (1, 2, 4), (1, 2, 5), (1, 3, 5), (1, 4, 5), (2, 3, 4), (3, 4, 5),
        (-1, 2, 3), (1, -2, 4), (1, 2, -5), (-1, 3, 5), (1, -4, 5), (2, 3, -4), (-3, 4, 5),
        (1, -2, 3), (1, 2, -4), (-1, 2, 5), (1, -3, 5), (1, 4, -5), (-2, 3, 4), (3, -4, 5),
    ], name='solvable')


def unsolvable_formula() -> Formula:
    """(x1 v x2) ^ (x1 v !x2) ^ (!x1 v x2) ^ (!x1 v !x2)"""
    return Formula([(1, 2), (1, -2), (-1, 2), (-1, -2)], name='unsolvable')
