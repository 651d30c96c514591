import itertools

import numpy as np
import pytest

from rmaxsat.problems.cnf import (
    ConfigurationError,
    Formula,
    GenerationError,
    MalformedFormulaError,
    evaluate,
    generate_formula,
)


def test_evaluate_counts_satisfied_clauses(unsolvable):
    # exactly one clause of the four is false under every assignment
    for assignment in itertools.product([False, True], repeat=2):
        assert evaluate(unsolvable, assignment) == 3


def test_evaluate_polarity():
    formula = Formula([(1,), (-1,), (2, -3)])
    assert evaluate(formula, [True, False, True]) == 1
    assert evaluate(formula, [False, False, True]) == 1
    assert evaluate(formula, [True, True, True]) == 2
    assert evaluate(formula, np.array([False, False, False])) == 2


def test_evaluate_invariant_under_permutation(solvable):
    rng = np.random.default_rng(7)
    for _ in range(20):
        assignment = rng.random(solvable.n) < 0.5
        expected = evaluate(solvable, assignment)

        clauses = list(solvable.clauses)
        rng.shuffle(clauses)
        shuffled = Formula([tuple(rng.permutation(clause)) for clause in clauses])
        assert evaluate(shuffled, assignment) == expected


def test_evaluate_short_assignment_raises(solvable):
    with pytest.raises(IndexError):
        evaluate(solvable, [True] * (solvable.n - 1))


def test_solvable_formula_is_satisfiable(solvable):
    assert (solvable.n, solvable.m, solvable.k) == (5, 21, 3)
    assert any(evaluate(solvable, a) == 21 for a in itertools.product([False, True], repeat=5))


@pytest.mark.parametrize("clause", [(1, 1), (1, -1), (2, 0), ()])
def test_malformed_clause_rejected(clause):
    with pytest.raises(MalformedFormulaError):
        Formula([(1, 2), clause])


def test_formula_derived_attributes():
    formula = Formula([(1, -4), (2, 3, -1)])
    assert formula.n == 4
    assert formula.m == 2
    assert formula.k == 3
    assert formula.k_min == 2
    assert not formula.polarity_complete()


def test_fingerprint_depends_on_clause_content():
    a = Formula([(1, 2), (3,)])
    b = Formula([[1, 2], [3]])
    assert a.fingerprint == b.fingerprint
    assert a == b and hash(a) == hash(b)
    assert Formula([(1,), (2, 3)]).fingerprint != a.fingerprint
    assert Formula([(3,), (1, 2)]).fingerprint != a.fingerprint


def test_generation_is_deterministic():
    first = generate_formula(5, 21, 3, seed=42)
    second = generate_formula(5, 21, 3, seed=42)
    assert first.clauses == second.clauses
    assert str(first).encode() == str(second).encode()


def test_generation_guarantees():
    formula = generate_formula(20, 300, k_min=2, k_max=4, seed=3)
    assert formula.m == 300
    assert formula.n == 20
    assert formula.polarity_complete()
    assert 2 <= formula.k_min and formula.k <= 4
    for clause in formula:
        assert len({abs(literal) for literal in clause}) == len(clause)


@pytest.mark.parametrize("kwargs", [
    dict(n=3, m=10, k=4),
    dict(n=5, m=10, k_min=3, k_max=2),
    dict(n=5, m=10),
    dict(n=5, m=10, k=2, k_min=2),
])
def test_generation_configuration_errors(kwargs):
    with pytest.raises(ConfigurationError):
        generate_formula(**kwargs)


def test_generation_exhaustion():
    # two clauses of one literal can never cover both polarities of three variables
    with pytest.raises(GenerationError):
        generate_formula(3, 2, 1, max_attempts=10)
