import numpy as np
import pytest

from rmaxsat.problems.cnf import ConfigurationError, Formula
from rmaxsat.solver.combinators import algorithm_c_all, algorithm_c_pa
from rmaxsat.solver.params import Bias, StrategyParameters
from rmaxsat.solver.relaxation import RelaxationGateway
from rmaxsat.solver.rounding import (
    derandomised_rounding,
    expected_satisfied,
    probabilistic_randomised,
    randomised_rounding,
)
from rmaxsat.solver.strategies import Strategy

from rmaxsat.test.stubs import CountingSolver


FIVE_VARS = Formula([(1, 2, 3), (-1, 4, 5), (2, -3, -5), (-2, -4), (3, 5)])


def solver_gateway(solver):
    return RelaxationGateway(solver=solver)


def params(formula, seed, gateway=None, **kwargs):
    return StrategyParameters(formula, formula.n, seed, gateway=gateway, **kwargs)


def test_algorithm_a_is_deterministic(solvable):
    for seed in (0, 1, 42, 2**62):
        first = probabilistic_randomised(params(solvable, seed))
        second = probabilistic_randomised(params(solvable, seed))
        assert first == second
        assert np.array_equal(first.assignment, second.assignment)
        assert first.satisfied == solvable.evaluate(first.assignment)


def test_algorithm_a_is_fair():
    formula = Formula([(1, -2), (2, 3)])
    draws = np.array([probabilistic_randomised(params(formula, seed)).assignment for seed in range(4000)])
    assert draws.shape == (4000, 3)
    assert np.allclose(draws.mean(axis=0), 0.5, atol=0.04)


def test_algorithm_b_frequency_matches_relaxation(stub_gateway, counting_solver):
    trials = 10_000
    counts = np.zeros(FIVE_VARS.n)
    for seed in range(trials):
        counts += randomised_rounding(params(FIVE_VARS, seed, stub_gateway)).assignment
    # 4 standard deviations of a Bernoulli(1/2) mean over 10000 trials
    assert np.allclose(counts / trials, counting_solver.x, atol=0.02)
    assert counting_solver.calls == 1


def test_algorithm_b_shrink_bias(stub_gateway, counting_solver):
    trials = 10_000
    counts = np.zeros(FIVE_VARS.n)
    for seed in range(trials):
        counts += randomised_rounding(params(FIVE_VARS, seed, stub_gateway, bias=Bias.SHRINK)).assignment
    assert np.allclose(counts / trials, 0.5 * counting_solver.x + 0.25, atol=0.02)


def test_algorithm_b_integral_relaxation_is_exact():
    solver = CountingSolver([1.0, 0.0, 1.0])
    gateway = solver_gateway(solver)
    formula = Formula([(1, 2), (-2, 3), (-1, -2)])
    for seed in range(50):
        result = randomised_rounding(params(formula, seed, gateway))
        assert result.assignment.tolist() == [True, False, True]
        assert result.satisfied == 3


def test_bias_functions():
    assert Bias.IDENTITY(0.3) == 0.3
    assert Bias.SHRINK(0.0) == 0.25
    assert Bias.SHRINK(1.0) == 0.75
    assert np.allclose(Bias.SHRINK(np.array([0.5, 0.2])), [0.5, 0.35])
    assert Bias.parse('shrink') is Bias.SHRINK
    with pytest.raises(ConfigurationError):
        Bias.parse('square')


def test_expected_satisfied_matches_enumeration():
    formula = Formula([(1, -2), (2, 3), (-1, -3)])
    p = np.array([0.2, 0.7, 0.4])
    # P(clause false): (0.8 * 0.7), (0.3 * 0.6), (0.2 * 0.4)
    assert expected_satisfied(formula, p) == pytest.approx(3 - 0.56 - 0.18 - 0.08)


def test_derandomised_rounding_beats_expectation(stub_gateway, counting_solver):
    result = derandomised_rounding(params(FIVE_VARS, 0, stub_gateway))
    assert result.satisfied >= expected_satisfied(FIVE_VARS, counting_solver.x)
    assert derandomised_rounding(params(FIVE_VARS, 99, stub_gateway)) == result


def test_c_all_picks_the_better_result(stub_gateway):
    for seed in range(200):
        p = params(FIVE_VARS, seed, stub_gateway)
        result_a = probabilistic_randomised(p)
        result_b = randomised_rounding(p)
        result = algorithm_c_all(p)
        assert result.satisfied == max(result_a.satisfied, result_b.satisfied)
        if result_a.satisfied >= result_b.satisfied:
            assert result == result_a
        else:
            assert result == result_b


def test_c_pa_extremes(stub_gateway):
    for seed in range(200):
        assert algorithm_c_pa(params(FIVE_VARS, seed, stub_gateway, pa=1.0)) == \
            probabilistic_randomised(params(FIVE_VARS, seed, stub_gateway))
        assert algorithm_c_pa(params(FIVE_VARS, seed, stub_gateway, pa=0.0)) == \
            randomised_rounding(params(FIVE_VARS, seed, stub_gateway))


def test_c_pa_dispatch_rate():
    # B sets both variables true, A happens to do the same for a quarter of the seeds
    formula = Formula([(1, 2), (-1, -2)])
    gateway = solver_gateway(CountingSolver([1.0, 1.0]))
    runs_b = 0
    trials = 4000
    for seed in range(trials):
        result = algorithm_c_pa(params(formula, seed, gateway, pa=0.25))
        a = probabilistic_randomised(params(formula, seed, gateway))
        if result != a:
            runs_b += 1
    assert runs_b / trials == pytest.approx(0.75 * 0.75, abs=0.04)


@pytest.mark.parametrize("pa", [-0.1, 1.5])
def test_pa_out_of_range(pa):
    with pytest.raises(ConfigurationError):
        params(FIVE_VARS, 0, pa=pa)


def test_c_pa_without_pa(stub_gateway):
    with pytest.raises(ConfigurationError):
        algorithm_c_pa(params(FIVE_VARS, 0, stub_gateway))


def test_parameters_reject_small_n():
    with pytest.raises(IndexError):
        StrategyParameters(FIVE_VARS, 4, 0)


def test_strategy_dispatch_and_labels(stub_gateway):
    p = params(FIVE_VARS, 5, stub_gateway, pa=0.5)
    assert Strategy.A(p) == probabilistic_randomised(p)
    assert Strategy.C_ALL(p) == algorithm_c_all(p)
    assert Strategy('C_pa') is Strategy.C_PA
    assert Strategy.A.label() == "Algorithm A"
    assert Strategy.B.label(Bias.SHRINK) == "Algorithm B[pi(x)=1/2*x+1/4]"
    assert Strategy.C_ALL.label() == "Algorithm C_all[pi(x)=x]"
    assert Strategy.C_PA.label(pa=0.5) == "Algorithm C_1/2[pi(x)=x]"
    with pytest.raises(ConfigurationError):
        Strategy.parse('D')
