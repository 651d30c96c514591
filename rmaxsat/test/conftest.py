import pytest

from rmaxsat.problems.cnf import solvable_formula, unsolvable_formula
from rmaxsat.solver.relaxation import RelaxationGateway
from rmaxsat.test.stubs import CountingSolver


@pytest.fixture
def solvable():
    return solvable_formula()


@pytest.fixture
def unsolvable():
    return unsolvable_formula()


@pytest.fixture
def counting_solver():
    return CountingSolver([0.9, 0.1, 0.5, 0.25, 0.75])


@pytest.fixture
def stub_gateway(counting_solver):
    return RelaxationGateway(solver=counting_solver)
