"""Shared fixtures for the test suite."""

import matplotlib

matplotlib.use("Agg")

import pytest

from sudoku_stepper.core.grid import Grid


# A classic puzzle that naked and hidden singles solve completely
CLASSIC_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

CLASSIC_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


@pytest.fixture
def classic_grid():
    return Grid.from_string(CLASSIC_PUZZLE)


@pytest.fixture
def contradiction_grid():
    """Row 0 already holds a 5 at (8, 0) while (0, 0) can only be 5."""
    grid = Grid()
    grid.set_cell(8, 0, 5)
    for digit in range(1, 10):
        if digit != 5:
            grid.eliminate(0, 0, digit)
    return grid


# No two orthogonal neighbours of this solution hold consecutive digits
NONCONSECUTIVE_SOLUTION = (
    "162738495"
    "738495162"
    "495162738"
    "627384951"
    "384951627"
    "951627384"
    "273849516"
    "849516273"
    "516273849"
)

NONCONSECUTIVE_PUZZLE = (
    "100700400"
    "008005002"
    "090060030"
    "600300900"
    "004001007"
    "050020080"
    "200800500"
    "009006003"
    "010070040"
)
