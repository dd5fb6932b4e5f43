"""
Pytest configuration for the pocketcube tests.

The full state table takes a few seconds to build, so it is built once per
session and shared. Tests marked slow only run with --runslow.
"""

import random

import pytest

from pocketcube.builder import build_table

def pytest_addoption(parser):
    parser.addoption(
        "--runslow",
        action="store_true",
        default=False,
        help="also run slow tests (the one-cube-at-a-time table builder)"
    )

def pytest_configure(config):
    config.addinivalue_line("markers", "slow: needs --runslow to run")

def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)

@pytest.fixture(scope="session")
def built_table():
    """ (table, level sizes) from a single build """
    level_sizes = []
    table = build_table(level_sizes=level_sizes)
    return table, level_sizes

@pytest.fixture(scope="session")
def table(built_table):
    return built_table[0]

@pytest.fixture(scope="session")
def sample_cubes(table):
    """ Every 997th cube in the table, a spread of reachable cubes at all depths """
    return [int(c) for c in table.records["cube"][::997]]

@pytest.fixture
def rng():
    return random.Random(2016)
