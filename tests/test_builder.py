import numpy as np
import pytest

import pocketcube.builder
from pocketcube.builder import LEVEL_SIZES, build_table, build_table_sequential
from pocketcube.cube import GODS_NUMBER, NUMBER_OF_STATES
from pocketcube.error import QueueOverflowException

def test_level_sizes(built_table):
    _, level_sizes = built_table
    assert level_sizes == LEVEL_SIZES
    assert sum(level_sizes) == NUMBER_OF_STATES
    assert len(level_sizes) == GODS_NUMBER + 1

def test_build_is_deterministic(table, capsys):
    again = build_table(debug=True)
    assert again.first == table.first
    assert again.last == table.last
    assert again == table

    output = capsys.readouterr().out
    assert "Depth 1: 6 cubes" in output
    assert f"Depth {GODS_NUMBER}: 276 cubes" in output
    assert "Built a table of 3674159 records" in output

@pytest.mark.parametrize("builder", [build_table, build_table_sequential])
def test_overflow_aborts_the_build(builder, monkeypatch):
    monkeypatch.setattr(pocketcube.builder, "NUMBER_OF_STATES", 100)
    with pytest.raises(QueueOverflowException):
        builder()

@pytest.mark.slow
def test_sequential_build_matches(table):
    level_sizes = []
    sequential = build_table_sequential(level_sizes=level_sizes)
    assert level_sizes == LEVEL_SIZES
    assert np.array_equal(sequential.records, table.records)
