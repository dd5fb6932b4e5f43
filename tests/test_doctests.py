import doctest

import pytest

import pocketcube.cube
import pocketcube.enums
import pocketcube.utils

@pytest.mark.parametrize("module", [pocketcube.cube, pocketcube.enums, pocketcube.utils])
def test_doctests(module):
    results = doctest.testmod(module)
    assert results.failed == 0
