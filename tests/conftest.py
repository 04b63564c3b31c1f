"""Test configuration for packlab."""

import pytest

from packlab.gamut_table import get_gamut_table


@pytest.fixture(scope="session", autouse=True)
def gamut_table():
    """Load the shared gamut table once, before any test starts threads."""
    return get_gamut_table()
