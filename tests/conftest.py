"""
Shared fixtures for field and model tests.
"""

import pytest

from sample_models import Circle, Wedge


@pytest.fixture
def circle() -> Circle:
    return Circle()


@pytest.fixture
def wedge() -> Wedge:
    return Wedge()
