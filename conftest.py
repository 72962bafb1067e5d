import random

import pytest


@pytest.fixture
def sample_sequence():
    return [1, 1, 2, 1, 3]


@pytest.fixture
def rng():
    return random.Random(20240611)
