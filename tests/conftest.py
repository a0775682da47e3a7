import random

import pytest

from petlib.ec import EcGroup

from zkintel.pedersen import PedersenParams, PedersenScheme


@pytest.fixture
def group():
    return EcGroup()


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture(scope="session")
def params():
    return PedersenParams()


@pytest.fixture(scope="session")
def pedersen(params):
    return PedersenScheme(params)
