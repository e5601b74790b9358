"""
Shared fixtures for encoder unit tests.
"""

from __future__ import annotations

import pytest

from client_doubles import FixedMaskRand, make_deps, make_params
from rappor.client import Encoder, Params


@pytest.fixture
def params() -> Params:
    return make_params()


@pytest.fixture
def fixed_rand() -> FixedMaskRand:
    return FixedMaskRand()


@pytest.fixture
def encoder(params: Params, fixed_rand: FixedMaskRand) -> Encoder:
    return Encoder("metric-name", params, make_deps(irr_rand=fixed_rand))
