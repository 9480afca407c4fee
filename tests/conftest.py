"""Pytest configuration and shared fixtures.

Most tests run against a small test curve over GF(2^127 - 1): the hash
consumes 127 bits per input instead of 252, which keeps tree tests fast.
STARK-curve tests load the table shipped with the package.
"""

from typing import Any, Dict

import pytest

from payout_merkle.primitives.pedersen_params import DEFAULT_PARAMS_PATH, PedersenParams

TEST_PRIME = 2**127 - 1
TEST_ALPHA = 1
TEST_BETA = 7
TEST_SEED = b"payout-merkle/test-curve"


@pytest.fixture(scope="session")
def small_params() -> PedersenParams:
    """Constant table on the 127-bit test curve, supporting 2 inputs."""
    return PedersenParams.derive(TEST_PRIME, TEST_ALPHA, TEST_BETA, TEST_SEED)


@pytest.fixture(scope="session")
def stark_params() -> PedersenParams:
    """Constant table on the STARK curve, as shipped in pedersen_params_v1.json."""
    return PedersenParams.from_json(DEFAULT_PARAMS_PATH)


@pytest.fixture
def small_params_dict(small_params: PedersenParams) -> Dict[str, Any]:
    """small_params in the StarkWare pedersen_params.json layout."""
    return {
        "FIELD_PRIME": small_params.prime,
        "ALPHA": int(small_params.alpha),
        "BETA": int(small_params.beta),
        "CONSTANT_POINTS": [
            [int(x), int(y)]
            for x, y in zip(small_params.constant_xs.tolist(), small_params.constant_ys.tolist())
        ],
    }
