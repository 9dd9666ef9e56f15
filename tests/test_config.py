import dataclasses

import pytest

from mcmcscan.core.config import ScanConfig
from mcmcscan.core.errors import InvalidArgumentError


def test_config_defaults():
    config = ScanConfig(max_steps=10000, burn_fraction=0.1, num_chains=10)
    assert config.buffer_size == 25
    assert config.print_iteration == 1000
    assert config.seed is None
    assert config.scale == 2.381

def test_config_is_frozen():
    config = ScanConfig(max_steps=10, burn_fraction=0.1, num_chains=3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.max_steps = 20

def test_config_accepts_burn_fraction_bounds():
    ScanConfig(max_steps=10, burn_fraction=0.0, num_chains=3)
    ScanConfig(max_steps=10, burn_fraction=1.0, num_chains=3)

@pytest.mark.parametrize(
    "overrides",
    [
        {"max_steps": 0},
        {"burn_fraction": -0.1},
        {"burn_fraction": 1.5},
        {"num_chains": 0},
        {"buffer_size": 0},
        {"print_iteration": 0},
        {"scale": 0.0},
    ],
)
def test_config_rejects_bad_values(overrides):
    kwargs = {"max_steps": 100, "burn_fraction": 0.1, "num_chains": 4}
    kwargs.update(overrides)
    with pytest.raises(InvalidArgumentError):
        ScanConfig(**kwargs)
