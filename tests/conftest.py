import random

import pytest

from shared.config import ToolkitConfig


@pytest.fixture
def offline_config():
    config = ToolkitConfig()
    config.breach.live_lookup = False
    config.status.live_check = False
    return config


@pytest.fixture
def rng():
    return random.Random(1234)
