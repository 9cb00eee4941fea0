import pytest

from arrayview.config import config


@pytest.fixture(autouse=True)
def reset_config():
    config.reset()
    yield
    config.reset()
