import pytest

import fake_runtime


@pytest.fixture(autouse=True)
def clean_runtime():
    fake_runtime.reset()
    yield
    fake_runtime.reset()
