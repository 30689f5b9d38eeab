import pytest

import library as library_module
from library import Library


@pytest.fixture
def lib():
    # Each test gets its own registry
    return Library()


@pytest.fixture(autouse=True)
def fresh_shared_library():
    # The CLI and API work on the process-wide instance; never let it leak between tests
    library_module.reset_library()
    yield
    library_module.reset_library()
