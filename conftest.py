import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def clear_throttle_history():
    """Throttle counters live in the cache; start every test with none."""
    cache.clear()
    yield
    cache.clear()
