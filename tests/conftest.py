import pytest

from csspectrum import default_registry


@pytest.fixture
def registry():
    """Isolated registry so registrations never leak between tests."""
    return default_registry.copy()
