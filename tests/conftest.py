"""Pytest configuration for symkit tests.

Shared fixtures for all test suites.
"""

import logging
import pathlib
import sys

import pytest

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Add project root to path for all tests to ensure imports work
PROJECT_ROOT = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))
sys.path.insert(0, str(PROJECT_ROOT / "tests"))

from symkit.entity import Variable  # noqa: E402
from symkit.numbers import get_precision, set_precision  # noqa: E402
from symkit.rewrite.simplifier import set_default_simplifier  # noqa: E402


@pytest.fixture
def x() -> Variable:
    return Variable("x")


@pytest.fixture
def y() -> Variable:
    return Variable("y")


@pytest.fixture(autouse=True)
def _isolate_kernel_state():
    """Restore Real precision and the default simplifier after every test."""
    precision = get_precision()
    yield
    set_precision(precision)
    set_default_simplifier(None)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: z3 proofs over the whole rule library")
    config.addinivalue_line("markers", "integration: mark test as integration test")
