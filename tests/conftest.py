"""
Shared test fixtures.

The pytest plugin fixtures (mock_engine, make_mock, stubsmith_config) are
imported here so every test module can request them.
"""

from __future__ import annotations

import pytest

from stubsmith.config import MockerConfig
from stubsmith.engine import MockEngine
from stubsmith.host import Mock
from stubsmith.pytest_plugin import make_mock, mock_engine, stubsmith_config  # noqa: F401


@pytest.fixture
def config() -> MockerConfig:
    """Defaults, independent of the STUBSMITH_* environment."""
    return MockerConfig()


@pytest.fixture
def engine(config) -> MockEngine:
    return MockEngine(config)


@pytest.fixture
def mock(config) -> Mock:
    return Mock(config=config)


@pytest.fixture
def fib_engine(engine) -> MockEngine:
    """Engine with fibonacci and primes stubbed for arguments 1..4."""
    (
        engine.method("fibonacci")
        .with_args(1).returns([1])
        .with_args(2).returns([1, 1])
        .with_args(3).returns([1, 1, 2])
        .with_args(4).returns([1, 1, 2, 3])
        .method("primes")
        .with_args(1).returns([2])
        .with_args(2).returns([2, 3])
        .with_args(3).returns([2, 3, 5])
        .with_args(4).returns([2, 3, 5, 7])
    )
    return engine
