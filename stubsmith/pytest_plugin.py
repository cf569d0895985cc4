"""
pytest integration.

Load it from a conftest::

    pytest_plugins = ["stubsmith.pytest_plugin"]

Fixtures:
    mock_engine -- a bare MockEngine
    make_mock   -- factory for Mock hosts, ``make_mock(spec=Repository)``

Both verify expectations at teardown unless STUBSMITH_AUTO_CHECK is off.
An unmet expectation raises UnmetExpectation during fixture teardown, so
pytest reports it as an error in the teardown of that test, not as a
failure of the test body.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator

import pytest

from stubsmith.config import MockerConfig
from stubsmith.engine import MockEngine
from stubsmith.host import Mock

LOG = logging.getLogger("stubsmith.pytest_plugin")


@pytest.fixture
def stubsmith_config() -> MockerConfig:
    """Configuration shared by the other fixtures; override to customise."""
    return MockerConfig.from_env()


@pytest.fixture
def mock_engine(stubsmith_config: MockerConfig) -> Iterator[MockEngine]:
    engine = MockEngine(stubsmith_config)
    yield engine
    if stubsmith_config.auto_check:
        engine.check_expectations()


@pytest.fixture
def make_mock(stubsmith_config: MockerConfig) -> Iterator[Callable[..., Mock]]:
    created: list[Mock] = []

    def factory(spec: type | None = None, config: MockerConfig | None = None) -> Mock:
        mock = Mock(spec=spec, config=config or stubsmith_config)
        created.append(mock)
        return mock

    yield factory

    if stubsmith_config.auto_check:
        LOG.debug("Verifying %d mocks at teardown", len(created))
        for mock in created:
            mock.check_expectations()
