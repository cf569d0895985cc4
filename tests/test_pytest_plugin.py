"""Tests for pytest_plugin: fixtures with teardown verification."""

import pytest

from stubsmith.config import MockerConfig
from stubsmith.engine import MockEngine
from stubsmith.host import Mock


class Mailer:
    def send(self, to, body):
        raise NotImplementedError


class TestFixtures:
    def test_mock_engine_fixture(self, mock_engine):
        assert isinstance(mock_engine, MockEngine)
        mock_engine.method("f").returns(1).is_expected()
        assert mock_engine.call("f") == 1

    def test_make_mock_factory(self, make_mock):
        mailer = make_mock(spec=Mailer)
        assert isinstance(mailer, Mock)
        mailer.method("send").with_args("a@b.c", "hi").returns(True).is_expected()
        assert mailer.send("a@b.c", "hi") is True

    def test_make_mock_distinct_instances(self, make_mock):
        assert make_mock() is not make_mock()

    def test_make_mock_explicit_config(self, make_mock):
        mock = make_mock(config=MockerConfig(strict_returns=False))
        assert mock.engine.config.strict_returns is False


class TestAutoCheckDisabled:
    @pytest.fixture
    def stubsmith_config(self):
        return MockerConfig(auto_check=False)

    def test_unmet_expectations_not_checked_at_teardown(self, make_mock, mock_engine):
        make_mock().method("never").returns(None).is_expected()
        mock_engine.method("never").is_expected()


class TestTeardownReporting:
    def test_unmet_expectation_is_teardown_error(self, pytester, monkeypatch):
        monkeypatch.delenv("STUBSMITH_AUTO_CHECK", raising=False)
        pytester.makeconftest('pytest_plugins = ["stubsmith.pytest_plugin"]')
        pytester.makepyfile(
            """
            def test_never_calls(mock_engine):
                mock_engine.method("fetch").is_expected()
            """
        )
        result = pytester.runpytest()
        result.assert_outcomes(passed=1, errors=1)
        result.stdout.fnmatch_lines(["*ERROR at teardown of test_never_calls*", "*UnmetExpectation*"])

    def test_met_expectation_passes_cleanly(self, pytester, monkeypatch):
        monkeypatch.delenv("STUBSMITH_AUTO_CHECK", raising=False)
        pytester.makeconftest('pytest_plugins = ["stubsmith.pytest_plugin"]')
        pytester.makepyfile(
            """
            def test_calls(make_mock):
                repo = make_mock()
                repo.method("fetch").with_args(1).returns("one").is_expected()
                assert repo.fetch(1) == "one"
            """
        )
        pytester.runpytest().assert_outcomes(passed=1)
