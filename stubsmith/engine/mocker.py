"""
The mock engine: registry of stubbed methods for one test double.

Usage::

    engine = MockEngine()
    (engine
        .method("get_primes")
            .with_args(4).returns([2, 3, 5, 7]).is_expected()
        .method("get_fibonacci")
            .with_args(6).returns([1, 1, 2, 3, 5, 8]).is_expected()
            .with_args(3).returns([1, 1, 2]))

    engine.call("get_primes", (4,))   # -> [2, 3, 5, 7]
    engine.check_expectations()       # raises UnmetExpectation for get_fibonacci(6)

Expectations are only verified when check_expectations() (or one of the
assert_* methods) is called; unstubbed and unexpected calls fail at once.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from stubsmith.config import MockerConfig
from stubsmith.engine.binding import ArgumentBinding
from stubsmith.engine.keys import RecordedCall
from stubsmith.engine.stub import MethodStub
from stubsmith.errors import UnstubbedMethod
from stubsmith.models import BindingReport, MethodReport, MockReport

LOG = logging.getLogger("stubsmith.engine.mocker")


class MockEngine:
    """
    Owns every MethodStub of one test double.

    Stubs are created lazily on first reference and kept in declaration
    order, so verification walks them first-declared-first.
    """

    def __init__(self, config: MockerConfig | None = None) -> None:
        self.config = config or MockerConfig.from_env()
        self.stubs: dict[str, MethodStub] = {}

    def method(self, name: str) -> MethodStub:
        """Get or create the stub for ``name``."""
        stub = self.stubs.get(name)
        if stub is None:
            stub = MethodStub(name, engine=self, config=self.config)
            self.stubs[name] = stub
            LOG.debug("Stubbed method %s()", name)
        return stub

    def _require(self, name: str) -> MethodStub:
        stub = self.stubs.get(name)
        if stub is None:
            raise UnstubbedMethod(name)
        return stub

    def call(self, name: str, args: Sequence[Any] = (), kwargs: Mapping[str, Any] | None = None) -> Any:
        """
        Route a call made on the host object.

        Raises:
            UnstubbedMethod: ``name`` was never declared
            UnexpectedCall: The arguments match no binding and there is no default
        """
        return self._require(name).call(args, kwargs)

    def assert_method_called(
        self,
        name: str,
        args: Sequence[Any] | None = None,
        kwargs: Mapping[str, Any] | None = None,
    ) -> "MockEngine":
        """
        Assert a method was called, optionally with a specific argument list.

        If ``args`` is omitted the assertion passes whatever the arguments were.
        """
        self._require(name).assert_called(args, kwargs)
        return self

    def check_expectations(self) -> "MockEngine":
        """
        Check that every declared expectation has been met.

        Raises:
            UnmetExpectation: For the first unmet expectation, in declaration order
        """
        for stub in self.stubs.values():
            stub.check_expectations()
        LOG.info("Expectations met for %d stubbed methods", len(self.stubs))
        return self

    def unmet_expectations(self) -> list[str]:
        unmet: list[str] = []
        for stub in self.stubs.values():
            unmet.extend(stub.unmet_expectations())
        return unmet

    def calls(self, name: str) -> list[RecordedCall]:
        return self._require(name).calls

    def report(self) -> MockReport:
        """Snapshot every stub and binding for display or JSON export."""
        methods = []
        for stub in self.stubs.values():
            bindings = list(stub.bindings.values())
            if stub.default_binding is not None:
                bindings.insert(0, stub.default_binding)
            methods.append(
                MethodReport(
                    methodName=stub.method_name,
                    callCount=stub.call_count,
                    expected=stub.expected,
                    satisfied=stub.is_satisfied,
                    bindings=[_binding_report(b) for b in bindings],
                )
            )
        unmet = self.unmet_expectations()
        return MockReport(methods=methods, satisfied=not unmet, unmet=unmet)

    def __repr__(self) -> str:
        return f"MockEngine(methods={list(self.stubs)})"


def _binding_report(binding: ArgumentBinding) -> BindingReport:
    key = binding.key
    return BindingReport(
        arguments=binding.describe(),
        digest=key.digest if key is not None else "default",
        isDefault=binding.is_default,
        callCount=binding.call_count,
        expected=binding.expected,
        satisfied=binding.is_satisfied,
        queuedReturns=len(binding.return_queue),
    )
