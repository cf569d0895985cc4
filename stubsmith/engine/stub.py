"""
Method stubs: one stubbed method name and its argument bindings.

Routing policy for an incoming call:
    1. the keyed binding whose argument pattern equals the call's arguments
    2. the default binding, when ``returns()`` was declared on the stub itself
    3. otherwise UnexpectedCall, raised immediately
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from stubsmith.config import MockerConfig
from stubsmith.engine.binding import ArgumentBinding
from stubsmith.engine.keys import ArgumentKey, RecordedCall, argument_key, describe_arguments, snapshot_arguments
from stubsmith.errors import UnexpectedCall, UnmetExpectation, UnstubbedMethod

if TYPE_CHECKING:
    from stubsmith.engine.mocker import MockEngine

LOG = logging.getLogger("stubsmith.engine.stub")


class MethodStub:
    """
    A single stubbed method.

    Owns the keyed bindings (one per distinct argument list, in declaration
    order), an optional default binding and the log of every call routed
    to this method.
    """

    def __init__(
        self,
        method_name: str,
        engine: "MockEngine | None" = None,
        config: MockerConfig | None = None,
    ) -> None:
        self._method_name = method_name
        self._engine = engine
        self.config = config or MockerConfig()
        self.bindings: dict[ArgumentKey, ArgumentBinding] = {}
        self.default_binding: ArgumentBinding | None = None
        self.call_log: list[RecordedCall] = []
        self.expected = False

    @property
    def method_name(self) -> str:
        return self._method_name

    @property
    def call_count(self) -> int:
        return len(self.call_log)

    @property
    def calls(self) -> list[RecordedCall]:
        return list(self.call_log)

    @property
    def is_satisfied(self) -> bool:
        return self.unmet_expectations() == []

    # -- declaration --

    def with_args(self, *args: Any, **kwargs: Any) -> ArgumentBinding:
        """
        Declare (or re-enter) the binding for one argument list.

        Structurally equal argument lists share a single binding, so a
        second with_args() for the same arguments continues the existing
        declaration.
        """
        key = argument_key(args, kwargs)
        binding = self.bindings.get(key)
        if binding is None:
            binding = ArgumentBinding(self._method_name, args, kwargs, stub=self, config=self.config)
            self.bindings[key] = binding
            LOG.debug("Declared %s%s [%s]", self._method_name, binding.describe(), key.digest)
        return binding

    def with_no_args(self) -> ArgumentBinding:
        return self.with_args()

    def returns(self, value: Any) -> ArgumentBinding:
        """Set the return value for a call with any arguments."""
        if self.default_binding is None:
            self.default_binding = ArgumentBinding(self._method_name, None, stub=self, config=self.config)
            LOG.debug("Declared default binding for %s()", self._method_name)
        return self.default_binding.returns(value)

    def is_expected(self) -> "MethodStub":
        """Require this method to be called, with any arguments."""
        self.expected = True
        return self

    def method(self, name: str) -> "MethodStub":
        """Stub another method on the owning engine."""
        if self._engine is None:
            raise RuntimeError(f"Stub {self._method_name}() is not attached to an engine")
        return self._engine.method(name)

    # -- runtime --

    def call(self, args: Sequence[Any] = (), kwargs: Mapping[str, Any] | None = None) -> Any:
        """
        Handle a call routed to this method.

        Raises:
            UnexpectedCall: No binding matches and no default binding exists
        """
        key = argument_key(args, kwargs)
        record = RecordedCall(*snapshot_arguments(args, kwargs), key=key)
        self.call_log.append(record)

        binding = self.bindings.get(key)
        if binding is not None:
            LOG.debug("Call %s%s matched [%s]", self._method_name, binding.describe(), key.digest)
            return binding.call()
        if self.default_binding is not None:
            LOG.debug("Call %s() [%s] served by default binding", self._method_name, key.digest)
            return self.default_binding.call()

        raise UnexpectedCall(
            self._method_name,
            actual=record.describe(width=self.config.describe_width),
            expected=[b.describe() for b in self.bindings.values()],
        )

    def get_call_log(self) -> list[RecordedCall]:
        return self.calls

    # -- verification --

    def assert_called(
        self,
        args: Sequence[Any] | None = None,
        kwargs: Mapping[str, Any] | None = None,
    ) -> "MethodStub":
        """
        Assert this method was called.

        Args:
            args: When None, any call satisfies the assertion. Otherwise the
                argument list (``()`` for no arguments) whose declared binding
                must have been called.
            kwargs: Keyword arguments of that argument list

        Raises:
            UnmetExpectation: No matching call was made
            UnstubbedMethod: ``args`` names a pattern never declared
        """
        if args is None and kwargs is None:
            if not self.call_log:
                raise UnmetExpectation(
                    self._method_name,
                    f"A call to {self._method_name}() was expected but was never made.",
                )
            return self

        key = argument_key(args or (), kwargs)
        binding = self.bindings.get(key)
        if binding is None:
            raise UnstubbedMethod(
                self._method_name,
                f"No arguments {describe_arguments(args or (), kwargs, width=self.config.describe_width)} were declared.",
            )
        binding.assert_called()
        return self

    def check_expectations(self) -> "MethodStub":
        """
        Check the stub-level expectation, then every binding's.

        Fails on the first unmet expectation, in declaration order.
        """
        if self.expected:
            self.assert_called()
        if self.default_binding is not None:
            self.default_binding.check_expectations()
        for binding in self.bindings.values():
            binding.check_expectations()
        return self

    def unmet_expectations(self) -> list[str]:
        """Describe every unmet expectation without raising."""
        unmet: list[str] = []
        if self.expected and not self.call_log:
            unmet.append(f"{self._method_name}(...)")
        bindings = list(self.bindings.values())
        if self.default_binding is not None:
            bindings.insert(0, self.default_binding)
        for binding in bindings:
            if not binding.is_satisfied:
                unmet.append(f"{self._method_name}{binding.describe()}")
        return unmet

    def __repr__(self) -> str:
        return f"MethodStub({self._method_name!r}, bindings={len(self.bindings)}, calls={self.call_count})"
