"""
Host objects: the stand-ins handed to code under test.

A host owns exactly one MockEngine and forwards every intercepted call to
it. Interception uses ``__getattr__``, so any public attribute that is not
defined on the host resolves to a forwarder::

    repo = Mock()
    repo.method("fetch").with_args(42).returns({"id": 42})
    repo.fetch(42)              # -> {"id": 42}
    repo.check_expectations()

Hosts with a fixed interface can instead declare each mockable method
explicitly with :func:`forward`, or pass ``spec=`` to restrict
interception to the public methods of an existing class.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from stubsmith.config import MockerConfig
from stubsmith.engine import MethodStub, MockEngine, RecordedCall

LOG = logging.getLogger("stubsmith.host")


def _public_methods(spec: type) -> frozenset[str]:
    return frozenset(
        name for name in dir(spec) if not name.startswith("_") and callable(getattr(spec, name, None))
    )


def forward(name: str) -> Callable[..., Any]:
    """
    Build an explicit forwarding method for a host class.

    Example::

        class FakeRepository(Mock):
            fetch = forward("fetch")
    """

    def forwarder(self: "Mock", *args: Any, **kwargs: Any) -> Any:
        return self._engine.call(name, args, kwargs)

    forwarder.__name__ = name
    forwarder.__qualname__ = name
    return forwarder


class Mock:
    """
    Test double forwarding calls to its own MockEngine.

    Names defined on the host itself (``method``, ``check_expectations``,
    ``assert_method_called``, ``calls``, ``engine``) are never forwarded;
    use :func:`forward` on a subclass to mock a method with one of those names.
    """

    def __init__(self, spec: type | None = None, config: MockerConfig | None = None) -> None:
        """
        Initialize the host.

        Args:
            spec: Optional class whose public methods are the only names
                intercepted; anything else raises AttributeError
            config: Engine configuration (defaults to the environment)
        """
        self._engine = MockEngine(config)
        self._spec = spec
        self._spec_methods = _public_methods(spec) if spec is not None else None
        if spec is not None:
            LOG.debug("Mocking %s (%d public methods)", spec.__name__, len(self._spec_methods))

    @property
    def engine(self) -> MockEngine:
        return self._engine

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        if self._spec_methods is not None and name not in self._spec_methods:
            raise AttributeError(f"{self._spec.__name__} has no method {name!r}")

        engine = self._engine

        def forwarder(*args: Any, **kwargs: Any) -> Any:
            return engine.call(name, args, kwargs)

        forwarder.__name__ = name
        return forwarder

    def method(self, name: str) -> MethodStub:
        if self._spec_methods is not None and name not in self._spec_methods:
            raise AttributeError(f"{self._spec.__name__} has no method {name!r}")
        return self._engine.method(name)

    def check_expectations(self) -> MockEngine:
        return self._engine.check_expectations()

    def assert_method_called(
        self,
        name: str,
        args: Sequence[Any] | None = None,
        kwargs: Mapping[str, Any] | None = None,
    ) -> MockEngine:
        return self._engine.assert_method_called(name, args, kwargs)

    def calls(self, name: str) -> list[RecordedCall]:
        return self._engine.calls(name)

    def __repr__(self) -> str:
        if self._spec is not None:
            return f"<Mock spec={self._spec.__name__} methods={list(self._engine.stubs)}>"
        return f"<Mock methods={list(self._engine.stubs)}>"
