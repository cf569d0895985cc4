"""
Argument bindings: one argument pattern of one stubbed method.

A binding pairs an argument pattern (or "any arguments" for the default
binding) with its queue of return values and its call-tracking state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from stubsmith.config import MockerConfig
from stubsmith.engine.keys import ArgumentKey, argument_key, describe_arguments, snapshot_arguments
from stubsmith.errors import SequenceError, UnmetExpectation

if TYPE_CHECKING:
    from stubsmith.engine.stub import MethodStub

LOG = logging.getLogger("stubsmith.engine.binding")

DEFAULT_DESCRIPTION = "(any arguments)"


class ArgumentBinding:
    """
    Canned behavior for one argument pattern.

    Return values are handed out in declaration order; once the queue is
    exhausted every further call returns the last value. The call counter
    only ever grows and ``expected`` is a one-way switch.
    """

    def __init__(
        self,
        method_name: str,
        args: Sequence[Any] | None = (),
        kwargs: Mapping[str, Any] | None = None,
        stub: "MethodStub | None" = None,
        config: MockerConfig | None = None,
    ) -> None:
        """
        Initialize the binding.

        Args:
            method_name: Name of the owning method, for messages
            args: Declared positional arguments; None marks the default binding
            kwargs: Declared keyword arguments
            stub: Owning MethodStub, used for fluent chaining
            config: Engine configuration
        """
        self.method_name = method_name
        self.is_default = args is None
        self.config = config or MockerConfig()
        self.return_queue: list[Any] = []
        self.call_count = 0
        self.expected = False
        self._stub = stub

        # Pattern, key and rendering are fixed at declaration time
        self._key: ArgumentKey | None = None if args is None else argument_key(args, kwargs)
        self.args, self.kwargs = snapshot_arguments(args or (), kwargs)
        if self.is_default:
            self._description = DEFAULT_DESCRIPTION
        else:
            self._description = describe_arguments(self.args, self.kwargs, width=self.config.describe_width)

    @property
    def key(self) -> ArgumentKey | None:
        return self._key

    @property
    def is_satisfied(self) -> bool:
        return not self.expected or self.call_count >= 1

    def returns(self, value: Any) -> "ArgumentBinding":
        """
        Set the first return value.

        Raises:
            SequenceError: The sequence was already extended with
                then_returns() and strict_returns is enabled
        """
        if len(self.return_queue) > 1:
            if self.config.strict_returns:
                raise SequenceError(
                    f"returns() called on {self.method_name}{self.describe()} after a return "
                    f"sequence of {len(self.return_queue)} values was declared; "
                    "use then_returns() to extend it"
                )
            LOG.warning(
                "Resetting return sequence of %s%s (%d values)",
                self.method_name,
                self.describe(),
                len(self.return_queue),
            )
        self.return_queue = [value]
        return self

    def then_returns(self, value: Any) -> "ArgumentBinding":
        """Append one more value to the return sequence."""
        self.return_queue.append(value)
        return self

    def is_expected(self) -> "ArgumentBinding":
        """Mark this binding as required to be called before verification."""
        self.expected = True
        return self

    def call(self) -> Any:
        self.call_count += 1
        if not self.return_queue:
            return None
        return self.return_queue[min(self.call_count - 1, len(self.return_queue) - 1)]

    def assert_called(self) -> "ArgumentBinding":
        """
        Assert this binding was called at least once.

        Raises:
            UnmetExpectation: The binding was never called
        """
        if not self.call_count:
            raise UnmetExpectation(
                self.method_name,
                f"A call to {self.method_name}() with these arguments was never made:\n{self.describe()}",
            )
        return self

    def check_expectations(self) -> "ArgumentBinding":
        if self.expected:
            self.assert_called()
        return self

    def describe(self) -> str:
        return self._description

    # -- fluent chaining back up the ownership graph --

    def with_args(self, *args: Any, **kwargs: Any) -> "ArgumentBinding":
        """Declare another argument pattern on the owning method."""
        return self._owner().with_args(*args, **kwargs)

    def with_no_args(self) -> "ArgumentBinding":
        return self._owner().with_no_args()

    def method(self, name: str) -> "MethodStub":
        """Stub another method on the owning engine."""
        return self._owner().method(name)

    def _owner(self) -> "MethodStub":
        if self._stub is None:
            raise RuntimeError(f"Binding for {self.method_name}() is not attached to a stub")
        return self._stub

    def __repr__(self) -> str:
        return (
            f"ArgumentBinding({self.method_name}{self.describe()}, "
            f"calls={self.call_count}, expected={self.expected})"
        )
