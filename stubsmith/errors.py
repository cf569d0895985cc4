"""
Error kinds raised by the mock engine.

Every failure propagates to the caller immediately; nothing here is
retried or recovered from.

Hierarchy:
    - MockerError: base class for everything the engine raises
    - UnstubbedMethod: a call or assertion named a method never declared
    - UnexpectedCall: no argument pattern matched and no default exists
    - UnmetExpectation: an expected method or binding was never invoked
    - SequenceError: returns() used after a sequence was already extended
"""

from __future__ import annotations


class MockerError(Exception):
    """Base exception for mock engine errors."""

    pass


class UnstubbedMethod(MockerError, LookupError):
    """A method (or argument pattern) was referenced but never declared."""

    def __init__(self, method_name: str, detail: str = "") -> None:
        self.method_name = method_name
        message = f"Method {method_name}() not stubbed!"
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class UnexpectedCall(MockerError):
    """
    A declared method was called with arguments matching no binding.

    Raised at call time. The message carries the arguments actually
    received and every declared alternative pattern.
    """

    def __init__(self, method_name: str, actual: str, expected: list[str]) -> None:
        self.method_name = method_name
        self.actual = actual
        self.expected = list(expected)
        message = f"A call to {method_name}() with the following arguments wasn't expected:\n{actual}"
        if self.expected:
            message += "\nThese arguments were expected:\n" + "\n\nOR\n\n".join(self.expected)
        super().__init__(message)


class UnmetExpectation(MockerError, AssertionError):
    """
    An expectation was checked and found unmet.

    Subclasses AssertionError so pytest and unittest report it as a failed
    assertion rather than an error in the test itself.
    """

    def __init__(self, method_name: str, message: str) -> None:
        self.method_name = method_name
        super().__init__(message)


class SequenceError(MockerError):
    """returns() was called on a binding whose return sequence was already extended."""

    pass
