"""
stubsmith: fluent test doubles with argument-keyed return sequences.

Usage:
    from stubsmith import Mock

    mock = Mock()
    mock.method("incrementor").with_no_args().returns(1).then_returns(2)
    mock.incrementor()  # -> 1
    mock.incrementor()  # -> 2
    mock.incrementor()  # -> 2
"""

from __future__ import annotations

from stubsmith.config import MockerConfig, configure_logging
from stubsmith.engine import (
    ArgumentBinding,
    ArgumentKey,
    MethodStub,
    MockEngine,
    RecordedCall,
    argument_key,
    describe_arguments,
)
from stubsmith.errors import (
    MockerError,
    SequenceError,
    UnexpectedCall,
    UnmetExpectation,
    UnstubbedMethod,
)
from stubsmith.host import Mock, forward
from stubsmith.models import BindingReport, MethodReport, MockReport

__version__ = "0.1.0"

__all__ = [
    # Host
    "Mock",
    "forward",
    # Engine
    "MockEngine",
    "MethodStub",
    "ArgumentBinding",
    "ArgumentKey",
    "RecordedCall",
    "argument_key",
    "describe_arguments",
    # Errors
    "MockerError",
    "UnstubbedMethod",
    "UnexpectedCall",
    "UnmetExpectation",
    "SequenceError",
    # Config and reporting
    "MockerConfig",
    "configure_logging",
    "BindingReport",
    "MethodReport",
    "MockReport",
]
