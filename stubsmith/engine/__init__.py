"""
Matching and recording engine.

Submodules:
    - keys: structural argument keys and call records
    - binding: one argument pattern with its return sequence
    - stub: one stubbed method routing calls to its bindings
    - mocker: the per-double registry of stubs
"""

from stubsmith.engine.binding import ArgumentBinding
from stubsmith.engine.keys import ArgumentKey, RecordedCall, argument_key, describe_arguments, snapshot_arguments
from stubsmith.engine.mocker import MockEngine
from stubsmith.engine.stub import MethodStub

__all__ = [
    "ArgumentBinding",
    "ArgumentKey",
    "MethodStub",
    "MockEngine",
    "RecordedCall",
    "argument_key",
    "describe_arguments",
    "snapshot_arguments",
]
