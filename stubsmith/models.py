from __future__ import annotations

from typing import List

from pydantic import BaseModel


class BindingReport(BaseModel):
    arguments: str
    digest: str
    isDefault: bool
    callCount: int
    expected: bool
    satisfied: bool
    queuedReturns: int


class MethodReport(BaseModel):
    methodName: str
    callCount: int
    expected: bool
    satisfied: bool
    bindings: List[BindingReport]


class MockReport(BaseModel):
    methods: List[MethodReport]
    satisfied: bool
    unmet: List[str]
