"""
Argument keys: structural identity for argument lists.

An argument list (positional plus keyword arguments) is canonicalised into
a hashable tagged form. Two argument lists produce equal keys iff they are
structurally equal:

    - scalars are tagged with their type, so 1, 1.0 and True never collide
    - sequences (lists, tuples, deques, arrays...) keep their kind and order
    - mappings and sets compare independent of insertion order
    - dataclasses and pydantic models compare by field values
    - other hashable objects compare with their own __eq__
    - unhashable opaque objects compare by identity

The canonical form is stable within one process run only.
"""

from __future__ import annotations

import copy
import hashlib
import logging
import math
from array import array
from collections import Counter
from collections.abc import Mapping, Sequence, Set, ValuesView
from dataclasses import dataclass, field, fields, is_dataclass
from functools import cached_property
from pprint import pformat
from typing import Any

LOG = logging.getLogger("stubsmith.engine.keys")

Canonical = tuple


def _type_tag(value: Any) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def _canonicalize(value: Any, _seen: frozenset[int] = frozenset()) -> Canonical:
    if value is None:
        return ("none",)
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, int):
        return ("int", int(value))
    if isinstance(value, float):
        if math.isnan(value):
            return ("float", "nan")
        # -0.0 == 0.0, keep one spelling
        return ("float", float(value) + 0.0)
    if isinstance(value, str):
        return ("str", str(value))
    if isinstance(value, (bytes, bytearray)):
        return ("bytes", bytes(value))

    if id(value) in _seen:
        return ("cycle", _type_tag(value))
    seen = _seen | {id(value)}

    if isinstance(value, Mapping):
        return (
            "map",
            _type_tag(value),
            frozenset((_canonicalize(k, seen), _canonicalize(v, seen)) for k, v in value.items()),
        )
    if isinstance(value, (Sequence, array)):
        return ("seq", _type_tag(value), tuple(_canonicalize(item, seen) for item in value))
    if isinstance(value, Set):
        return ("set", _type_tag(value), frozenset(_canonicalize(item, seen) for item in value))
    if isinstance(value, ValuesView):
        bag = Counter(_canonicalize(item, seen) for item in value)
        return ("bag", _type_tag(value), frozenset(bag.items()))
    if isinstance(value, type):
        return ("object", _type_tag(value), value)
    if is_dataclass(value):
        return (
            "dataclass",
            _type_tag(value),
            tuple((f.name, _canonicalize(getattr(value, f.name), seen)) for f in fields(value)),
        )
    if hasattr(value, "model_dump") and callable(getattr(value, "model_dump")):
        return ("model", _type_tag(value), _canonicalize(value.model_dump(), seen))

    try:
        hash(value)
    except TypeError:
        return ("ref", _type_tag(value), id(value))
    return ("object", _type_tag(value), value)


def _ordered(node: Any) -> Any:
    """Replace every frozenset in a canonical form with a sorted list."""
    if isinstance(node, frozenset):
        return ["unordered", *sorted((_ordered(item) for item in node), key=repr)]
    if isinstance(node, tuple):
        return tuple(_ordered(item) for item in node)
    return node


@dataclass(frozen=True)
class ArgumentKey:
    """Comparable, hashable key for one argument list."""

    canonical: Canonical

    @cached_property
    def digest(self) -> str:
        """Short sha1 of the canonical form, for log lines and reports."""
        return hashlib.sha1(repr(_ordered(self.canonical)).encode("utf-8")).hexdigest()[:12]


def argument_key(args: Sequence[Any] = (), kwargs: Mapping[str, Any] | None = None) -> ArgumentKey:
    """
    Compute the key of an argument list.

    Args:
        args: Positional arguments, in call order
        kwargs: Keyword arguments (order-independent)

    Returns:
        ArgumentKey equal to the key of any structurally equal argument list
    """
    positional = tuple(_canonicalize(a) for a in args)
    keywords = frozenset((name, _canonicalize(v)) for name, v in (kwargs or {}).items())
    return ArgumentKey(canonical=(positional, keywords))


def describe_arguments(
    args: Sequence[Any] = (),
    kwargs: Mapping[str, Any] | None = None,
    width: int = 80,
) -> str:
    """Render an argument list deterministically, e.g. ``(4, 'x', flag=True)``."""
    parts = [pformat(a, width=width, sort_dicts=True) for a in args]
    parts.extend(f"{name}={pformat(v, width=width, sort_dicts=True)}" for name, v in sorted((kwargs or {}).items()))
    return "(" + ", ".join(parts) + ")"


def _snapshot(value: Any) -> Any:
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error) as exc:
        LOG.debug("Keeping a live reference to uncopyable %s: %s", _type_tag(value), exc)
        return value


def snapshot_arguments(
    args: Sequence[Any] = (),
    kwargs: Mapping[str, Any] | None = None,
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """
    Deep-copy an argument list so later mutation by the caller cannot reach it.

    Values that refuse to be copied are kept by reference.
    """
    return tuple(_snapshot(a) for a in args), {name: _snapshot(v) for name, v in (kwargs or {}).items()}


@dataclass(frozen=True)
class RecordedCall:
    """
    One call observed by a stub.

    ``key`` is taken from the arguments as they were at call time; when not
    given it is computed from ``args`` and ``kwargs``.
    """

    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    key: ArgumentKey = field(default=None, compare=False, repr=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.key is None:
            object.__setattr__(self, "key", argument_key(self.args, self.kwargs))

    def describe(self, width: int = 80) -> str:
        return describe_arguments(self.args, self.kwargs, width=width)
