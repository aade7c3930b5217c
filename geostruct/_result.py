"""An accumulating result type.

`Success` holds a value, `Failure` a non-empty tuple of `StructuralError`.
Unlike exception based control flow, combining results with `combine`,
`collect` or `traverse` runs every sub-computation and concatenates every
failure, so a single pass reports every problem in a document.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Tuple, TypeVar, Union

import msgspec

from .errors import StructuralError, ValidationError

__all__ = ("Success", "Failure", "Result", "combine", "collect", "traverse", "located")

T = TypeVar("T")
U = TypeVar("U")


class Success(msgspec.Struct, Generic[T], frozen=True):
    value: T

    ok = True

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        return Success(fn(self.value))

    def bind(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        return fn(self.value)

    def unwrap(self) -> T:
        return self.value


class Failure(msgspec.Struct, frozen=True):
    errors: Tuple[StructuralError, ...]

    ok = False

    def __post_init__(self):
        if not self.errors:
            raise ValueError("Failure requires at least one error")

    def map(self, fn):
        return self

    def bind(self, fn):
        return self

    def unwrap(self):
        raise ValidationError(self.errors)


Result = Union[Success[T], Failure]


def fail(*errors: StructuralError) -> Failure:
    return Failure(errors)


def located(result: Result[T], *prefix) -> Result[T]:
    """Prefix the path of every error in ``result`` with ``prefix``"""
    if result.ok:
        return result
    return Failure(tuple(e.at(*prefix) for e in result.errors))


def combine(fn: Callable[..., U], *results: Result[Any]) -> Result[U]:
    """Apply ``fn`` to the values of ``results`` if all succeeded.

    Otherwise return a single `Failure` with the errors of every failed
    result, in argument order.
    """
    errors = []
    for r in results:
        if not r.ok:
            errors.extend(r.errors)
    if errors:
        return Failure(tuple(errors))
    return Success(fn(*(r.value for r in results)))


def collect(results: Iterable[Result[T]]) -> Result[Tuple[T, ...]]:
    """Turn an iterable of results into a result of a tuple"""
    return combine(lambda *values: values, *results)


def traverse(fn: Callable[[Any], Result[T]], items: Iterable[Any]) -> Result[Tuple[T, ...]]:
    """Apply ``fn`` to every item, locating errors at the item index"""
    return collect(located(fn(item), i) for i, item in enumerate(items))
