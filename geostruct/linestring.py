"""Bounded sequence containers.

A `LineString` holds at least two elements, a `LinearRing` is a `LineString`
that also has at least four elements and ends where it starts. Neither can be
built directly, only through the validating factories in this module (or
through `map`, which preserves length).
"""
from __future__ import annotations

from functools import reduce
from typing import Any, Callable, Generic, Iterable, Iterator, List, Sequence, TypeVar

from ._result import Result, Success, fail
from .errors import EmptySequence, RingNotClosed, RingTooShort, SingletonSequence

__all__ = (
    "LineString",
    "LinearRing",
    "make_line_string",
    "make_line_string_from",
    "make_linear_ring",
)

T = TypeVar("T")
U = TypeVar("U")


class LineString(Generic[T]):
    """An immutable sequence of at least two elements.

    Backed by a tuple, so `head`, `last` and ``len`` are all O(1).

    Use `make_line_string` or `make_line_string_from` to create one.
    """

    __slots__ = ("_items",)

    def __init__(self, *args, **kwargs):
        raise TypeError(
            f"{type(self).__name__} can't be created directly, "
            f"use `make_{_factory_suffix(type(self))}` instead"
        )

    @classmethod
    def _unchecked(cls, items: tuple):
        out = object.__new__(cls)
        object.__setattr__(out, "_items", items)
        return out

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self)._unchecked, (self._items,))

    @property
    def head(self) -> T:
        """The first element"""
        return self._items[0]

    @property
    def last(self) -> T:
        """The last element. For a ring this equals `head`."""
        return self._items[-1]

    def __len__(self):
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._items == other._items

    def __hash__(self):
        return hash((type(self), self._items))

    def __repr__(self):
        return f"{type(self).__name__}({list(self._items)!r})"

    def to_list(self) -> List[T]:
        """Return the elements as a plain list, in order"""
        return list(self._items)

    def map(self, fn: Callable[[T], U]) -> LineString[U]:
        """Apply ``fn`` to every element.

        The length is preserved, so no revalidation happens. For a
        `LinearRing` the result is only closed if ``fn`` maps equal elements
        to equal elements; guaranteeing that is up to the caller.
        """
        return type(self)._unchecked(tuple(fn(x) for x in self._items))

    def foldr(self, fn: Callable[[T, U], U], initial: U) -> U:
        """Right fold, ``fn(x0, fn(x1, ... fn(xn, initial)))``"""
        return reduce(lambda acc, x: fn(x, acc), reversed(self._items), initial)

    def fold_map(self, fn: Callable[[T], U], empty: U) -> U:
        """Map every element with ``fn`` and sum the results onto ``empty``"""
        return reduce(lambda acc, x: acc + fn(x), self._items, empty)

    def combine(self, fn: Callable[[T, T], U]) -> List[U]:
        """Apply ``fn`` to each consecutive pair of elements.

        >>> make_line_string_from(1, 2, [3, 4]).combine(lambda a, b: (a, b))
        [(1, 2), (2, 3), (3, 4)]
        """
        items = self._items
        return [fn(a, b) for a, b in zip(items, items[1:])]


class LinearRing(LineString[T]):
    """A closed `LineString` with at least four elements.

    The closing element is stored, so ``len`` counts it and iteration yields
    it last. Use `make_linear_ring` to create one.
    """

    __slots__ = ()


def _factory_suffix(cls):
    return "linear_ring" if issubclass(cls, LinearRing) else "line_string"


def make_line_string(seq: Iterable[T]) -> Result[LineString[T]]:
    """Create a `LineString` from any iterable.

    Parameters
    ----------
    seq : iterable
        The elements, in order.

    Returns
    -------
    result : Result
        `Success` holding the line string, or `Failure` with `EmptySequence`
        or `SingletonSequence` if there are fewer than two elements.
    """
    items = tuple(seq)
    if not items:
        return fail(EmptySequence())
    if len(items) == 1:
        return fail(SingletonSequence())
    return Success(LineString._unchecked(items))


def make_line_string_from(first: T, second: T, rest: Sequence[T] = ()) -> LineString[T]:
    """Create a `LineString` from its first two elements and the remainder.

    Equivalent to ``make_line_string([first, second, *rest])``, but can't
    fail so returns the line string directly.
    """
    return LineString._unchecked((first, second, *rest))


def make_linear_ring(seq: Iterable[T]) -> Result[LinearRing[T]]:
    """Create a `LinearRing` from any iterable.

    Every applicable error is reported together: the `LineString` errors,
    `RingTooShort` for fewer than four elements, and `RingNotClosed` if the
    first and last elements differ.
    """
    items = tuple(seq)
    errors: List[Any] = []
    line = make_line_string(items)
    if not line.ok:
        errors.extend(line.errors)
    if len(items) < 4:
        errors.append(RingTooShort(length=len(items)))
    if len(items) >= 2 and items[0] != items[-1]:
        errors.append(RingNotClosed())
    if errors:
        return fail(*errors)
    return Success(LinearRing._unchecked(items))
