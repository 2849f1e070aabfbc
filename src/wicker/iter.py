"""Iteration over a :class:`~wicker.picker.WeightedPicker` in weight order."""

import logging
import struct
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

if TYPE_CHECKING:
    from wicker.picker import WeightedPicker

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D")

_MISSING = object()
_SIGN_MASK = 0x7FFF_FFFF_FFFF_FFFF


def total_order_key(value: float) -> int:
    """Map a float to an int that sorts like IEEE 754 ``totalOrder``.

    NaNs and infinities get a fixed place instead of breaking the sort.
    """
    bits = struct.unpack("<q", struct.pack("<d", value))[0]
    if bits < 0:
        bits ^= _SIGN_MASK
    return bits


class SortedIter(Generic[T]):
    """Double-ended iterator over a picker's items, least weight first.

    The sort happens once, when the iterator is created. Items are then taken
    from the front with ``next()`` or from the back with :meth:`next_back`,
    in any mix, and each item is produced exactly once.

    The iterator never modifies the picker. Replacing a payload on the picker
    while an iterator over it is alive makes the iterator raise
    ``RuntimeError`` on its next step, unless it is already exhausted.
    """

    def __init__(self, picker: "WeightedPicker[T]") -> None:
        self._picker = picker
        self._generation = picker._generation
        weights = picker.weights()
        self._order = sorted(range(len(weights)), key=lambda i: total_order_key(weights[i]))
        self._front = 0
        self._back = len(self._order) - 1
        logger.debug("Created sorted iterator over %d items", len(self._order))

    def _check_unchanged(self) -> None:
        if self._picker._generation != self._generation:
            raise RuntimeError("WeightedPicker changed during iteration")

    def __iter__(self) -> "SortedIter[T]":
        return self

    def __next__(self) -> T:
        if self._front > self._back:
            raise StopIteration
        self._check_unchanged()
        position = self._front
        self._front += 1
        return self._picker[self._order[position]]

    @overload
    def next_back(self) -> T: ...

    @overload
    def next_back(self, default: D) -> T | D: ...

    def next_back(self, default: Any = _MISSING) -> Any:
        """Return the heaviest item not yet produced.

        Raises ``StopIteration`` once the iterator is exhausted, unless
        ``default`` is given, in which case that is returned instead.
        """
        if self._back < self._front:
            if default is _MISSING:
                raise StopIteration
            return default
        self._check_unchanged()
        position = self._back
        self._back -= 1
        return self._picker[self._order[position]]

    def __reversed__(self) -> Iterator[T]:
        while self._back >= self._front:
            yield self.next_back()

    def __len__(self) -> int:
        return 1 + self._back - self._front

    def __length_hint__(self) -> int:
        return len(self)

    def __repr__(self) -> str:
        return f"SortedIter(remaining={len(self)})"
