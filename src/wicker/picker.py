"""The :class:`WeightedPicker` container."""

import logging
import math
import random
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Generic, Protocol, TypeVar

from wicker.errors import InvalidInputError
from wicker.iter import SortedIter
from wicker.stats import ChiSquaredResult, chi_squared_test
from wicker.table import AliasTable, build_alias_table, normalize_weights

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """The part of :class:`random.Random` a picker draws from."""

    def randrange(self, stop: int) -> int: ...

    def random(self) -> float: ...


def _resolve_rng(rng: RandomSource | None) -> RandomSource:
    # The random module itself satisfies RandomSource.
    return random if rng is None else rng  # type: ignore[return-value]


def _split_entries(entries: Iterable[tuple[T, float]]) -> tuple[list[T], list[float]]:
    items: list[T] = []
    weights: list[float] = []
    for position, entry in enumerate(entries):
        try:
            item, weight = entry
            weights.append(float(weight))
        except (TypeError, ValueError) as e:
            raise InvalidInputError(
                f"Entry {position} is not an (item, weight) pair: {entry!r}"
            ) from e
        items.append(item)
    return items, weights


class WeightedPicker(Generic[T]):
    """A fixed set of items, each drawn with probability proportional to its weight.

    Building the picker costs O(n); every draw after that costs O(1) and
    consumes two values from the random source: ``randrange(n)`` followed by
    ``random()``.

    Weights are fixed for the lifetime of the picker. Payloads can be
    replaced with :meth:`set_by_idx` or ``picker[i] = value``, which never
    affects sampling. The picker does no locking: reads are safe to share,
    but replacing payloads has to be serialized by the caller.

    Example:
        >>> picker = WeightedPicker([("common", 10.0), ("rare", 1.0)])
        >>> picker.get() in ("common", "rare")
        True
    """

    def __init__(self, entries: Iterable[tuple[T, float]]) -> None:
        """Build a picker from ``(item, weight)`` pairs.

        Raises:
            InvalidInputError: if ``entries`` is empty or malformed.
            InvalidWeightError: if the weights cannot form a distribution.
        """
        items, weights = _split_entries(entries)
        self._table: AliasTable = build_alias_table(weights)
        self._items = items
        self._weights = tuple(weights)
        self._relative = tuple(normalize_weights(weights))
        self._relative_total = math.fsum(self._relative)
        self._generation = 0

    @classmethod
    def from_weights(cls, weights: Iterable[float]) -> "WeightedPicker[int]":
        """Build a picker whose items are the indices of ``weights``."""
        return cls(enumerate(weights))  # type: ignore[arg-type, return-value]

    @property
    def table(self) -> AliasTable:
        return self._table

    # -------------------------------------------------------------------------
    # Sampling
    # -------------------------------------------------------------------------

    def get_idx(self, rng: RandomSource | None = None) -> int:
        """Randomly pick an index, with probability proportional to its weight."""
        source = _resolve_rng(rng)
        column = source.randrange(len(self._items))
        return self._table.sample_index(column, source.random())

    def get(self, rng: RandomSource | None = None) -> T:
        """Randomly pick an item, with probability proportional to its weight."""
        return self._items[self.get_idx(rng)]

    def sample(self, k: int, rng: RandomSource | None = None) -> list[T]:
        """Draw ``k`` items with replacement."""
        if k < 0:
            raise ValueError(f"Sample size must be non-negative, got {k}")
        return [self.get(rng) for _ in range(k)]

    @staticmethod
    def pick(entries: Iterable[tuple[T, float]], rng: RandomSource | None = None) -> T:
        """Build a throwaway picker and return one randomly chosen item.

        The chosen item is taken out by swapping it with the last item, which
        is O(1) but reorders what is left, so the picker is discarded
        afterwards. A picker cannot be reused after a removal, since its
        table would no longer describe its items.
        """
        picker = WeightedPicker(entries)
        idx = picker.get_idx(rng)
        items = picker._items
        items[idx], items[-1] = items[-1], items[idx]
        logger.debug("pick() chose index %d of %d", idx, len(items))
        return items.pop()

    def test_distribution(
        self, num_samples: int = 10000, rng: RandomSource | None = None
    ) -> ChiSquaredResult:
        """Draw ``num_samples`` indices and chi-squared test them against the weights."""
        if num_samples < 1:
            raise ValueError(f"num_samples must be positive, got {num_samples}")
        counts = [0] * len(self._items)
        for _ in range(num_samples):
            counts[self.get_idx(rng)] += 1
        return chi_squared_test(counts, self._weights)

    # -------------------------------------------------------------------------
    # Indexed access
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def get_by_idx(self, idx: int) -> T | None:
        """Return the item at ``idx``, or ``None`` if there is no such index."""
        if 0 <= idx < len(self._items):
            return self._items[idx]
        return None

    def set_by_idx(self, idx: int, item: T) -> bool:
        """Replace the item at ``idx``, keeping its weight.

        Returns ``False`` and changes nothing if ``idx`` is out of range.
        """
        if not 0 <= idx < len(self._items):
            return False
        self._items[idx] = item
        self._generation += 1
        return True

    def _normalize_index(self, idx: int) -> int:
        n = len(self._items)
        if idx < 0:
            idx += n
        if not 0 <= idx < n:
            raise IndexError(f"WeightedPicker index out of range: {idx}")
        return idx

    def __getitem__(self, idx: int) -> T:
        return self._items[self._normalize_index(idx)]

    def __setitem__(self, idx: int, item: T) -> None:
        self.set_by_idx(self._normalize_index(idx), item)

    def weight(self, idx: int) -> float:
        """Return the weight the item at ``idx`` was created with."""
        return self._weights[self._normalize_index(idx)]

    def weights(self) -> tuple[float, ...]:
        return self._weights

    def probability(self, idx: int) -> float:
        """Return the chance of drawing the item at ``idx`` on a single draw."""
        return self._relative[self._normalize_index(idx)] / self._relative_total

    # -------------------------------------------------------------------------
    # Sequence-style helpers
    # -------------------------------------------------------------------------

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def iter(self) -> SortedIter[T]:
        """Iterate through the items from least to most weight.

        This sorts internally, so it costs O(n log n) per call.
        """
        return SortedIter(self)

    def to_list(self) -> list[T]:
        return list(self._items)

    def __contains__(self, item: Any) -> bool:
        return item in self._items

    def index(self, item: Any) -> int:
        for i, existing in enumerate(self._items):
            if existing == item:
                return i
        raise ValueError(f"{item!r} is not in WeightedPicker")

    def count(self, item: Any) -> int:
        return sum(1 for existing in self._items if existing == item)

    def items(self) -> Sequence[tuple[T, float]]:
        return list(zip(self._items, self._weights))

    def __repr__(self) -> str:
        return f"WeightedPicker({self.items()!r})"


def pick(entries: Iterable[tuple[T, float]], rng: RandomSource | None = None) -> T:
    """Shortcut for :meth:`WeightedPicker.pick`."""
    return WeightedPicker.pick(entries, rng)
