"""Alias table construction using Vose's method.

See http://www.keithschwarz.com/darts-dice-coins/ for a walkthrough of the
algorithm. Construction is O(n); drawing from the finished table is O(1) and
needs one uniform column and one uniform coin in ``[0, 1)``.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from wicker.errors import InvalidInputError, InvalidWeightError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AliasTable:
    """The ``(prob, alias)`` pair produced by :func:`build_alias_table`.

    Column ``i`` keeps its own index with probability ``prob[i]`` and
    otherwise redirects to ``alias[i]``.
    """

    prob: tuple[float, ...]
    alias: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.prob)

    def sample_index(self, column: int, coin: float) -> int:
        """Resolve a uniformly chosen column and coin toss to an index."""
        if not 0 <= column < len(self.prob):
            raise IndexError(f"column {column} out of range for {len(self.prob)} columns")
        if coin < self.prob[column]:
            return column
        return self.alias[column]

    def index_probabilities(self) -> list[float]:
        """Recover the probability of each index implied by the table."""
        n = len(self.prob)
        result = [0.0] * n
        for column, (p, alias) in enumerate(zip(self.prob, self.alias)):
            result[column] += p / n
            result[alias] += (1.0 - p) / n
        return result


def normalize_weights(weights: Sequence[float]) -> list[float]:
    """Check that ``weights`` can be sampled from and rescale them.

    Weights are divided by the largest one, so the result lies in ``[0, 1]``
    and sums to at most ``n`` even when the raw total would overflow.
    """
    if len(weights) == 0:
        raise InvalidInputError("Cannot build an alias table from no weights")
    for i, w in enumerate(weights):
        if math.isnan(w) or math.isinf(w):
            raise InvalidWeightError(f"Weight at index {i} is not finite: {w!r}", i)
        if w < 0:
            raise InvalidWeightError(f"Weight at index {i} is negative: {w!r}", i)
    peak = max(weights)
    if peak <= 0:
        raise InvalidWeightError("Total weight must be positive")
    return [w / peak for w in weights]


def build_alias_table(weights: Sequence[float]) -> AliasTable:
    """Build an alias table for ``weights``.

    Weights are scaled so their mean is 1. Columns below the mean are topped
    up from columns at or above it, one pair at a time, until one worklist
    runs dry. Whatever is left over is (up to rounding) exactly full, so it
    keeps itself with probability 1.

    The output depends only on the order and values of ``weights``. Rounding
    near the threshold can move an index between worklists on different
    platforms, which changes the table layout but not the probabilities it
    encodes.

    Raises:
        InvalidInputError: if ``weights`` is empty.
        InvalidWeightError: if a weight is negative or non-finite, or the
            weights are all zero.
    """
    relative = normalize_weights(weights)
    n = len(relative)
    total = math.fsum(relative)

    scaled = [w / total * n for w in relative]
    prob = [0.0] * n
    alias = list(range(n))

    small: list[int] = []
    large: list[int] = []
    for i, s in enumerate(scaled):
        if s < 1.0:
            small.append(i)
        else:
            large.append(i)

    while small and large:
        less = small.pop()
        more = large.pop()

        prob[less] = scaled[less]
        alias[less] = more

        scaled[more] = scaled[more] + scaled[less] - 1.0
        if scaled[more] >= 1.0:
            large.append(more)
        else:
            small.append(more)

    # Leftovers are full columns; alias already points at themselves.
    for remaining in (small, large):
        while remaining:
            prob[remaining.pop()] = 1.0

    if n > 1 and sum(1 for w in weights if w > 0) == 1:
        logger.warning("Only one of %d weights is non-zero; sampling is deterministic", n)
    logger.debug("Built alias table with %d columns", n)

    return AliasTable(prob=tuple(prob), alias=tuple(alias))
