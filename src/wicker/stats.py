"""Goodness-of-fit checking for samplers."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from scipy import stats


@dataclass(frozen=True)
class ChiSquaredResult:
    """Outcome of a chi-squared test of observed counts against weights."""

    chi_squared: float
    p_value: float
    degrees_of_freedom: int

    def passes(self, alpha: float = 0.05) -> bool:
        """True if the counts are consistent with the weights at level ``alpha``."""
        return self.p_value >= alpha


def chi_squared_test(counts: Sequence[int], weights: Sequence[float]) -> ChiSquaredResult:
    """Pearson's chi-squared test of ``counts`` against the distribution ``weights``.

    Categories with zero weight are left out of the statistic. If any of them
    was observed at all the result is an outright failure.
    """
    if len(counts) != len(weights):
        raise ValueError(f"Got {len(counts)} counts for {len(weights)} weights")
    peak = max(weights, default=0.0)
    num_samples = sum(counts)
    if peak <= 0 or num_samples == 0:
        raise ValueError("Need a positive total weight and at least one sample")
    # Relative to the largest weight, so the total cannot overflow.
    relative = [w / peak for w in weights]
    total_weight = math.fsum(relative)

    observed: list[int] = []
    expected: list[float] = []
    for count, weight in zip(counts, relative):
        if weight == 0:
            if count:
                return ChiSquaredResult(math.inf, 0.0, max(len(counts) - 1, 0))
            continue
        observed.append(count)
        expected.append(weight / total_weight * num_samples)

    dof = len(observed) - 1
    if dof == 0:
        return ChiSquaredResult(0.0, 1.0, 0)

    statistic, p_value = stats.chisquare(observed, expected)
    return ChiSquaredResult(float(statistic), float(p_value), dof)
