"""Package initialization for wicker.

A weighted random picker built on Vose's alias method: O(n) construction,
O(1) sampling, and iteration over items in order of weight.
"""

import logging

from wicker.errors import InvalidInputError, InvalidWeightError, WickerError
from wicker.iter import SortedIter
from wicker.picker import RandomSource, WeightedPicker, pick
from wicker.stats import ChiSquaredResult, chi_squared_test
from wicker.table import AliasTable, build_alias_table

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "AliasTable",
    "ChiSquaredResult",
    "InvalidInputError",
    "InvalidWeightError",
    "RandomSource",
    "SortedIter",
    "WeightedPicker",
    "WickerError",
    "build_alias_table",
    "chi_squared_test",
    "pick",
]
