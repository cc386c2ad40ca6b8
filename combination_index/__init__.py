"""
Combination Index - counting unique combinations of integers

A hash table keyed by fixed-length integer tuples. Each distinct
combination gets a stable identity on first sight and a running weight
that grows as the same combination is seen again.

Components:
- CombinationKey: owned integer key with an order-sensitive hash
- CombinationTable: upsert (single and bulk), DataFrame / matrix export
- combine / value_count: overlay of in-memory integer grids
"""

__version__ = "0.1.0"

from .errors import CombinationError, InvalidArgument, PreconditionViolation
from .key import CombinationKey, hash_combine
from .config import TableConfig
from .table import CombinationRecord, CombinationTable
from .matrix import CombinationMatrix
from .combine import CombineResult, combine, value_count

__all__ = [
    "CombinationError",
    "InvalidArgument",
    "PreconditionViolation",
    "CombinationKey",
    "hash_combine",
    "TableConfig",
    "CombinationRecord",
    "CombinationTable",
    "CombinationMatrix",
    "CombineResult",
    "combine",
    "value_count",
]
