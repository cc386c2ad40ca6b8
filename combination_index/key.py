"""
Combination Key - fixed-arity integer tuples as hash keys

A combination is an ordered tuple of integers treated as one composite key.
CombinationKey owns an immutable copy of the components and carries its own
hash, computed once with the Boost hash_combine fold:

    seed ^= (v + 0x9e3779b9) + (seed << 6) + (seed >> 2)

The fold is order-sensitive: (1, 2) and (2, 1) hash differently.

Input Coercion:
    Components may be Python ints, numpy integers, bools or real numbers.
    Real numbers are truncated toward zero, the way raster cell values are
    coerced to integer codes:

        coerce_combination([1.9, -2.7, 3])   # (1, -2, 3)
        coerce_matrix([[1.5, 2], [3, 4]])    # int64 array [[1, 2], [3, 4]]
"""

from __future__ import annotations
from typing import Any, Iterable, Iterator, Tuple
import math
import numbers

import numpy as np

from .constants import HASH_GOLDEN, HASH_MASK64, HASH_SEED, INT64_MAX, INT64_MIN
from .errors import InvalidArgument, PreconditionViolation


# =============================================================================
# HASHING
# =============================================================================

def hash_combine(values: Iterable[int], seed: int = HASH_SEED) -> int:
    """
    Fold integer components into a 64-bit hash (Boost hash_combine).

    Every step wraps at 64 bits (size_t arithmetic). Components are folded
    at full 64-bit width, so values differing only above bit 31 still
    hash apart.

    Args:
        values: Integer components, in positional order
        seed: Initial fold value

    Returns:
        Unsigned 64-bit hash
    """
    for v in values:
        mixed = (v & HASH_MASK64) + HASH_GOLDEN + ((seed << 6) & HASH_MASK64) + (seed >> 2)
        seed ^= mixed & HASH_MASK64
    return seed


# =============================================================================
# COERCION
# =============================================================================

def coerce_component(value: Any) -> int:
    """Coerce one component to int, truncating real numbers toward zero."""
    if isinstance(value, (numbers.Integral, np.bool_)):
        v = int(value)
    elif isinstance(value, numbers.Real):
        f = float(value)
        if not math.isfinite(f):
            raise InvalidArgument(f"combination components must be finite, got {value!r}")
        v = int(f)
    else:
        raise InvalidArgument(
            f"combination components must be integers or real numbers, got {type(value).__name__}"
        )
    if not INT64_MIN <= v <= INT64_MAX:
        raise InvalidArgument(f"combination component {v} is outside the int64 range")
    return v


def coerce_combination(combination: Any) -> Tuple[int, ...]:
    """
    Normalize a combination to a tuple of Python ints.

    Accepts a CombinationKey, a 1-D numpy array, or any iterable of
    numeric components. Strings and scalars are rejected.
    """
    if isinstance(combination, CombinationKey):
        return combination.values
    if isinstance(combination, (str, bytes)):
        raise InvalidArgument("combination must be a sequence of integers, got a string")
    if isinstance(combination, np.ndarray):
        if combination.ndim != 1:
            raise InvalidArgument(
                f"combination must be 1-dimensional, got {combination.ndim}-D array"
            )
        combination = combination.tolist()
    try:
        components = list(combination)
    except TypeError as exc:
        raise InvalidArgument(
            f"combination must be a sequence of integers, got {type(combination).__name__}"
        ) from exc
    return tuple(coerce_component(v) for v in components)


def coerce_matrix(matrix: Any) -> np.ndarray:
    """
    Normalize a bulk-update matrix to a 2-D int64 array.

    Integer and boolean arrays are cast; float arrays must be finite and are
    truncated toward zero. Anything else raises InvalidArgument.
    """
    try:
        arr = np.asarray(matrix)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"matrix could not be converted to an array: {exc}") from exc

    if arr.ndim != 2:
        raise InvalidArgument(f"matrix must be 2-dimensional, got {arr.ndim}-D")

    kind = arr.dtype.kind
    if kind == 'u' and arr.size and arr.max() > INT64_MAX:
        raise InvalidArgument("matrix contains values outside the int64 range")
    if kind in ('b', 'i', 'u'):
        return arr.astype(np.int64, copy=False)
    if kind == 'f':
        if not np.isfinite(arr).all():
            raise InvalidArgument("matrix contains non-finite values")
        truncated = np.trunc(arr)
        # 2**63 itself is representable as float64 but not as int64
        if truncated.size and (truncated.min() < INT64_MIN or truncated.max() >= 2.0 ** 63):
            raise InvalidArgument("matrix contains values outside the int64 range")
        return truncated.astype(np.int64)
    raise InvalidArgument(f"matrix must hold integers or real numbers, got dtype {arr.dtype}")


# =============================================================================
# KEY TYPE
# =============================================================================

class CombinationKey:
    """
    Immutable fixed-arity integer key.

    Equality is structural: same arity and pairwise-equal components.
    Comparing keys of different arity is a caller error and raises
    PreconditionViolation rather than returning False, since a table never
    holds keys of more than one arity.

    Example:
        >>> k = CombinationKey([1, 2])
        >>> k == CombinationKey((1, 2))
        True
        >>> k.arity
        2
    """

    __slots__ = ('_values', '_hash')

    def __init__(self, values: Iterable[Any]):
        self._values = coerce_combination(values)
        self._hash = hash_combine(self._values)

    @classmethod
    def _from_ints(cls, values: Tuple[int, ...]) -> 'CombinationKey':
        """Build from an already-coerced tuple (internal fast path)."""
        key = cls.__new__(cls)
        key._values = values
        key._hash = hash_combine(values)
        return key

    @property
    def values(self) -> Tuple[int, ...]:
        return self._values

    @property
    def arity(self) -> int:
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __getitem__(self, i: int) -> int:
        return self._values[i]

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CombinationKey):
            return NotImplemented
        if len(other._values) != len(self._values):
            raise PreconditionViolation(
                f"cannot compare combinations of arity {len(self._values)} "
                f"and {len(other._values)}"
            )
        return self._hash == other._hash and self._values == other._values

    def __repr__(self) -> str:
        return f"CombinationKey({list(self._values)})"


__all__ = [
    'hash_combine',
    'coerce_component',
    'coerce_combination',
    'coerce_matrix',
    'CombinationKey',
]
