"""
CombinationTable - counting index over fixed-length integer tuples

The table deduplicates combinations, gives each distinct combination an
identity on first sight, and accumulates a weight every time it is seen
again.

Identity Model:
    Lookup is by content (CombinationKey), the identity is derived data
    stored inside the record:

        key (1, 2) → CombinationRecord(id=1, weight=1.5)
        key (3, 4) → CombinationRecord(id=2, weight=2.0)

    - Identities are dense and follow first-occurrence order: 1, 2, 3, ...
    - An identity never changes once assigned; only the weight moves
    - Nothing is ever removed, so len(table) == number of distinct keys seen

Ingestion Pattern:
    # Single tuple
    cmbid = table.update((1, 2), 1.0)

    # Columns are tuples (one row per variable, e.g. one raster row per band)
    ids = table.update_from_matrix(m, 1.0)          # m.shape == (key_len, n)

    # Rows are tuples (one column per variable)
    ids = table.update_from_matrix_by_row(m, 1.0)   # m.shape == (n, key_len)

Ordering:
    Export row order is the mapping's traversal order. It is not part of
    the contract; sort by 'cmbid' when determinism matters.

Weights are accumulated in float64 in call order, so value-equal increment
sequences applied in a different order may differ in the last bits.

The table is not thread-safe. Callers must serialize writers, and readers
that run while a writer is active.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from dataclasses import dataclass, replace
import logging
import math

import numpy as np
import pandas as pd

from .config import TableConfig
from .constants import ID_COLUMN, NO_ID, WEIGHT_COLUMN
from .errors import InvalidArgument, PreconditionViolation
from .key import CombinationKey, coerce_combination, coerce_matrix
from .matrix import CombinationMatrix

logger = logging.getLogger(__name__)


@dataclass
class CombinationRecord:
    """Identity and accumulated weight of one distinct combination."""
    id: int
    weight: float


def _coerce_increment(increment: Any) -> float:
    if isinstance(increment, (str, bytes)):
        raise InvalidArgument(f"increment must be a real number, got {increment!r}")
    try:
        return float(increment)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"increment must be a real number, got {increment!r}") from exc


class CombinationTable:
    """
    Hash table counting unique combinations of integers.

    Example:
        >>> table = CombinationTable(2)
        >>> table.update((1, 2), 1.0)
        1
        >>> table.update((3, 4), 2.0)
        2
        >>> table.update((1, 2), 0.5)
        1
        >>> table.get((1, 2)).weight
        1.5
    """

    def __init__(self, key_len: int, var_names: Optional[Sequence[str]] = None):
        """
        Create an empty table.

        Args:
            key_len: Number of integers in each combination (positive)
            var_names: Display names for the key positions. Defaults to
                V1..Vn; otherwise must have exactly key_len entries.

        Raises:
            InvalidArgument: non-positive key_len or a name-list mismatch
        """
        self._setup(TableConfig(key_len, var_names))

    @classmethod
    def from_config(cls, config: TableConfig) -> 'CombinationTable':
        """Create an empty table from an existing configuration."""
        table = cls.__new__(cls)
        table._setup(config)
        return table

    def _setup(self, config: TableConfig):
        self._config = config
        self._last_id = NO_ID
        self._map: Dict[CombinationKey, CombinationRecord] = {}
        logger.debug("Created combination table: key_len=%d, names=%s",
                     config.key_len, list(config.var_names))

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> TableConfig:
        return self._config

    @property
    def key_len(self) -> int:
        return self._config.key_len

    @property
    def var_names(self) -> Tuple[str, ...]:
        return self._config.var_names

    @property
    def columns(self) -> Tuple[str, ...]:
        """Export column labels."""
        return self._config.columns

    @property
    def last_id(self) -> int:
        """Most recently assigned identity (0 while the table is empty)."""
        return self._last_id

    @property
    def total_weight(self) -> float:
        return math.fsum(rec.weight for rec in self._map.values())

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, combination: Any) -> bool:
        return self._key_for(combination) in self._map

    # -------------------------------------------------------------------------
    # Upsert
    # -------------------------------------------------------------------------

    def _check_arity(self, values: Tuple[int, ...]):
        if len(values) != self._config.key_len:
            raise PreconditionViolation(
                f"combination must have {self._config.key_len} values (key_len), "
                f"got {len(values)}"
            )

    def _key_for(self, combination: Any) -> CombinationKey:
        values = coerce_combination(combination)
        self._check_arity(values)
        return CombinationKey._from_ints(values)

    def _upsert(self, key: CombinationKey, increment: float) -> int:
        record = self._map.get(key)
        if record is None:
            self._last_id += 1
            self._map[key] = CombinationRecord(id=self._last_id, weight=increment)
            return self._last_id
        record.weight += increment
        return record.id

    def update(self, combination: Iterable[Any], increment: float = 1.0) -> int:
        """
        Increment the weight of a combination, inserting it if new.

        Args:
            combination: key_len integers (real numbers are truncated)
            increment: Added to the weight; a new combination starts at it

        Returns:
            The combination's identity (new or existing)

        Raises:
            PreconditionViolation: combination length != key_len
            InvalidArgument: non-numeric components or increment
        """
        key = self._key_for(combination)
        return self._upsert(key, _coerce_increment(increment))

    def _update_batch(self, tuples: List[List[int]], increment: float, orientation: str) -> np.ndarray:
        first_new = self._last_id
        ids = np.fromiter(
            (self._upsert(CombinationKey._from_ints(tuple(t)), increment) for t in tuples),
            dtype=np.int64,
            count=len(tuples),
        )
        logger.debug("Applied %d combinations by %s (%d new, %d distinct total)",
                     len(tuples), orientation, self._last_id - first_new, len(self._map))
        return ids

    def update_from_matrix(self, matrix: Any, increment: float = 1.0) -> np.ndarray:
        """
        update() on each column of a matrix, left to right.

        The matrix has one row per variable (nrow == key_len), e.g. the same
        row read from key_len rasters of identical extent and resolution.

        Returns:
            int64 array of identities, one per column

        Raises:
            InvalidArgument: matrix is not 2-D integer-like, or nrow != key_len.
                Nothing is applied in that case.
        """
        arr = coerce_matrix(matrix)
        if arr.shape[0] != self._config.key_len:
            raise InvalidArgument(
                f"matrix must have {self._config.key_len} rows (key_len), got {arr.shape[0]}"
            )
        incr = _coerce_increment(increment)
        return self._update_batch(arr.T.tolist(), incr, "column")

    def update_from_matrix_by_row(self, matrix: Any, increment: float = 1.0) -> np.ndarray:
        """
        update() on each row of a matrix, top to bottom.

        Same as update_from_matrix() with variables in the columns
        (ncol == key_len).

        Returns:
            int64 array of identities, one per row
        """
        arr = coerce_matrix(matrix)
        if arr.shape[1] != self._config.key_len:
            raise InvalidArgument(
                f"matrix must have {self._config.key_len} columns (key_len), got {arr.shape[1]}"
            )
        incr = _coerce_increment(increment)
        return self._update_batch(arr.tolist(), incr, "row")

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def get(self, combination: Any) -> Optional[CombinationRecord]:
        """Copy of the record for a combination, or None if never seen."""
        record = self._map.get(self._key_for(combination))
        return None if record is None else replace(record)

    def records(self) -> List[Tuple[Tuple[int, ...], CombinationRecord]]:
        """Snapshot of (combination, record) pairs in traversal order."""
        return [(key.values, replace(rec)) for key, rec in self._map.items()]

    def _snapshot(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        items = list(self._map.items())
        n = len(items)
        ids = np.fromiter((rec.id for _, rec in items), dtype=np.int64, count=n)
        weights = np.fromiter((rec.weight for _, rec in items), dtype=np.float64, count=n)
        keys = np.array([key.values for key, _ in items], dtype=np.int64)
        return ids, weights, keys.reshape(n, self._config.key_len)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def as_dataframe(self) -> pd.DataFrame:
        """
        One row per distinct combination.

        Columns: cmbid (int64), count (float64), then one int64 column per
        display name. Row order is unspecified.
        """
        ids, weights, keys = self._snapshot()
        data = {ID_COLUMN: ids, WEIGHT_COLUMN: weights}
        for j, name in enumerate(self._config.var_names):
            data[name] = keys[:, j]
        return pd.DataFrame(data, columns=list(self._config.columns))

    def as_matrix(self) -> CombinationMatrix:
        """Same cells as as_dataframe(), as one float64 matrix with labels."""
        ids, weights, keys = self._snapshot()
        values = np.empty((len(ids), self._config.n_columns), dtype=np.float64)
        values[:, 0] = ids
        values[:, 1] = weights
        values[:, 2:] = keys
        return CombinationMatrix(values=values, columns=self._config.columns)

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def summary(self) -> str:
        """Header plus column layout."""
        header = (f"CombinationTable: {len(self._map)} combinations, "
                  f"key_len {self._config.key_len}")
        return f"{header}\n  columns: {' '.join(self._config.columns)}"

    def show(self):
        print(self.summary())

    def __str__(self) -> str:
        return self.summary()

    def __repr__(self) -> str:
        return (f"CombinationTable(key_len={self._config.key_len}, "
                f"var_names={list(self._config.var_names)}, size={len(self._map)})")


__all__ = [
    'CombinationRecord',
    'CombinationTable',
]
