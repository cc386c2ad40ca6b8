"""
Grid Overlay - combinations across stacked integer grids

combine() overlays key_len integer grids of identical shape (for example
raster bands already read into memory) and counts every distinct
combination of cell values. Each cell also gets the identity of its
combination, producing an identity grid of the input shape.

Scan Pattern:
    The grids are scanned one row at a time. Row y of every grid is stacked
    into a (key_len, ncols) matrix whose columns are the per-cell
    combinations, then passed to CombinationTable.update_from_matrix():

        grid a row y:  [1, 1, 2]
        grid b row y:  [5, 6, 5]
                        ↓  ↓  ↓
        combinations: (1,5) (1,6) (2,5)

value_count() is the single-grid case: distinct values and their counts.
"""

from __future__ import annotations
from typing import Any, Optional, Sequence
from dataclasses import dataclass
import logging

import numpy as np
import pandas as pd

from .constants import COUNT_COLUMN, VALUE_COLUMN, WEIGHT_COLUMN
from .errors import InvalidArgument
from .key import coerce_matrix
from .table import CombinationTable

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class CombineResult:
    """
    Result of a grid overlay.

    Attributes:
        table: Combination counts (one weight unit per cell by default)
        ids: int64 grid, same shape as the inputs, holding each cell's cmbid
    """
    table: CombinationTable
    ids: np.ndarray

    def as_dataframe(self) -> pd.DataFrame:
        return self.table.as_dataframe()


def combine(
    grids: Sequence[Any],
    var_names: Optional[Sequence[str]] = None,
    increment: float = 1.0,
) -> CombineResult:
    """
    Count unique combinations of cell values across equally shaped grids.

    Args:
        grids: One 2-D integer array per variable, all of the same shape
        var_names: Display names, one per grid (default V1..Vn)
        increment: Weight added per cell

    Returns:
        CombineResult with the table and the per-cell identity grid

    Raises:
        InvalidArgument: no grids, a grid that is not 2-D integer-like,
            mismatched shapes, or a var_names length mismatch

    Example:
        >>> a = np.array([[1, 1], [2, 2]])
        >>> b = np.array([[5, 5], [5, 6]])
        >>> result = combine([a, b], var_names=['a', 'b'])
        >>> result.ids
        array([[1, 1],
               [2, 3]])
    """
    arrays = [coerce_matrix(g) for g in grids]
    if not arrays:
        raise InvalidArgument("at least one grid is required")

    shape = arrays[0].shape
    for i, arr in enumerate(arrays[1:], start=2):
        if arr.shape != shape:
            raise InvalidArgument(f"grid {i} has shape {arr.shape}, expected {shape}")

    table = CombinationTable(len(arrays), var_names)
    nrows, ncols = shape
    ids = np.zeros(shape, dtype=np.int64)

    if len(arrays) == 1:
        logger.info("Scanning grid (%d x %d)", nrows, ncols)
    else:
        logger.info("Combining %d grids (%d x %d)", len(arrays), nrows, ncols)

    rowdata = np.empty((len(arrays), ncols), dtype=np.int64)
    for y in range(nrows):
        for i, arr in enumerate(arrays):
            rowdata[i] = arr[y]
        ids[y] = table.update_from_matrix(rowdata, increment)

    logger.info("Found %d distinct combinations", len(table))
    return CombineResult(table=table, ids=ids)


def value_count(grid: Any) -> pd.DataFrame:
    """
    Distinct values of an integer grid and how often each occurs.

    Returns:
        DataFrame with columns VALUE (int64) and COUNT (float64), sorted by
        VALUE
    """
    try:
        flat = np.asarray(grid).reshape(1, -1)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"grid could not be converted to an array: {exc}") from exc

    table = CombinationTable(1, [VALUE_COLUMN])
    table.update_from_matrix(coerce_matrix(flat))

    counts = table.as_dataframe()
    out = pd.DataFrame({
        VALUE_COLUMN: counts[VALUE_COLUMN].to_numpy(),
        COUNT_COLUMN: counts[WEIGHT_COLUMN].to_numpy(),
    })
    return out.sort_values(VALUE_COLUMN, kind='stable').reset_index(drop=True)


__all__ = [
    'CombineResult',
    'combine',
    'value_count',
]
