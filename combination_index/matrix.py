"""
Labeled numeric matrix export.

CombinationMatrix is the homogeneous view of a table: every cell, including
identities and weights, is float64. Column labels ride along as metadata,
in the same order as the DataFrame export.
"""

from __future__ import annotations
from typing import Optional, Tuple
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .errors import InvalidArgument


@dataclass(frozen=True, eq=False)
class CombinationMatrix:
    """
    Float64 matrix of shape (combinations, key_len + 2) with column labels.

    Rows follow the table's internal traversal order, which is unspecified;
    sort on the first column when a stable order is needed.
    """
    values: np.ndarray
    columns: Tuple[str, ...]

    def __post_init__(self):
        if self.values.ndim != 2 or self.values.shape[1] != len(self.columns):
            raise InvalidArgument(
                f"values shape {self.values.shape} does not match {len(self.columns)} columns"
            )

    @property
    def shape(self) -> Tuple[int, int]:
        return self.values.shape

    def __len__(self) -> int:
        return self.values.shape[0]

    def __array__(self, dtype=None, copy: Optional[bool] = None) -> np.ndarray:
        needs_cast = dtype is not None and np.dtype(dtype) != self.values.dtype
        if copy is False and needs_cast:
            raise ValueError(f"cannot convert {self.values.dtype} to {np.dtype(dtype)} without a copy")
        if needs_cast:
            return self.values.astype(dtype)
        if copy:
            return self.values.copy()
        return self.values

    def column(self, name: str) -> np.ndarray:
        """Copy of one column, by label."""
        try:
            idx = self.columns.index(name)
        except ValueError:
            raise KeyError(name) from None
        return self.values[:, idx].copy()

    def to_dataframe(self) -> pd.DataFrame:
        """Same cells as a DataFrame (all float64)."""
        return pd.DataFrame(self.values, columns=list(self.columns))

    @classmethod
    def empty(cls, columns: Tuple[str, ...]) -> 'CombinationMatrix':
        """Zero-row matrix with the given labels."""
        return cls(values=np.empty((0, len(columns)), dtype=np.float64), columns=tuple(columns))


__all__ = [
    'CombinationMatrix',
]
