"""
Table configuration.

TableConfig is the validated, immutable description of a table's layout:
its arity and the display names bound to each key position. Display names
are metadata only; they label export columns and never take part in key
equality, hashing or identity assignment.
"""

from __future__ import annotations
from typing import Optional, Sequence, Tuple
from dataclasses import dataclass
import numbers

from .constants import DEFAULT_NAME_PREFIX, RESERVED_COLUMNS
from .errors import InvalidArgument


def default_names(key_len: int, prefix: str = DEFAULT_NAME_PREFIX) -> Tuple[str, ...]:
    """Synthesize display names prefix1..prefixN."""
    return tuple(f"{prefix}{i}" for i in range(1, key_len + 1))


@dataclass(frozen=True)
class TableConfig:
    """
    Configuration for a CombinationTable.

    Attributes:
        key_len: Arity of every combination (positive integer)
        var_names: Display names, one per key position. None synthesizes
            prefix1..prefixN.
        name_prefix: Prefix used when names are synthesized

    Example:
        >>> TableConfig(3).var_names
        ('V1', 'V2', 'V3')
        >>> TableConfig(2, ['landcover', 'zone']).columns
        ('cmbid', 'count', 'landcover', 'zone')
    """
    key_len: int
    var_names: Optional[Sequence[str]] = None
    name_prefix: str = DEFAULT_NAME_PREFIX

    def __post_init__(self):
        """Validate configuration and resolve display names."""
        if isinstance(self.key_len, bool) or not isinstance(self.key_len, numbers.Integral):
            raise InvalidArgument(f"key_len must be a positive integer, got {self.key_len!r}")
        if self.key_len < 1:
            raise InvalidArgument(f"key_len must be a positive integer, got {self.key_len}")
        object.__setattr__(self, 'key_len', int(self.key_len))

        if self.var_names is None:
            names = default_names(self.key_len, self.name_prefix)
        else:
            if isinstance(self.var_names, str):
                raise InvalidArgument("var_names must be a sequence of names, got a string")
            names = tuple(str(n) for n in self.var_names)
            if len(names) != self.key_len:
                raise InvalidArgument(
                    f"key_len must equal length of var_names ({self.key_len} != {len(names)})"
                )

        if len(set(names)) != len(names):
            raise InvalidArgument(f"var_names must be unique, got {list(names)}")
        clashes = [n for n in names if n in RESERVED_COLUMNS]
        if clashes:
            raise InvalidArgument(
                f"var_names may not use reserved column names {list(RESERVED_COLUMNS)}: {clashes}"
            )
        object.__setattr__(self, 'var_names', names)

    @property
    def columns(self) -> Tuple[str, ...]:
        """Export column labels: identity, weight, then key components."""
        return RESERVED_COLUMNS + tuple(self.var_names)

    @property
    def n_columns(self) -> int:
        return self.key_len + len(RESERVED_COLUMNS)


__all__ = [
    'default_names',
    'TableConfig',
]
