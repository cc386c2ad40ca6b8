# combination_index/constants.py
"""
Combination Index Constants

This module defines constants used throughout the combination index:

KEY HASHING
- HASH_GOLDEN: Golden-ratio increment mixed into every hash_combine step
- HASH_MASK64: Hashes are folded modulo 2^64 (size_t width)
- HASH_SEED: Initial fold value

NAMING
- DEFAULT_NAME_PREFIX: Prefix for synthesized display names (V1..Vn)
- ID_COLUMN / WEIGHT_COLUMN: Leading export columns
- VALUE_COLUMN / COUNT_COLUMN: value_count() export columns

RANGES
- INT64_MIN / INT64_MAX: Bounds of a key component
"""


# =============================================================================
# KEY HASHING (Boost hash_combine)
# =============================================================================

HASH_GOLDEN = 0x9E3779B9
HASH_MASK64 = 0xFFFFFFFFFFFFFFFF
HASH_SEED = 0


# =============================================================================
# NAMING
# =============================================================================

DEFAULT_NAME_PREFIX = "V"

# Export columns, in order: identity, weight, then key components
ID_COLUMN = "cmbid"
WEIGHT_COLUMN = "count"
RESERVED_COLUMNS = (ID_COLUMN, WEIGHT_COLUMN)

VALUE_COLUMN = "VALUE"
COUNT_COLUMN = "COUNT"

# Identity counter value before any combination has been seen
NO_ID = 0

# Components are stored as int64 in exports
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
