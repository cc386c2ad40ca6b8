"""
Tests for CombinationKey, hash_combine and input coercion
"""

import pytest
import numpy as np

from combination_index import CombinationKey, InvalidArgument, PreconditionViolation, hash_combine
from combination_index.key import coerce_combination, coerce_matrix


class TestHashCombine:
    def test_empty_is_seed(self):
        assert hash_combine([]) == 0
        assert hash_combine([], seed=7) == 7

    def test_single_component(self):
        # 0 ^ ((1 + 0x9e3779b9) + (0 << 6) + (0 >> 2))
        assert hash_combine([1]) == 0x9E3779BA

    def test_negative_component_wraps(self):
        assert hash_combine([-1]) == 0x9E3779B8

    def test_order_sensitive(self):
        assert hash_combine([1, 2]) != hash_combine([2, 1])

    def test_high_bits_change_hash(self):
        assert hash_combine([1]) != hash_combine([1 + 2 ** 32])
        assert hash_combine([0, 5]) != hash_combine([2 ** 40, 5])

    def test_wide_components_hash_apart(self):
        hashes = {hash_combine([k << 32]) for k in range(1000)}
        assert len(hashes) == 1000

    def test_fits_in_64_bits(self):
        h = hash_combine([2 ** 40, -(2 ** 40), 123456789] * 20)
        assert 0 <= h < 2 ** 64


class TestCombinationKey:
    def test_equal_keys(self):
        a = CombinationKey([1, 2, 3])
        b = CombinationKey((1, 2, 3))
        assert a == b
        assert hash(a) == hash(b)

    def test_unequal_keys(self):
        assert CombinationKey([1, 2]) != CombinationKey([2, 1])

    def test_sequence_behaviour(self):
        key = CombinationKey(np.array([4, 5, 6]))
        assert key.arity == 3
        assert len(key) == 3
        assert list(key) == [4, 5, 6]
        assert key[1] == 5
        assert key.values == (4, 5, 6)

    def test_values_are_python_ints(self):
        key = CombinationKey(np.array([1, 2], dtype=np.int32))
        assert all(type(v) is int for v in key.values)

    def test_mismatched_arity_comparison_raises(self):
        with pytest.raises(PreconditionViolation):
            CombinationKey([1]) == CombinationKey([1, 2])

    def test_compare_with_other_type(self):
        assert CombinationKey([1, 2]) != (1, 2)

    def test_usable_as_dict_key(self):
        counts = {CombinationKey([1, 2]): 1}
        assert CombinationKey([1, 2]) in counts
        assert CombinationKey([2, 1]) not in counts

    def test_repr(self):
        assert repr(CombinationKey([1, -2])) == "CombinationKey([1, -2])"


class TestCoercion:
    def test_truncates_reals_toward_zero(self):
        assert coerce_combination([1.9, -2.7, 3]) == (1, -2, 3)

    def test_numpy_scalars_and_bools(self):
        assert coerce_combination([np.int16(3), np.float32(2.5), True]) == (3, 2, 1)

    def test_rejects_string(self):
        with pytest.raises(InvalidArgument):
            coerce_combination("12")

    def test_rejects_non_numeric_component(self):
        with pytest.raises(InvalidArgument):
            coerce_combination([1, "a"])

    def test_rejects_scalar(self):
        with pytest.raises(InvalidArgument):
            coerce_combination(5)

    def test_rejects_non_finite(self):
        with pytest.raises(InvalidArgument):
            coerce_combination([1, float("nan")])
        with pytest.raises(InvalidArgument):
            coerce_combination([float("inf")])

    def test_rejects_out_of_range(self):
        with pytest.raises(InvalidArgument):
            coerce_combination([2 ** 63])

    def test_rejects_2d_array(self):
        with pytest.raises(InvalidArgument):
            coerce_combination(np.zeros((2, 2), dtype=int))

    def test_matrix_float_truncation(self):
        out = coerce_matrix([[1.5, -2.5], [3.0, 4.99]])
        assert out.dtype == np.int64
        np.testing.assert_array_equal(out, [[1, -2], [3, 4]])

    def test_matrix_integer_cast(self):
        out = coerce_matrix(np.array([[1, 2]], dtype=np.uint8))
        assert out.dtype == np.int64

    def test_matrix_must_be_2d(self):
        with pytest.raises(InvalidArgument):
            coerce_matrix([1, 2, 3])

    def test_matrix_rejects_nan(self):
        with pytest.raises(InvalidArgument):
            coerce_matrix([[1.0, np.nan]])

    def test_matrix_rejects_strings(self):
        with pytest.raises(InvalidArgument):
            coerce_matrix([["a", "b"]])

    def test_matrix_rejects_ragged(self):
        with pytest.raises(InvalidArgument):
            coerce_matrix([[1, 2], [3]])
