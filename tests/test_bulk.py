"""
Tests for bulk upsert (column-major and row-major)
"""

import logging

import pytest
import numpy as np

from combination_index import CombinationTable, InvalidArgument


def _state(table):
    return sorted((key, rec.id, rec.weight) for key, rec in table.records())


class TestUpdateFromMatrix:
    def test_columns_are_combinations(self):
        m = np.array([
            [1, 2, 3, 1, 2, 3],
            [4, 5, 6, 1, 3, 2],
            [4, 5, 6, 1, 1, 1],
        ])
        table = CombinationTable(3, ["v1", "v2", "v3"])
        ids = table.update_from_matrix(m, 1)
        np.testing.assert_array_equal(ids, [1, 2, 3, 4, 5, 6])
        assert ids.dtype == np.int64

        assert table.update((4, 5, 6), 1) == 7
        assert table.update((1, 4, 4), 1) == 1
        assert table.get((1, 4, 4)).weight == 2.0

    def test_repeated_columns_share_identity(self):
        m = np.array([[1, 2, 1, 1], [9, 8, 9, 9]])
        table = CombinationTable(2)
        ids = table.update_from_matrix(m, 0.5)
        np.testing.assert_array_equal(ids, [1, 2, 1, 1])
        assert table.get((1, 9)).weight == 1.5
        assert table.get((2, 8)).weight == 0.5

    def test_wrong_row_count_leaves_table_empty(self):
        table = CombinationTable(2)
        with pytest.raises(InvalidArgument):
            table.update_from_matrix(np.ones((3, 5), dtype=int), 1.0)
        assert len(table) == 0
        assert table.last_id == 0

    def test_not_2d(self):
        table = CombinationTable(2)
        with pytest.raises(InvalidArgument):
            table.update_from_matrix([1, 2], 1.0)

    def test_bad_increment_applies_nothing(self):
        table = CombinationTable(2)
        with pytest.raises(InvalidArgument):
            table.update_from_matrix([[1, 2], [3, 4]], "x")
        assert len(table) == 0

    def test_float_matrix_truncated(self):
        table = CombinationTable(2)
        ids = table.update_from_matrix([[1.2, 1.8], [2.9, 2.1]])
        np.testing.assert_array_equal(ids, [1, 1])
        assert table.get((1, 2)).weight == 2.0

    def test_no_columns(self):
        table = CombinationTable(2)
        ids = table.update_from_matrix(np.empty((2, 0), dtype=int))
        assert ids.shape == (0,)
        assert len(table) == 0

    def test_batch_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="combination_index.table")
        table = CombinationTable(1)
        table.update_from_matrix([[1, 2, 2]])
        assert "Applied 3 combinations by column (2 new" in caplog.text


class TestUpdateFromMatrixByRow:
    def test_rows_are_combinations(self):
        m = np.array([[1, 4], [2, 5], [1, 4]])
        table = CombinationTable(2)
        ids = table.update_from_matrix_by_row(m, 2.0)
        np.testing.assert_array_equal(ids, [1, 2, 1])
        assert table.get((1, 4)).weight == 4.0

    def test_wrong_column_count(self):
        table = CombinationTable(2)
        with pytest.raises(InvalidArgument):
            table.update_from_matrix_by_row(np.ones((5, 3), dtype=int))
        assert len(table) == 0

    def test_transpose_equivalence(self):
        rng = np.random.default_rng(0)
        n = rng.integers(0, 3, size=(3, 200))

        by_col = CombinationTable(3)
        by_row = CombinationTable(3)
        ids_col = by_col.update_from_matrix(n, 1.5)
        ids_row = by_row.update_from_matrix_by_row(n.T, 1.5)

        np.testing.assert_array_equal(ids_col, ids_row)
        assert _state(by_col) == _state(by_row)


class TestBulkSingleEquivalence:
    def test_same_final_state(self):
        rng = np.random.default_rng(42)
        m = rng.integers(-2, 2, size=(2, 300))

        bulk = CombinationTable(2)
        single = CombinationTable(2)
        ids_bulk = bulk.update_from_matrix(m, 0.25)
        ids_single = [single.update(m[:, k], 0.25) for k in range(m.shape[1])]

        np.testing.assert_array_equal(ids_bulk, ids_single)
        assert _state(bulk) == _state(single)
        assert bulk.last_id == single.last_id == len(bulk)

    def test_batches_continue_identity_counter(self):
        table = CombinationTable(1)
        table.update_from_matrix([[1, 2]])
        ids = table.update_from_matrix_by_row([[3], [1], [4]])
        np.testing.assert_array_equal(ids, [3, 1, 4])
        assert table.last_id == 4


class TestWideComponents:
    def test_keys_differing_above_32_bits(self):
        m = (np.arange(2000, dtype=np.int64) << 32).reshape(1, -1)
        table = CombinationTable(1)
        ids = table.update_from_matrix(m)
        np.testing.assert_array_equal(ids, np.arange(1, 2001))
        assert table.get([1999 << 32]).id == 2000
