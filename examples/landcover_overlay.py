"""
Example: Overlaying Categorical Grids

This example demonstrates how to use a CombinationTable to count the
unique combinations of cell values across several integer grids, such as
land cover, elevation class and ownership rasters read at the same extent.
"""

import logging

import numpy as np
from combination_index import CombinationTable, combine, value_count


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    rng = np.random.default_rng(2024)

    print("=" * 60)
    print("Combination Index - Grid Overlay Demo")
    print("=" * 60)
    print()

    # Example 1: Direct table use
    print("Example 1: Counting combinations by hand")
    print("-" * 60)

    m = np.array([
        [1, 2, 3, 1, 2, 3],
        [4, 5, 6, 1, 3, 2],
        [4, 5, 6, 1, 1, 1],
    ])
    table = CombinationTable(3, ["v1", "v2", "v3"])
    print(f"IDs for matrix columns: {table.update_from_matrix(m, 1)}")
    print(f"update((4, 5, 6)) -> {table.update((4, 5, 6), 1)}")
    print(f"update((1, 4, 4)) -> {table.update((1, 4, 4), 1)}")
    print()
    print(table.summary())
    print(table.as_dataframe().sort_values("cmbid").to_string(index=False))

    print("\n" + "=" * 60)
    print()

    # Example 2: Raster-style overlay
    print("Example 2: Overlay of three 100 x 120 grids")
    print("-" * 60)

    landcover = rng.integers(1, 6, size=(100, 120))
    elevation = rng.integers(1, 4, size=(100, 120))
    owner = rng.integers(1, 3, size=(100, 120))

    result = combine([landcover, elevation, owner], var_names=["lc", "elev", "own"])
    df = result.as_dataframe().sort_values("count", ascending=False)

    print(f"Distinct combinations: {len(result.table)}")
    print(f"Cells covered: {result.table.total_weight:.0f}")
    print("Top five combinations:")
    print(df.head().to_string(index=False))
    print(f"\nID grid corner:\n{result.ids[:3, :6]}")

    print("\nLand cover value counts:")
    print(value_count(landcover).to_string(index=False))


if __name__ == "__main__":
    main()
