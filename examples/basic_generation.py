"""
Basic Lazy Generation Example

This example demonstrates:
1. Building a height map from a config
2. Generating one tile of a large grid
3. Generating a neighbouring tile that reuses shared ancestors
4. Checking that the result matches a full-grid generation

Run from the project root:
    python examples/basic_generation.py
"""

import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from lazy_diamond_square import HeightMap, HeightMapConfig, InitMode


def main():
    print("=" * 60)
    print("LAZY DIAMOND-SQUARE - EXAMPLE")
    print("=" * 60)

    # =========================================================================
    # Step 1: Build the height map
    # =========================================================================
    print("\n[1] Building height map...")

    config = HeightMapConfig(
        size=513,                    # 2^9 + 1 cells per side
        roughness=0.55,              # Displacement decay per level
        seed="qwerty",               # Reproducible results
        init_level=2,                # Pre-seed a 5x5 coarse grid
        init_mode=InitMode.SEED,
    )
    height_map = HeightMap(config)

    print(f"   Size: {height_map.size} x {height_map.size}")
    print(f"   Seed: {height_map.seed}")
    print(f"   Seeded cells: {height_map.resolved_count}")

    # =========================================================================
    # Step 2: Generate one tile
    # =========================================================================
    print("\n[2] Generating tile (0,0)-(63,63)...")

    computed = height_map.generate_area((0, 0), (63, 63))
    print(f"   Cells computed: {computed:,}")
    print(f"   Grid coverage: {height_map.statistics().coverage * 100:.2f}%")

    # =========================================================================
    # Step 3: Generate the neighbouring tile
    # =========================================================================
    print("\n[3] Generating tile (64,0)-(127,63)...")

    computed = height_map.generate_area((64, 0), (127, 63))
    print(f"   Cells computed: {computed:,} (shared ancestors reused)")

    # =========================================================================
    # Step 4: Compare with a full generation
    # =========================================================================
    print("\n[4] Comparing with a full-grid generation...")

    full = HeightMap(config)
    full.generate_all()

    tile = height_map.get_area((0, 0), (127, 63))
    reference = full.get_area((0, 0), (127, 63))
    print(f"   Identical: {np.array_equal(tile, reference)}")

    print("\n" + full.statistics().summary())


if __name__ == "__main__":
    main()
