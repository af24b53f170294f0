import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.grid import Grid
from maze_stepper.algo.region_merge import RegionMergeGenerator
from maze_stepper.core.stats import MazeStats

def benchmark_size(cols: int, rows: int):
    print(f"\n--- Benchmarking {cols}x{rows} ({cols*rows:,} cells) ---")

    start_time = time.time()
    grid = Grid(cols, rows, seed=42)
    print(f"Grid Init: {time.time() - start_time:.4f}s")

    print("Generating...")
    algo = RegionMergeGenerator(grid)
    gen_start = time.time()
    algo.run_all()
    gen_time = time.time() - gen_start

    # Every step rescans the whole grid, so this grows roughly with cells^2
    print(f"Generation Time: {gen_time:.4f}s")
    print(f"Per Step: {gen_time / max(1, algo.step_count) * 1000:.3f} ms")
    print(f"Stats: {MazeStats.calculate_stats(grid)}")

def run_suite():
    sizes = [
        (10, 10),
        (20, 20),
        (40, 30),   # CLI default
        (64, 64),
    ]

    for cols, rows in sizes:
        benchmark_size(cols, rows)

if __name__ == "__main__":
    run_suite()
