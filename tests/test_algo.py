import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.grid import Grid
from maze_stepper.algo.region_merge import RegionMergeGenerator

class TestGenerators(unittest.TestCase):
    def test_region_merge_coverage(self):
        w, h = 12, 9
        grid = Grid(w, h, seed=42)
        algo = RegionMergeGenerator(grid)
        algo.run_all()

        self.assertEqual(algo.step_count, w * h - 1)
        self.assertEqual(len({cell.region for cell in grid.cells}), 1, "Every cell should end up in one region")
        self.assertTrue(grid.is_complete())

    def test_yields_one_status_per_step(self):
        grid = Grid(3, 2, seed=7)
        statuses = list(RegionMergeGenerator(grid).run())
        self.assertEqual(len(statuses), 6) # 5 edges + Done
        self.assertEqual(statuses[0], "Edges: 1/5")
        self.assertEqual(statuses[-1], "Done")

    def test_single_cell(self):
        grid = Grid(1, 1)
        statuses = list(RegionMergeGenerator(grid).run())
        self.assertEqual(statuses, ["Done"])

    def test_determinism(self):
        grid1 = Grid(10, 10, seed=12345)
        RegionMergeGenerator(grid1).run_all()

        grid2 = Grid(10, 10, seed=12345)
        for _ in RegionMergeGenerator(grid2).run(): pass

        self.assertEqual([c.walls for c in grid1.cells], [c.walls for c in grid2.cells])

    def test_advance_in_frames(self):
        grid = Grid(4, 3, seed=9)
        algo = RegionMergeGenerator(grid)

        self.assertTrue(algo.advance(5))
        self.assertEqual(grid.open_edge_count(), 5)
        self.assertTrue(algo.advance(6)) # 11 edges, "Done" not yet pulled
        self.assertEqual(grid.open_edge_count(), 11)
        self.assertFalse(algo.finished)

        self.assertTrue(algo.advance(1)) # pulls "Done"
        self.assertFalse(algo.advance(1))
        self.assertTrue(algo.finished)
        self.assertFalse(algo.advance(3))
        self.assertEqual(algo.step_count, 11)

if __name__ == '__main__':
    unittest.main()
