import unittest
import sys
import os
import shutil

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.grid import Grid
from maze_stepper.core.events import EventWriter, EventReader, EVT_CARVE
from maze_stepper.algo.region_merge import RegionMergeGenerator
from maze_stepper.viz.replay import EventAdapter

class TestEvents(unittest.TestCase):
    def setUp(self):
        self.out_dir = os.path.join(os.path.dirname(__file__), "test_out_events")
        os.makedirs(self.out_dir, exist_ok=True)

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def record(self, cols, rows, seed):
        path = os.path.join(self.out_dir, "gen.events")
        with EventWriter(path) as writer:
            grid = Grid(cols, rows, seed=seed, event_writer=writer)
            RegionMergeGenerator(grid).run_all()
            self.assertEqual(writer.event_count, cols * rows - 1)
        return grid, path

    def test_header_and_stream(self):
        grid, path = self.record(5, 4, seed=21)
        with EventReader(path) as reader:
            self.assertEqual(reader.read_header(), (5, 4, grid.seed_index))
            events = list(reader.stream_events())
        self.assertEqual(len(events), 19)
        self.assertTrue(all(code == EVT_CARVE for code, _ in events))

    def test_replay_rebuilds_maze(self):
        grid, path = self.record(6, 6, seed=77)

        with EventReader(path) as reader:
            cols, rows, seed_index = reader.read_header()
            replayed = Grid(cols, rows, seed_index=seed_index)
            redrawn = []
            replayed.add_redraw_listener(redrawn.append)
            adapter = EventAdapter(replayed, reader)
            adapter.run_all()

        self.assertEqual(adapter.step_count, 35)
        self.assertEqual(len(redrawn), 70)
        self.assertEqual([c.walls for c in grid.cells], [c.walls for c in replayed.cells])
        self.assertEqual(len({c.region for c in replayed.cells}), 1)
        self.assertTrue(replayed.cells[grid.seed_index].seed)
        self.assertFalse(replayed.step())

    def test_invalid_magic(self):
        path = os.path.join(self.out_dir, "bad.events")
        with open(path, "wb") as f:
            f.write(b"NOTALOG" + bytes(12))
        with EventReader(path) as reader:
            with self.assertRaises(ValueError):
                reader.read_header()

    def test_unknown_event_type(self):
        path = os.path.join(self.out_dir, "unknown.events")
        with EventWriter(path) as writer:
            writer.write_header(2, 2, 0)
            writer.file.write(b"\x7f")
        with EventReader(path) as reader:
            reader.read_header()
            with self.assertRaises(ValueError):
                list(reader.stream_events())

if __name__ == '__main__':
    unittest.main()
