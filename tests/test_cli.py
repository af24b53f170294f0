import unittest
import sys
import os
import shutil
from unittest import mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.main import main, build_parser
from maze_stepper.io.serializer import MazeSerializer
from maze_stepper.core.events import EventReader

class TestCLI(unittest.TestCase):
    def setUp(self):
        self.out_dir = os.path.join(os.path.dirname(__file__), "test_out_cli")
        os.makedirs(self.out_dir, exist_ok=True)

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def test_defaults(self):
        args = build_parser().parse_args(["generate"])
        self.assertEqual((args.cols, args.rows), (40, 30))
        self.assertEqual(args.steps_per_frame, 1)
        self.assertFalse(args.visual)

    def test_headless_generate_and_info(self):
        maze_path = os.path.join(self.out_dir, "cli.maze")
        events_path = os.path.join(self.out_dir, "cli.events")
        main(["generate", "--cols", "6", "--rows", "4", "--seed", "5",
              "--out", maze_path, "--record-events", events_path, "--compress"])

        grid, meta = MazeSerializer.load(maze_path)
        self.assertEqual((grid.cols, grid.rows), (6, 4))
        self.assertEqual(meta["seed"], 5)
        self.assertTrue(meta["complete"])
        self.assertEqual(grid.open_edge_count(), 23)

        with EventReader(events_path) as reader:
            self.assertEqual(reader.read_header(), (6, 4, grid.seed_index))
            self.assertEqual(len(list(reader.stream_events())), 23)

        with mock.patch("builtins.print") as fake_print:
            main(["info", maze_path])
        printed = " ".join(str(c.args[0]) for c in fake_print.call_args_list)
        self.assertIn("edges_opened", printed)

    def test_invalid_dimensions_exit(self):
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                main(["generate", "--cols", "0", "--rows", "3"])

    def test_invalid_dimensions_leave_no_event_log(self):
        events_path = os.path.join(self.out_dir, "bad.events")
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                main(["generate", "--cols", "0", "--rows", "3", "--record-events", events_path])
        self.assertFalse(os.path.exists(events_path))

    def test_steps_per_frame_must_be_positive(self):
        parser = build_parser()
        for value in ["0", "-3"]:
            with mock.patch("sys.stderr"):
                with self.assertRaises(SystemExit):
                    parser.parse_args(["generate", "--steps-per-frame", value])
                with self.assertRaises(SystemExit):
                    parser.parse_args(["replay", "x.events", "--steps-per-frame", value])
        self.assertEqual(parser.parse_args(["generate", "--steps-per-frame", "5"]).steps_per_frame, 5)

if __name__ == '__main__':
    unittest.main()
