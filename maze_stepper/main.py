import argparse
import sys
import os
import logging
import datetime

# Ensure project root is in path so we can import 'maze_stepper' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def recording_path(prefix: str) -> str:
    if not os.path.exists("recordings"):
        os.makedirs("recordings")
    ts = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join("recordings", f"{prefix}_{ts}.mp4")

def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Stepper: animated step-by-step maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--cols", type=int, default=40, help="Maze width in cells")
    gen_parser.add_argument("--rows", type=int, default=30, help="Maze height in cells")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--visual", action="store_true", help="Animate generation in a window")
    gen_parser.add_argument("--steps-per-frame", type=positive_int, default=1, help="Generation steps per rendered frame")
    gen_parser.add_argument("--fps", type=int, default=60, help="Frame rate cap for the animation")
    gen_parser.add_argument("--out", type=str, help="Output maze file path (optional)")
    gen_parser.add_argument("--compress", action="store_true", help="zlib-compress the output file")
    gen_parser.add_argument("--record-events", type=str, help="Save generation events to binary file")
    gen_parser.add_argument("--record", action="store_true", help="Record generation video")

    # Replay Command
    replay_parser = subparsers.add_parser("replay", help="Replay an event log")
    replay_parser.add_argument("event_file", help="Path to event log file")
    replay_parser.add_argument("--steps-per-frame", type=positive_int, default=1, help="Events applied per rendered frame")
    replay_parser.add_argument("--fps", type=int, default=60, help="Frame rate cap for the animation")
    replay_parser.add_argument("--record", action="store_true", help="Record video")

    # Info Command
    info_parser = subparsers.add_parser("info", help="Print statistics for a saved maze")
    info_parser.add_argument("input_file", help="Path to maze file")

    return parser

def cmd_generate(args, logger):
    from maze_stepper.core.events import EventWriter
    from maze_stepper.core.grid import Grid
    from maze_stepper.algo.region_merge import RegionMergeGenerator
    from maze_stepper.core.stats import MazeStats

    logger.info(f"Generating {args.cols}x{args.rows} maze (seed={args.seed})...")

    # Grid validates the dimensions before any output file is created
    grid = Grid(args.cols, args.rows, seed=args.seed)

    evt_writer = None
    if args.record_events:
        evt_writer = EventWriter(args.record_events)
        # Header written manually since the grid already exists
        evt_writer.write_header(grid.cols, grid.rows, grid.seed_index)
        grid.event_writer = evt_writer
        logger.info(f"Recording events to {args.record_events}...")

    try:
        generator = RegionMergeGenerator(grid)

        if args.visual or args.record:
            logger.info("Visual mode enabled - Opening window...")
            from maze_stepper.viz.renderer import Renderer
            renderer = Renderer(grid, generator=generator, fps=args.fps,
                                steps_per_frame=args.steps_per_frame, record=args.record)
            if args.record:
                renderer.recorder.output_file = recording_path(f"gen_{args.cols}x{args.rows}")
                logger.info(f"Recording video to {renderer.recorder.output_file}")

            renderer.init_window()
            renderer.run_loop()
        else:
            logger.info("Headless generation...")
            generator.run_all()
    finally:
        if evt_writer:
            evt_writer.close()

    stats = MazeStats.calculate_stats(grid)
    logger.info(f"Stats: {stats}")

    if args.out:
        logger.info(f"Saving maze to {args.out}...")
        from maze_stepper.io.serializer import MazeSerializer
        meta = {"algo": "region_merge", "seed": args.seed, "complete": grid.is_complete()}
        MazeSerializer.save(grid, args.out, meta=meta, compress=args.compress)
        logger.info("Save complete.")

def cmd_replay(args, logger):
    from maze_stepper.core.events import EventReader
    from maze_stepper.core.grid import Grid
    from maze_stepper.viz.replay import EventAdapter
    from maze_stepper.viz.renderer import Renderer

    logger.info(f"Replaying {args.event_file}...")
    with EventReader(args.event_file) as reader:
        cols, rows, seed_index = reader.read_header()
        logger.info(f"Log Header: {cols}x{rows}, seed cell {seed_index}")

        grid = Grid(cols, rows, seed_index=seed_index)
        adapter = EventAdapter(grid, reader)
        renderer = Renderer(grid, generator=adapter, fps=args.fps,
                            steps_per_frame=args.steps_per_frame, record=args.record)

        if args.record:
            base_name = os.path.basename(args.event_file).replace(".events", "")
            renderer.recorder.output_file = recording_path(f"replay_{base_name}")
            logger.info(f"Recording replay to {renderer.recorder.output_file}")

        renderer.init_window()
        renderer.run_loop()

def cmd_info(args, logger):
    from maze_stepper.io.serializer import MazeSerializer
    from maze_stepper.core.stats import MazeStats

    logger.info(f"Loading {args.input_file}...")
    grid, meta = MazeSerializer.load(args.input_file)
    logger.info(f"Loaded {grid.cols}x{grid.rows} maze. Meta: {meta}")

    stats = MazeStats.calculate_stats(grid)
    for key, value in stats.items():
        print(f"{key:<18} {value}")

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_stepper")

    if args.command is None:
        parser.print_help()
        return

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        from maze_stepper.core.grid import InvalidDimensionError
        try:
            cmd_generate(args, logger)
        except InvalidDimensionError as e:
            parser.error(str(e))
    elif args.command == "replay":
        cmd_replay(args, logger)
    elif args.command == "info":
        cmd_info(args, logger)

if __name__ == "__main__":
    main()
