import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'maze_carver' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def load_mask(path: str):
    from maze_carver.core.mask import BitmapMask
    if path.endswith(".txt"):
        with open(path, "r", encoding="utf-8") as f:
            return BitmapMask.from_text(f.read())
    return BitmapMask.from_image_file(path)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Carver: masked maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--width", type=int, default=20, help="Maze Width")
    gen_parser.add_argument("--height", type=int, default=10, help="Maze Height")
    gen_parser.add_argument("--mask", type=str, help="Mask file (.txt grid of '.', or an image with transparent passable pixels)")
    gen_parser.add_argument("--randomness", type=int, default=100, help="Randomness 0-100 (lower = straighter corridors)")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--sparsify", type=int, default=0, help="Number of dead-end removal passes")
    gen_parser.add_argument("--mode", type=str, default="ascii", choices=["ascii", "utf8_halls", "utf8_lines"], help="Text rendering mode")
    gen_parser.add_argument("--png", type=str, help="Also write a PNG image to this path")
    gen_parser.add_argument("--cell-size", type=int, default=10, help="PNG pixels per cell")
    gen_parser.add_argument("--visual", action="store_true", help="Watch generation in a window")
    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_carver")

    if args.command is None:
        parser.print_help()
        return

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        from maze_carver.core.grid import Grid
        from maze_carver.algo.dfs import RecursiveBacktracker

        mask = None
        if args.mask:
            logger.info(f"Loading mask from {args.mask}...")
            mask = load_mask(args.mask)

        logger.info(f"Generating {args.width}x{args.height} maze (randomness={args.randomness})...")
        grid = Grid(args.width, args.height)
        generator = RecursiveBacktracker(grid, mask=mask, randomness=args.randomness, seed=args.seed)

        if args.visual:
            logger.info("Visual mode enabled - Opening window...")
            from maze_carver.viz.viewer import Viewer
            viewer = Viewer(grid, generator=generator)
            viewer.init_window()
            viewer.run_loop()
            if not generator.generated:
                logger.warning("Window closed before generation finished; output is partial.")
        else:
            carved = generator.run_all()
            logger.info(f"Carved {carved} passages.")

        if args.sparsify > 0:
            from maze_carver.core.complexity import MazePostProcessor
            for _ in range(args.sparsify):
                removed = MazePostProcessor.sparsify(grid)
                logger.info(f"Sparsify pass removed {removed} dead ends.")
            logger.info(f"Stats: {MazePostProcessor.calculate_stats(grid)}")

        from maze_carver.io.text import render
        sys.stdout.write(render(grid, args.mode))

        if args.png:
            from maze_carver.io.png import export
            logger.info(f"Saving PNG to {args.png}...")
            blob = export(grid, "png", {"cell_size": args.cell_size, "cell_padding": max(0, (args.cell_size - 1) // 4)})
            with open(args.png, "wb") as f:
                f.write(blob)
            logger.info("Save complete.")

if __name__ == "__main__":
    main()
