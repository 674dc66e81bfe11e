import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'maze_pathfinder' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_pathfinder.algo.dfs import generate
from maze_pathfinder.algo.solvers import SOLVERS, get_solver
from maze_pathfinder.core.complexity import MazeAnalyzer
from maze_pathfinder.io.serializer import MazeSerializer

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def parse_cell(text: str):
    try:
        x, y = (int(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected X,Y but got {text!r}")
    return (x, y)

def default_endpoints(grid):
    """First and last open cells in row-major order."""
    open_cells = list(grid.open_cells())
    if not open_cells:
        return (0, 0), (grid.width - 1, grid.height - 1)
    return open_cells[0], open_cells[-1]

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Pathfinder: maze generation and BFS / A* search")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--width", type=int, default=21, help="Maze Width")
    gen_parser.add_argument("--height", type=int, default=21, help="Maze Height")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--format", choices=["json", "text"], default="json", help="Output format")
    gen_parser.add_argument("--out", type=str, help="Output file path (default: stdout)")
    gen_parser.add_argument("--visual", action="store_true", help="Open the maze in a window")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Find a path through a maze")
    solve_parser.add_argument("input_file", type=str, help="JSON maze matrix ('-' for stdin)")
    solve_parser.add_argument("--algo", type=str, default="bfs", choices=list(SOLVERS), help="Search Algorithm")
    solve_parser.add_argument("--start", type=parse_cell, help="Start cell X,Y (default: first open cell)")
    solve_parser.add_argument("--end", type=parse_cell, help="Goal cell X,Y (default: last open cell)")
    solve_parser.add_argument("--format", choices=["json", "text"], default="text", help="Output format")
    solve_parser.add_argument("--visual", action="store_true", help="Show the search in a window")

    # Serve Command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP backend")
    serve_parser.add_argument("--host", type=str, default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port")
    serve_parser.add_argument("--debug", action="store_true", help="Flask debug mode")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Compare BFS and A* on a generated maze")
    bench_parser.add_argument("--size", type=int, default=201, help="Maze Width and Height")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")

    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_pathfinder")

    if args.command is None:
        parser.print_help()
        return 0

    logger.debug(f"Running command: {args.command}")

    if args.command == "generate":
        if args.width <= 0 or args.height <= 0:
            parser.error("--width and --height must be positive")

        logger.info(f"Generating {args.width}x{args.height} maze...")
        grid = generate(args.width, args.height, seed=args.seed)

        if args.visual:
            from maze_pathfinder.viz.renderer import Renderer
            renderer = Renderer(grid)
            renderer.init_window()
            renderer.run_loop()
            # [G] may have swapped in a new maze; save the one last shown
            grid = renderer.grid

        logger.info(f"Stats: {MazeAnalyzer.calculate_stats(grid)}")

        out = open(args.out, "w") if args.out else sys.stdout
        try:
            if args.format == "json":
                MazeSerializer.dump(grid, out)
            else:
                out.write(MazeSerializer.to_text(grid) + "\n")
        finally:
            if args.out:
                out.close()
                logger.info(f"Saved maze to {args.out}")

    elif args.command == "solve":
        logger.info(f"Loading {args.input_file}...")
        try:
            if args.input_file == "-":
                grid = MazeSerializer.load(sys.stdin)
            else:
                with open(args.input_file) as f:
                    grid = MazeSerializer.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Could not load maze: {e}")
            return 1
        logger.info(f"Loaded {grid.width}x{grid.height} maze")

        default_start, default_end = default_endpoints(grid)
        start = args.start or default_start
        end = args.end or default_end
        for name, cell in (("start", start), ("end", end)):
            if not grid.in_bounds(*cell):
                logger.error(f"{name} {cell} is outside the {grid.width}x{grid.height} maze")
                return 1

        logger.info(f"Solving with {args.algo.upper()} from {tuple(start)} to {tuple(end)}...")
        solver = get_solver(args.algo, grid)
        path = solver.solve(start, end)
        logger.info(f"Expanded {solver.expanded_count} cells, discovered {len(solver.visited_cells)}")

        if args.visual:
            # Viewer only: the reported path is the one computed above
            from maze_pathfinder.viz.renderer import Renderer
            renderer = Renderer(grid.copy(), algo=args.algo)
            renderer.handle_click(start)
            renderer.handle_click(end)
            renderer.init_window()
            renderer.start_search()
            renderer.run_loop()

        if path:
            logger.info(f"Path Length: {len(path)}")
        else:
            logger.info("No path found")

        if args.format == "json":
            import json
            print(json.dumps({"path": MazeSerializer.path_to_json(path)}))
        else:
            print(MazeSerializer.to_text(grid, path, start=start, goal=end))
        return 0 if path else 2

    elif args.command == "serve":
        from maze_pathfinder.web.app import create_app
        app = create_app()
        logger.info(f"Server starting on {args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=args.debug)

    elif args.command == "benchmark":
        if args.size <= 0:
            parser.error("--size must be positive")

        logger.info(f"Running Solver Benchmark (Size: {args.size}x{args.size})...")

        t0 = time.time()
        grid = generate(args.size, args.size, seed=args.seed)
        logger.info(f"Generation complete in {time.time()-t0:.4f}s")

        start_pos, end_pos = default_endpoints(grid)

        print(f"\n{'ALGORITHM':<10} | {'TIME (s)':<10} | {'PATH LEN':<10} | {'VISITED':<10} | {'EXPANDED':<10}")
        print("-" * 62)

        for name in SOLVERS:
            s = get_solver(name, grid)

            t_start = time.time()
            s.solve(start_pos, end_pos)
            duration = time.time() - t_start

            print(f"{name:<10} | {duration:<10.4f} | {len(s.path):<10} | {len(s.visited_cells):<10} | {s.expanded_count:<10}")

    return 0

if __name__ == "__main__":
    sys.exit(main())
