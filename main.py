"""
main.py — Bootstrap

1. Load tuning
2. Create the app
3. Push the maze scene
4. Run

    python main.py            # random run
    python main.py 1234       # reproducible run with seed 1234
"""

import sys

from core import tuning
from core.app import App
from scenes.maze_scene import MazeScene


def main(argv: list[str] | None = None):
    argv = sys.argv[1:] if argv is None else argv
    seed = int(argv[0]) if argv else None

    tuning.load()
    app = App(title="Maze Chase", width=960, height=640)
    app.push_scene(MazeScene(seed=seed))
    app.run()


if __name__ == "__main__":
    main()
