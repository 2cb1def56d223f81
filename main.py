"""
main.py — Bootstrap

1. Load tuning
2. Load the level
3. Build the sim (bad anchors stop here)
4. Push the escape scene
5. Run
"""

import sys

from core import tuning
from core.app import App
from core.grid import PlacementError
from core.level import load_level
from scenes.escape_scene import EscapeScene, PANEL_W
from simulation.world_sim import create_sim


def main() -> int:
    tuning.load()
    level = load_level(sys.argv[1] if len(sys.argv) > 1 else None)

    sim = create_sim(level)
    if isinstance(sim, PlacementError):
        print(f"[MAIN] cannot start: {sim}")
        return 1

    app = App(title="Escape",
              width=int(sim.grid.width) + PANEL_W,
              height=int(sim.grid.height))
    app.push_scene(EscapeScene(sim))
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
