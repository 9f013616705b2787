"""
main.py — Bootstrap

1. Load tuning constants
2. Create the app
3. Push the dungeon scene
4. Run
"""

import argparse

from core import tuning
from core.app import App
from scenes.dungeon_scene import DungeonScene


def main():
    parser = argparse.ArgumentParser(description="Top-down lock-on combat demo")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed enemy placement for a repeatable room")
    parser.add_argument("--enemies", type=int, default=None,
                        help="enemies per room (default from tuning)")
    parser.add_argument("--tuning", default=None,
                        help="path to a tuning TOML file")
    args = parser.parse_args()

    tuning.load(args.tuning)

    app = App(title="Lock-On", width=960, height=640)
    enemies = args.enemies or tuning.get("enemies", "per_room", 6)
    app.push_scene(DungeonScene(enemies=enemies, seed=args.seed))
    app.run()


if __name__ == "__main__":
    main()
