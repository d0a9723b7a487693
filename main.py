"""
main.py — Bootstrap

1. Load tuning (data/tuning.toml)
2. Create the app
3. Push the farm scene (optionally with a fixed map seed)
4. Run

    python main.py            # random map
    python main.py 1234       # reproducible map
"""

import sys

from core import tuning
from core.app import App
from scenes.farm_scene import FarmScene


def main():
    seed = None
    if len(sys.argv) > 1:
        try:
            seed = int(sys.argv[1])
        except ValueError:
            print(f"[MAIN] ignoring non-integer seed {sys.argv[1]!r}")

    tuning.load()
    app = App(title="Homestead", width=960, height=640)
    app.push_scene(FarmScene(seed=seed))
    app.run()


if __name__ == "__main__":
    main()
