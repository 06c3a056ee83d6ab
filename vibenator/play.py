"""
Play the arena with the keyboard

    python -m vibenator.play --weapon radial
"""

import argparse
import logging

import arcade

from .config import DEFAULT_BALANCE, WeaponKind
from .render import SurvivorWindow
from .session import WaveSession


def main():
    parser = argparse.ArgumentParser(description="Play the wave survival arena")
    parser.add_argument("--weapon", type=str, default="directional",
                        choices=[k.value for k in WeaponKind],
                        help="Weapon kind to start the run with")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for enemy spawns")
    parser.add_argument("--verbose", action="store_true", help="Log simulation events")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    cfg = DEFAULT_BALANCE
    session = WaveSession(cfg, seed=args.seed)
    window = SurvivorWindow(cfg.width, cfg.height, session=session)
    window.show(session.start_run(args.weapon))

    print("Arrow keys / WASD to move, ESC to quit.")
    arcade.run()


if __name__ == "__main__":
    main()
