"""Run a battle from a grid file (or stdin) and find the lossless elf power."""

import argparse
import logging
import sys

from combat.config import MAX_POWER
from combat.engine import Engine
from combat.errors import CombatError
from combat.parser import parse, render
from combat.search import find_min_power_for_lossless_victory


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("grid", nargs="?", type=argparse.FileType("r"), default=sys.stdin,
                    help="grid file (default: stdin)")
    ap.add_argument("--max-power", type=int, default=MAX_POWER,
                    help="highest elf power to try")
    ap.add_argument("--show", action="store_true", help="print the final grid with unit health")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    with args.grid as f:
        text = f.read()
    try:
        eng = Engine(parse(text))
        score = eng.run()
        if args.show:
            print(render(eng.state, with_health=True), end="")
        print(f"result of simulation: {score}")
        result = find_min_power_for_lossless_victory(text, max_power=args.max_power)
    except CombatError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"result of elf power: {result.score} (power {result.power})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
