#!/usr/bin/env python3
"""
Command-line front end for the coliseum turn order simulator.

assets/data ships the venue table only; point --data-dir (or data_dir in the
config) at a directory that also holds monsterdata/ and encounters/.

Examples:
  python main.py --data-dir tests/fixtures/data --list-venues
  python main.py --data-dir tests/fixtures/data --venue "Training Fields" --choices --encounter Bogsneak
  python main.py --data-dir tests/fixtures/data --venue Mire --encounter "Mirewing,Bogling" --dragon Ember:30:2 --rounds 5
  python main.py --monster Slime:10 --monster Ogre:15 --dragon Ember:30 --rounds 3
"""

import argparse
import sys
from typing import Optional

from coliturn.core.config_loader import ConfigLoader
from coliturn.core.errors import SimulatorError
from coliturn.game.simulator import Simulator
from coliturn.game.venues.venue_loader import VenueLoader


def parse_dragon(text: str) -> tuple[str, str, str]:
    """Split NAME:QUICKNESS[:AMBUSH]."""
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"Dragon must be NAME:QUICKNESS[:AMBUSH], got {text!r}")
    name, quickness = parts[0], parts[1]
    ambush = parts[2] if len(parts) == 3 else "0"
    return name, quickness, ambush


def parse_monster(text: str) -> tuple[str, str]:
    """Split NAME:QUICKNESS."""
    name, sep, quickness = text.rpartition(":")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Monster must be NAME:QUICKNESS, got {text!r}")
    return name, quickness


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Calculate coliseum turn order for dragons and monsters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", help="Path to simulator.yaml")
    parser.add_argument("--data-dir", help="Directory holding venues.yaml, monsterdata/ and encounters/")
    parser.add_argument("--list-venues", action="store_true", help="List venues and exit")
    parser.add_argument("--venue", help="Venue to load encounters and monsters from")
    parser.add_argument("--encounter", help="Comma separated monster names to commit as the encounter")
    parser.add_argument("--choices", action="store_true", help="Show permissible names per encounter slot")
    parser.add_argument("--dragon", action="append", type=parse_dragon, default=[],
                        metavar="NAME:QUICKNESS[:AMBUSH]", help="Add a dragon (repeatable)")
    parser.add_argument("--monster", action="append", type=parse_monster, default=[],
                        metavar="NAME:QUICKNESS", help="Add a custom monster (repeatable)")
    parser.add_argument("--rounds", help="Number of rounds to simulate (max 50)")
    parser.add_argument("--debug", action="store_true", help="Show debug log messages")
    parser.add_argument("--save-log", metavar="DIR", help="Write the full log to a file in DIR")
    return parser


def print_choices(simulator: Simulator) -> None:
    for slot, names in enumerate(simulator.encounter_choices().as_list(), start=1):
        print(f"Slot {slot}: {', '.join(names) if names else '-'}")


def run(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = ConfigLoader(args.config).load_config()
    data_dir = args.data_dir or config.data_dir

    venue_loader = None
    if args.list_venues or args.venue:
        try:
            venue_loader = VenueLoader(data_dir, venues_file=config.venues_file)
        except (OSError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    if args.list_venues:
        for name in venue_loader.venue_table.names():
            print(name)
        return 0

    simulator = Simulator(config, venue_loader).initialize()
    if args.debug:
        simulator.log_manager.toggle_debug()

    try:
        if args.venue:
            simulator.load_venue(args.venue)

        for name, quickness, ambush in args.dragon:
            simulator.add_dragon(name, quickness, ambush)

        if args.encounter:
            simulator.set_encounter([name.strip() for name in args.encounter.split(",") if name.strip()])
            if args.choices:
                print_choices(simulator)
            simulator.commit_encounter()
        elif args.choices:
            print_choices(simulator)

        for name, quickness in args.monster:
            simulator.add_custom_monster(name, quickness)

        result = simulator.calculate_turns(args.rounds)
    except (SimulatorError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    finally:
        for line in simulator.log_lines():
            print(line)
        if args.save_log:
            simulator.save_log(args.save_log)

    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    print()
    for number, name in enumerate(result.turns, start=1):
        print(f"{number:3d}. {name}")
    return 0


def main():
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
