"""
Gridwise CLI - Command-line interface for the engine.

Usage:
    gridwise play [--seed N]       Play a game in the terminal
    gridwise catalog               List every card
    gridwise serve [--port P]      Run the HTTP API
"""

import argparse
import logging
import sys

from .catalog.cards import STAT_TYPES


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Gridwise - Grid Balancing Puzzle",
        prog="gridwise",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for the consumer shuffle")

    subparsers.add_parser("catalog", help="List every card")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "catalog":
        cmd_catalog(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_catalog(args):
    """List every card."""
    from .games.energy.cards import create_energy_catalog

    catalog = create_energy_catalog()
    print(f"{'Name':<18}{'Category':<15}" + "".join(f"{s:>6}" for s in STAT_TYPES))
    for card in catalog.cards:
        stats = card.stats.as_dict()
        line = f"{card.name:<18}{card.category.value:<15}" + "".join(
            f"{stats[s]:>+6}" for s in STAT_TYPES
        )
        target = catalog.matching_consumer_for(card.name)
        if target:
            line += f"   upgrades {target}"
        print(line)


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("gridwise.api.app:create_app", host=args.host, port=args.port, factory=True)


def cmd_play(args):
    """Interactive terminal game. Turns advance straight after each move."""
    import random
    from dataclasses import replace

    from .config import GameConfig
    from .engine_core.engine import GameEngine

    config = replace(GameConfig.from_env(), auto_advance_delay=0)
    engine = GameEngine(config=config, rng=random.Random(args.seed))
    result = engine.reset()
    if not result.success:
        print(f"Error: {result.error}")
        sys.exit(1)

    print("Replace every Fossil generator without letting any total drop below zero.")
    print("Commands: place <shop#> <slot>, play <shop#>, next, new, quit\n")

    while True:
        _render(engine)
        if engine.get_state().game_won:
            print("\nYou won! The grid runs without Fossil generation.")
            return

        try:
            line = input("> ").strip().split()
        except EOFError:
            return
        if not line:
            continue

        command, rest = line[0].lower(), line[1:]
        shop = engine.get_state().shop
        try:
            if command in ("quit", "q"):
                return
            elif command == "next":
                result = engine.advance_turn()
            elif command == "new":
                result = engine.reset()
            elif command == "place" and len(rest) == 2:
                card = shop[int(rest[0])]
                result = engine.place_card(card.instance_id, "generator", int(rest[1]))
            elif command == "play" and len(rest) == 1:
                card = shop[int(rest[0])]
                result = engine.play_incentive(card.instance_id)
            else:
                print("Unknown command")
                continue
        except (ValueError, IndexError):
            print("Use shop numbers and slot numbers as shown")
            continue

        if result.success:
            for change in result.state_changes:
                print(f"  {change}")
        else:
            print(f"  {result.error}")


def _render(engine):
    state = engine.get_state()
    totals = engine.totals().as_dict()

    print(f"\n=== Turn {state.turn} ===")
    print("Totals: " + "  ".join(f"{s}={totals[s]:+d}" for s in STAT_TYPES))

    print("Generators:")
    for i, card in enumerate(state.grid.generators):
        print(f"  [{i}] {_describe(card)}")
    print("Consumers:")
    for i, card in enumerate(state.grid.consumers):
        print(f"  [{i}] {_describe(card)}")

    print("Shop:")
    for i, card in enumerate(state.shop):
        if card.face_down:
            print(f"  {i:>2}. (hidden until its consumer is revealed)")
            continue
        mark = " " if engine.can_place_anywhere(card.instance_id) else "x"
        print(f"  {i:>2}.{mark}{_describe(card)}")


def _describe(card) -> str:
    if card is None:
        return "-"
    if card.face_down:
        return f"{card.name} (face-down)" if card.definition.is_generator else "??"
    stats = card.stats.as_dict()
    return f"{card.name:<18}" + " ".join(f"{stats[s]:+d}" for s in STAT_TYPES)


if __name__ == "__main__":
    main()
