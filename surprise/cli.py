"""
Surprise CLI - Command-line interface for the engine.

Usage:
    surprise play [--seed N] [--auto-win] [--target NAME] [--swap]
                                   Play a demo game with the sample catalog
    surprise state                 Show the saved session
    surprise reset                 Delete the saved session
"""

import argparse
import random
import sys

from .engine_core.state import Category, GamePhase


# Sample catalog: (name, value, category)
DEMO_PRIZES = [
    ("Keychain", 5, Category.NOVICE),
    ("Mug", 10, Category.NOVICE),
    ("Notebook", 15, Category.NOVICE),
    ("Umbrella", 25, Category.NOVICE),
    ("Headphones", 60, Category.INTERMEDIATE),
    ("Backpack", 80, Category.INTERMEDIATE),
    ("Smartwatch", 150, Category.INTERMEDIATE),
    ("Speaker", 200, Category.INTERMEDIATE),
    ("Tablet", 400, Category.ELITE),
    ("Camera", 600, Category.ELITE),
    ("Game console", 700, Category.ELITE),
    ("Laptop", 1200, Category.ELITE),
    ("Weekend trip", 2000, Category.PRESTIGE),
    ("E-bike", 3000, Category.PRESTIGE),
    ("Home cinema", 4000, Category.PRESTIGE),
    ("Car", 25000, Category.LEGENDARY),
]


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Surprise - Prize reveal game engine",
        prog="surprise",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a demo game")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument("--auto-win", action="store_true", help="Deliver the top-ranked prize")
    play_parser.add_argument("--target", help="Name of the prize to deliver")
    play_parser.add_argument("--swap", action="store_true", help="Swap at the final decision")

    # State command
    subparsers.add_parser("state", help="Show the saved session")

    # Reset command
    subparsers.add_parser("reset", help="Delete the saved session")

    args = parser.parse_args()

    from .config import SurpriseConfig
    from .logging_config import setup_logging
    import logging

    try:
        config = SurpriseConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    setup_logging(logging.DEBUG if args.verbose else config.log_level)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "state":
        cmd_state(config)
    elif args.command == "reset":
        cmd_reset(config)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args):
    """Play one game with random picks, printing every reveal."""
    from .session import GameSession

    rng = random.Random(args.seed)
    session = GameSession(rng=random.Random(args.seed))
    for name, value, category in DEMO_PRIZES:
        session.add_prize(name, value, category)

    target_id = None
    if args.target:
        for prize in session.catalog:
            if prize.name.lower() == args.target.lower():
                target_id = prize.id
        if target_id is None:
            print(f"Error: No prize named {args.target!r}")
            sys.exit(1)
    session.set_directive(target_prize_id=target_id, auto_win=args.auto_win)

    session.start_game()
    session.confirm_rules()

    pick = rng.choice(session.containers).id
    session.select_main_case(pick)
    print(f"You hold container {pick}")

    while session.phase == GamePhase.PLAYING:
        round_number = session.state.current_round_index + 1
        while session.remaining_to_open > 0:
            container = rng.choice([c for c in session.board_containers if not c.is_open])
            session.open_case(container.id)
            prize = container.prize
            print(f"  Round {round_number}: container {container.id:2d} -> {prize.name} ({prize.category.value})")
        session.advance_game()

    remaining = [c for c in session.board_containers if not c.is_open][0]
    print(f"Last closed container on the board: {remaining.id}")
    if args.swap:
        session.swap_case()
    else:
        session.keep_case()

    held = session.held_container
    decision = "swapped" if args.swap else "kept"
    print(f"You {decision} and won: {held.prize.name} ({held.prize.category.value}, {held.prize.value})")


def cmd_state(config):
    """Print a summary of the saved session."""
    from .persistence import JsonFileStore

    blob = JsonFileStore(config.state_path).load()
    if blob is None:
        print(f"No saved session at {config.state_path}")
        return

    print(f"State file: {config.state_path}")
    print(f"Phase: {blob.game_state.value}")
    print(f"Prizes: {len(blob.prizes)}")
    print(f"Round: {blob.current_round_index + 1} ({blob.cases_opened_in_current_round} opened)")
    opened = [c.id for c in blob.containers if c.is_open]
    held = [c.id for c in blob.containers if c.is_held]
    print(f"Opened containers: {opened}")
    print(f"Held container: {held[0] if held else '-'}")


def cmd_reset(config):
    """Delete the saved session."""
    from .persistence import JsonFileStore

    JsonFileStore(config.state_path).clear()
    print(f"Deleted {config.state_path}")


if __name__ == "__main__":
    main()
