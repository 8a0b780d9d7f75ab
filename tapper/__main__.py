#!/usr/bin/env python3
"""
Hockey Tapper command line.

Runs headless games against a synthetic 60 fps clock and inspects saved
leaderboards. Nothing is drawn; events are printed as they happen.

Usage:
    # List available profiles
    python -m tapper --list-profiles

    # Five shots straight up, saved to a leaderboard file
    python -m tapper play --shots 5 --angle 90 --save scores.json --label Alice

    # Show the leaderboard
    python -m tapper leaderboard scores.json --limit 10
"""

import argparse
import random
import sys

import yaml

from models.hockey import GameState
from tapper.clock import FrameDriver, SyntheticClock
from tapper.leaderboard import InvalidScoreError, JsonFileLeaderboard, LeaderboardStorageError
from tapper.logging import close_all_sinks, configure_logging
from tapper.profile_loader import ProfileLoader
from tapper.session import GameSession


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tapper',
        description='Hockey Tapper - headless simulation and leaderboard tools',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m tapper --list-profiles
  python -m tapper play --shots 10 --angle 85 --power 0.9
  python -m tapper play --shots 5 --save scores.json --label Alice
  python -m tapper leaderboard scores.json
        """
    )
    parser.add_argument(
        '--list-profiles',
        action='store_true',
        help='List available game profiles and exit'
    )
    parser.add_argument(
        '--profiles-dir',
        type=str,
        default=None,
        help='Directory of profile YAML files (default: packaged profiles)'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        help='Log level for all modules (TRACE, DEBUG, INFO, WARNING, ERROR, OFF)'
    )

    subparsers = parser.add_subparsers(dest='command')

    play = subparsers.add_parser('play', help='Play a headless game')
    play.add_argument('--profile', '-p', type=str, default='default',
                      help='Profile to load (default: default)')
    play.add_argument('--shots', '-n', type=int, default=5,
                      help='Shots in the game (default: 5)')
    play.add_argument('--angle', '-a', type=float, default=None,
                      help="Launch angle in degrees (default: the profile's shot angle)")
    play.add_argument('--power', type=float, default=1.0,
                      help='Launch power multiplier (default: 1.0)')
    play.add_argument('--label', type=str, default=None,
                      help='Player label for the leaderboard')
    play.add_argument('--seed', type=int, default=None,
                      help='Random seed for particle effects')
    play.add_argument('--save', type=str, default=None, metavar='PATH',
                      help='Save the final score to this JSON leaderboard')
    play.add_argument('--max-seconds', type=float, default=120.0,
                      help='Simulated time limit in seconds (default: 120)')

    board = subparsers.add_parser('leaderboard', help='Show a JSON leaderboard')
    board.add_argument('path', type=str, help='Leaderboard JSON file')
    board.add_argument('--limit', type=int, default=20,
                       help='Number of scores to show (default: 20)')
    board.add_argument('--label', type=str, default=None,
                       help='Only show scores for this label')

    return parser


def _list_profiles(loader: ProfileLoader) -> int:
    profiles = loader.list_available_profiles()
    if not profiles:
        print(f"No profiles found in {loader.profiles_dir}")
        return 1
    print("Available profiles:")
    for profile_id in profiles:
        info = loader.get_profile_info(profile_id)
        print(f"  {profile_id:<16} {info['description']}")
    return 0


def _play(args, loader: ProfileLoader) -> int:
    try:
        profile = loader.load_profile(args.profile)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    if args.shots < 1:
        print("ERROR: --shots must be at least 1")
        return 1

    profile = profile.model_copy(update={
        'session': profile.session.model_copy(update={'shots_per_game': args.shots}),
    })

    leaderboard = JsonFileLeaderboard(args.save) if args.save else None
    rng = random.Random(args.seed) if args.seed is not None else None
    session = GameSession(profile, leaderboard=leaderboard, rng=rng, label=args.label)

    clock = SyntheticClock()
    driver = FrameDriver(session, time_source=clock, paced=False)
    frame_budget = int(args.max_seconds * 1000 / clock.step_ms)

    print("=" * 60)
    print(f"Hockey Tapper - profile '{profile.name}', {args.shots} shot(s)")
    print("=" * 60)

    session.start(clock())
    while session.state == GameState.PLAYING and driver.frames < frame_budget:
        if session.can_shoot:
            session.shoot(args.angle, args.power)
        for event in driver.step():
            print(f"  {event}")

    try:
        record = session.finish()
    except (InvalidScoreError, LeaderboardStorageError) as e:
        print(f"ERROR: Failed to save score: {e}")
        return 1

    print("=" * 60)
    print(f"Final score: {session.score}")
    print(f"Goals: {session.goals}/{session.shots_taken}")
    print(f"Best combo: {session.combo.max_count}")
    if record is not None:
        print(f"Saved to {args.save} as {record.label}")
    print("=" * 60)
    return 0


def _show_leaderboard(args) -> int:
    board = JsonFileLeaderboard(args.path)
    if args.label:
        records = board.by_label(args.label, args.limit)
    else:
        records = board.list(args.limit)

    if not records:
        print("No scores yet")
        return 0

    for rank, record in enumerate(records, start=1):
        print(f"{rank:>3}. {record.score:>8}  {record.label}")

    stats = board.stats()
    print()
    print(f"Scores: {stats.count}  Average: {stats.average}  "
          f"Best: {stats.max}  Lowest: {stats.min}")
    return 0


def main(argv=None) -> int:
    """Main entry point for the Hockey Tapper command line."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        configure_logging(args.log_level)

    loader = ProfileLoader(args.profiles_dir)

    try:
        if args.list_profiles:
            return _list_profiles(loader)
        if args.command == 'play':
            return _play(args, loader)
        if args.command == 'leaderboard':
            return _show_leaderboard(args)
    finally:
        close_all_sinks()

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
