"""Command-line interface for Swiss Pairing.

Runs the engine over a JSON tournament snapshot: pair a round, move rounds
through their lifecycle, record results, print the leaderboard, find
duplicate pairings, or simulate a whole tournament. Without arguments it
starts an interactive shell.
"""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import shlex
import sys
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from swisspairing.controllers.tournament import RoundManager
from swisspairing.exceptions import SwissPairingException
from swisspairing.models.pairing import PairingResult
from swisspairing.models.tournament import (
    EngineConfig,
    StandingEntry,
    load_engine_config,
)
from swisspairing.pairing import (
    duplicate_matches_to_remove,
    find_duplicate_pairings,
)
from swisspairing.testing import ResultPattern, SimulatorConfig, TournamentSimulator
from swisspairing.utils import configure_logging, setup_logger
from swisspairing.utils.snapshot import (
    TournamentSnapshot,
    load_snapshot,
    save_snapshot,
)

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "pair": {
        "description": "Generate pairings for a round",
        "options": {
            "--file": "Tournament snapshot (JSON)",
            "--round": "Round to pair (default: next round)",
            "--pair-remaining": "Pair only players not yet placed in the round",
            "--save": "Write the new matches back to the snapshot",
            "--json": "Print pairings as JSON",
        },
    },
    "standings": {
        "description": "Print the leaderboard",
        "options": {
            "--file": "Tournament snapshot (JSON)",
            "--round": "Only count rounds up to this one",
            "--json": "Print standings as JSON",
        },
    },
    "start-round": {
        "description": "Start a round and resolve its byes",
        "options": {
            "--file": "Tournament snapshot (JSON)",
            "--round": "Round to start",
        },
    },
    "complete-round": {
        "description": "Mark a started round as completed",
        "options": {
            "--file": "Tournament snapshot (JSON)",
            "--round": "Round to complete",
        },
    },
    "result": {
        "description": "Record the result of a match",
        "options": {
            "--file": "Tournament snapshot (JSON)",
            "--round": "Round of the match",
            "--player1": "Player the result is given for",
            "--player2": "Opponent (omit for a bye)",
            "--result": "WIN_P1, WIN_P2, DRAW or BYE",
        },
    },
    "duplicates": {
        "description": "Find player pairs that met more than once",
        "options": {
            "--file": "Tournament snapshot (JSON)",
            "--remove": "Delete the later duplicates and save",
        },
    },
    "simulate": {
        "description": "Simulate a complete tournament",
        "options": {
            "--players": "Number of players (default: 16)",
            "--rounds": "Number of rounds (default: suggested)",
            "--static": "Number of static-seating players",
            "--late": "Number of players entering in round 2",
            "--drop-rate": "Chance a player drops after each round",
            "--pattern": "Result pattern (random/predictable/upset_friendly)",
            "--output": "Write the final snapshot to this file",
        },
    },
    "help": {"description": "Show help for commands", "options": {}},
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}==================== SWISS PAIRING ===================={Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    # Support both "/command" and "command" formats
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["/help"] = WordCompleter(list(COMMANDS.keys()))
    completions["/list"] = None

    return NestedCompleter.from_nested_dict(completions)


# ========== Helpers ==========


def _engine_config(args: argparse.Namespace) -> EngineConfig:
    config = load_engine_config(getattr(args, "config", None))
    seed = getattr(args, "seed", None)
    if seed is not None:
        config.seed = seed
    return config


def _load_manager(args: argparse.Namespace) -> RoundManager:
    snapshot = load_snapshot(args.file)
    return RoundManager(
        snapshot.tournament_id,
        snapshot.players,
        snapshot.matches,
        config=_engine_config(args),
    )


def _save_manager(manager: RoundManager, path: str) -> None:
    snapshot = TournamentSnapshot(
        tournament_id=manager.tournament_id,
        players=manager.players,
        matches=manager.matches,
    )
    save_snapshot(snapshot, path)


def print_pairings(result: PairingResult) -> None:
    print(f"\n{Colors.BOLD}Round {result.round_number} pairings:{Colors.ENDC}")
    for pairing in sorted(result.pairings, key=lambda p: p.table_number or 0):
        table = pairing.table_number if pairing.table_number is not None else "-"
        if pairing.is_bye:
            print(f"  Table {table:>3}: {pairing.player1_name} - BYE")
        else:
            print(
                f"  Table {table:>3}: {pairing.player1_name} vs {pairing.player2_name}"
            )
    for warning in result.warnings:
        print(f"  {Colors.WARNING}{warning}{Colors.ENDC}")
    if result.fallback_used:
        print(f"  {Colors.OKCYAN}Completion search was needed{Colors.ENDC}")
    print()


def print_leaderboard(entries: List[StandingEntry]) -> None:
    print(
        f"\n{Colors.BOLD}{'#':>3}  {'Player':25} {'Pts':>5} {'W-D-L':>8} "
        f"{'Byes':>4} {'OR':>7} {'OOR':>7}{Colors.ENDC}"
    )
    for rank, entry in enumerate(entries, start=1):
        record = f"{entry.wins}-{entry.draws}-{entry.losses}"
        print(
            f"{rank:>3}  {entry.name[:25]:25} {entry.points:>5.1f} {record:>8} "
            f"{entry.byes:>4} {entry.opponent_resistance:>7.4f} "
            f"{entry.opponent_opponent_resistance:>7.4f}"
        )
    print()


# ========== Commands ==========


def run_pair_command(args: argparse.Namespace) -> int:
    """Generate pairings for a round of a snapshot."""
    manager = _load_manager(args)
    result = manager.create_pairings(args.round, pair_remaining=args.pair_remaining)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_pairings(result)

    if args.save:
        _save_manager(manager, args.file)
        print(f"{Colors.OKGREEN}Pairings saved to: {args.file}{Colors.ENDC}")
    return 0


def run_standings_command(args: argparse.Namespace) -> int:
    manager = _load_manager(args)
    entries = manager.leaderboard(up_to_round=args.round)
    if args.json:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
    else:
        print_leaderboard(entries)
    return 0


def run_start_round_command(args: argparse.Namespace) -> int:
    manager = _load_manager(args)
    rows = manager.start_round(args.round)
    _save_manager(manager, args.file)
    byes = sum(1 for m in rows if m.is_bye)
    print(
        f"{Colors.OKGREEN}Round {args.round} started "
        f"({len(rows)} matches, {byes} bye(s)){Colors.ENDC}"
    )
    return 0


def run_complete_round_command(args: argparse.Namespace) -> int:
    manager = _load_manager(args)
    manager.complete_round(args.round)
    _save_manager(manager, args.file)
    print(f"{Colors.OKGREEN}Round {args.round} completed{Colors.ENDC}")
    return 0


def run_result_command(args: argparse.Namespace) -> int:
    manager = _load_manager(args)
    match = manager.record_result(args.round, args.player1, args.player2, args.result)
    _save_manager(manager, args.file)
    winner = match.winner_id or "none"
    print(
        f"{Colors.OKGREEN}Recorded {match.result.value if match.result else 'pending'}"
        f" (winner: {winner}){Colors.ENDC}"
    )
    return 0


def run_duplicates_command(args: argparse.Namespace) -> int:
    """Report, and optionally remove, repeated pairings."""
    snapshot = load_snapshot(args.file)
    duplicates = find_duplicate_pairings(snapshot.matches)
    if not duplicates:
        print(f"{Colors.OKGREEN}No duplicate matches found{Colors.ENDC}")
        return 0

    for dup in duplicates:
        player1, player2 = dup.player_ids
        print(
            f"{Colors.FAIL}Found {len(dup.matches)} matches between {player1} "
            f"and {player2}:{Colors.ENDC}"
        )
        for match in dup.matches:
            result = match.result.value if match.result else "pending"
            print(
                f"   - Match ID: {match.id}, Round: {match.round_number}, "
                f"Result: {result}"
            )

    if args.remove:
        extras = {id(m) for m in duplicate_matches_to_remove(snapshot.matches)}
        snapshot.matches = [m for m in snapshot.matches if id(m) not in extras]
        save_snapshot(snapshot, args.file)
        print(f"{Colors.OKGREEN}Removed {len(extras)} duplicate match(es){Colors.ENDC}")
        return 0
    return 1


def run_simulate_command(args: argparse.Namespace) -> int:
    """Play a simulated tournament and print its leaderboard."""
    config = SimulatorConfig(
        num_players=args.players,
        num_rounds=args.rounds,
        static_players=args.static,
        late_entrants=args.late,
        drop_rate=args.drop_rate,
        result_pattern=ResultPattern(args.pattern),
        seed=args.seed,
        engine=_engine_config(args),
    )
    print(f"\n{Colors.BOLD}Simulating tournament...{Colors.ENDC}")
    report = TournamentSimulator(config).run()

    for result in report.rounds:
        print_pairings(result)
    print_leaderboard(report.leaderboard)

    if args.output:
        save_snapshot(report.snapshot, args.output)
        print(f"{Colors.OKGREEN}Tournament saved to: {args.output}{Colors.ENDC}")

    if report.violations:
        print(f"{Colors.FAIL}Violations: {len(report.violations)}{Colors.ENDC}")
        for violation in report.violations:
            print(f"  - {violation}")
        return 1
    return 0


# ========== Parsers ==========


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="swiss-pairing",
        description="Swiss-system pairing and standings engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  swiss-pairing

  # Pair the next round and save it
  swiss-pairing pair --file tournament.json --save

  # Start round 2, resolving its byes
  swiss-pairing start-round --file tournament.json --round 2

  # Leaderboard
  swiss-pairing standings --file tournament.json

  # Simulate a 24 player event
  swiss-pairing --seed 7 simulate --players 24 --static 4
        """,
    )

    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--config", help="Engine configuration file (JSON)")
    parser.add_argument("--seed", type=int, help="Random seed for first-round seating")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    pair_parser = subparsers.add_parser("pair", help="Generate pairings for a round")
    pair_parser.add_argument("--file", required=True)
    pair_parser.add_argument("--round", type=int)
    pair_parser.add_argument("--pair-remaining", action="store_true")
    pair_parser.add_argument("--save", action="store_true")
    pair_parser.add_argument("--json", action="store_true")
    pair_parser.set_defaults(func=run_pair_command)

    standings_parser = subparsers.add_parser("standings", help="Print the leaderboard")
    standings_parser.add_argument("--file", required=True)
    standings_parser.add_argument("--round", type=int)
    standings_parser.add_argument("--json", action="store_true")
    standings_parser.set_defaults(func=run_standings_command)

    start_parser = subparsers.add_parser("start-round", help="Start a round")
    start_parser.add_argument("--file", required=True)
    start_parser.add_argument("--round", type=int, required=True)
    start_parser.set_defaults(func=run_start_round_command)

    complete_parser = subparsers.add_parser("complete-round", help="Complete a round")
    complete_parser.add_argument("--file", required=True)
    complete_parser.add_argument("--round", type=int, required=True)
    complete_parser.set_defaults(func=run_complete_round_command)

    result_parser = subparsers.add_parser("result", help="Record a match result")
    result_parser.add_argument("--file", required=True)
    result_parser.add_argument("--round", type=int, required=True)
    result_parser.add_argument("--player1", required=True)
    result_parser.add_argument("--player2")
    result_parser.add_argument("--result", required=True)
    result_parser.set_defaults(func=run_result_command)

    dup_parser = subparsers.add_parser("duplicates", help="Find duplicate pairings")
    dup_parser.add_argument("--file", required=True)
    dup_parser.add_argument("--remove", action="store_true")
    dup_parser.set_defaults(func=run_duplicates_command)

    sim_parser = subparsers.add_parser("simulate", help="Simulate a tournament")
    sim_parser.add_argument("--players", type=int, default=16)
    sim_parser.add_argument("--rounds", type=int)
    sim_parser.add_argument("--static", type=int, default=0)
    sim_parser.add_argument("--late", type=int, default=0)
    sim_parser.add_argument("--drop-rate", type=float, default=0.0)
    sim_parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default=ResultPattern.RANDOM.value,
    )
    sim_parser.add_argument("--output")
    sim_parser.set_defaults(func=run_simulate_command)

    return parser


def execute(args: argparse.Namespace) -> int:
    """Run a parsed command, mapping engine errors to exit code 1."""
    try:
        return args.func(args)
    except SwissPairingException as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1


def run_interactive_mode(base_args: Optional[argparse.Namespace] = None) -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    style = Style.from_dict(
        {
            "prompt": "#00aa00 bold",
        }
    )
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )
    parser = create_main_parser()

    while True:
        try:
            user_input = session.prompt("swiss-pairing> ").strip()

            if not user_input:
                continue

            if user_input in ["exit", "quit", "q", "/exit"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break

            if user_input in ["/help", "help", "?", "/list"]:
                print_commands_list()
                continue

            if user_input.startswith("/help ") or user_input.startswith("help "):
                cmd = user_input.split()[1].lstrip("/")
                print_command_help(cmd)
                continue

            try:
                parts = shlex.split(user_input)
            except ValueError as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                continue
            command = parts[0].lstrip("/")
            if command not in COMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
                continue

            # Global options given on the command line apply to every command
            prefix = []
            if base_args is not None:
                if base_args.config:
                    prefix += ["--config", base_args.config]
                if base_args.seed is not None:
                    prefix += ["--seed", str(base_args.seed)]

            try:
                args = parser.parse_args(prefix + [command] + parts[1:])
            except SystemExit:
                # argparse calls sys.exit on error, catch it
                continue
            execute(args)

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the swiss-pairing CLI."""
    parser = create_main_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.verbose)

    try:
        # If no command, start interactive mode
        if args.interactive or not getattr(args, "func", None):
            return run_interactive_mode(args)
        return execute(args)
    except KeyboardInterrupt:
        print(f"\n{Colors.WARNING}Interrupted by user{Colors.ENDC}")
        return 130


if __name__ == "__main__":
    sys.exit(main())
