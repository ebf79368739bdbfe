"""Command line interface for Debate Draw.

Generates and checks British Parliamentary draws from JSON files, either as
one-shot subcommands or from an interactive shell.
"""

# Debate Draw
# Copyright (C) 2025  Debate Draw developers
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
import shlex
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from debatedraw import __version__
from debatedraw.cli.files import (
    load_draw_input,
    load_history,
    save_history,
    write_json,
)
from debatedraw.constants import (
    FINDING_ERROR,
    FINDING_WARNING,
    POSITION_NAMES,
    POSITIONS,
)
from debatedraw.draw import DrawGenerator, to_database_rows
from debatedraw.exceptions import DebateDrawException
from debatedraw.models import DrawMethod, DrawRoom
from debatedraw.utils import setup_logger
from debatedraw.utils.validation import validate_setup, validate_team_pool

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def paint(text: str, color: str) -> str:
    return f"{color}{text}{Colors.ENDC}"


def format_draw(draws: List[DrawRoom]) -> str:
    """Render rooms as a plain text table, one block per room."""
    width = max(len(name) for name in POSITION_NAMES.values())
    lines = []
    for draw in draws:
        judge = draw.judge.name if draw.judge else "(no judge)"
        lines.append(f"{draw.room} [{draw.id}] - judge: {judge}")
        for position in POSITIONS:
            team = draw.team_at(position)
            institution = f" ({team.institution})" if team.institution else ""
            marker = " *swing*" if team.is_swing else ""
            lines.append(
                f"  {position}  {POSITION_NAMES[position]:<{width}}  "
                f"{team.name}{institution}{marker}"
            )
    return "\n".join(lines)


def run_generate_command(args: argparse.Namespace) -> int:
    """Run the generate command."""
    draw_input = load_draw_input(Path(args.input))
    options = draw_input.options
    if args.method:
        options.method = DrawMethod.parse(args.method)
    if args.balance_positions:
        options.balance_positions = True
    if args.no_clash_avoidance:
        options.avoid_institution_clashes = False
    if args.avoid_judge_clashes:
        options.avoid_judge_clashes = True

    history_path = Path(args.history) if args.history else None
    if args.record and history_path is None:
        print(paint("Error: --record needs --history", Colors.FAIL))
        return 1
    if history_path is not None:
        book, memo = load_history(history_path)
    else:
        book, memo = None, None

    generator = DrawGenerator(
        draw_input.teams,
        draw_input.judges,
        draw_input.rooms,
        options=options,
        seed=args.seed,
        history=book,
        pairing_memo=memo,
    )
    draws = generator.generate()

    print(paint("\nDraw:", Colors.BOLD))
    print(format_draw(draws))
    swing_count = sum(len(draw.swing_teams) for draw in draws)
    if swing_count:
        print(paint(f"\n{swing_count} swing team(s) used", Colors.WARNING))
    if generator.sitting_out:
        names = ", ".join(team.name for team in generator.sitting_out)
        print(paint(f"Sitting out: {names}", Colors.WARNING))

    if args.rows:
        tournament_id = args.tournament_id or draw_input.teams[0].tournament_id
        payload = [
            row.to_dict() for row in to_database_rows(draws, args.rows, tournament_id)
        ]
    else:
        payload = [draw.to_dict() for draw in draws]

    if args.output:
        write_json(Path(args.output), payload)
        print(paint(f"Draw saved to: {args.output}", Colors.OKGREEN))

    if args.record:
        generator.update_histories(draws)
        save_history(history_path, generator.history, generator.pairing_memo)
        print(paint(f"History updated: {history_path}", Colors.OKGREEN))

    return 0


def run_validate_command(args: argparse.Namespace) -> int:
    """Run the validate command."""
    draw_input = load_draw_input(Path(args.input))
    findings = validate_team_pool(draw_input.teams)
    findings.extend(
        validate_setup(
            len(draw_input.teams),
            len(draw_input.judges),
            len(draw_input.rooms),
            args.rounds,
        )
    )

    level_colors = {FINDING_ERROR: Colors.FAIL, FINDING_WARNING: Colors.WARNING}
    print(paint("\nSetup check:", Colors.BOLD))
    for finding in findings:
        color = level_colors.get(finding.level, Colors.OKGREEN)
        print(f"  {paint(f'[{finding.level}]', color)} {finding.message}")
        for detail in finding.details:
            print(f"      {detail}")

    return 1 if any(finding.is_error for finding in findings) else 0


def create_generate_parser(parser: Optional[argparse.ArgumentParser] = None):
    """Create parser for generate subcommand."""
    if parser is None:
        parser = argparse.ArgumentParser(prog="generate", description="Generate a draw")
    parser.add_argument("--input", required=True, help="Draw input file (JSON)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--method",
        choices=[method.value for method in DrawMethod],
        help="Draw method label",
    )
    parser.add_argument(
        "--balance-positions",
        action="store_true",
        help="Assign positions by position history",
    )
    parser.add_argument(
        "--no-clash-avoidance",
        action="store_true",
        help="Ignore institution clashes",
    )
    parser.add_argument(
        "--avoid-judge-clashes",
        action="store_true",
        help="Skip judges from a team's institution",
    )
    parser.add_argument("--history", help="Position history file (JSON)")
    parser.add_argument(
        "--record", action="store_true", help="Record this draw in the history file"
    )
    parser.add_argument("--rows", metavar="ROUND_ID", help="Output storage rows")
    parser.add_argument("--tournament-id", help="Tournament id for storage rows")
    parser.add_argument("--output", help="Output file path")
    parser.set_defaults(func=run_generate_command)
    return parser


def create_validate_parser(parser: Optional[argparse.ArgumentParser] = None):
    """Create parser for validate subcommand."""
    if parser is None:
        parser = argparse.ArgumentParser(
            prog="validate", description="Check a tournament setup"
        )
    parser.add_argument("--input", required=True, help="Draw input file (JSON)")
    parser.add_argument("--rounds", type=int, help="Rounds planned for the day")
    parser.set_defaults(func=run_validate_command)
    return parser


def create_main_parser():
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="debatedraw",
        description="British Parliamentary draw generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  debatedraw

  # Generate a reproducible draw
  debatedraw generate --input round.json --seed 7

  # Generate, write storage rows and record position history
  debatedraw generate --input round.json --rows round-2 --output rows.json \\
      --history history.json --record

  # Check the setup
  debatedraw validate --input round.json --rounds 5
        """,
    )

    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for name, command in SHELL_COMMANDS.items():
        command.build_parser(subparsers.add_parser(name, help=command.summary))
    return parser


def execute(args: argparse.Namespace) -> int:
    """Run a parsed command, reporting engine errors instead of raising."""
    try:
        return args.func(args)
    except DebateDrawException as e:
        print(paint(f"Error: {e}", Colors.FAIL))
        logger.debug("Command failed", exc_info=True)
        return 1


# ========== Interactive Shell ==========


@dataclass(frozen=True)
class ShellCommand:
    """A subcommand the shell can run; ``flags`` feed tab completion."""

    summary: str
    build_parser: Callable[..., argparse.ArgumentParser]
    flags: Tuple[str, ...]


SHELL_COMMANDS: Dict[str, ShellCommand] = {
    "generate": ShellCommand(
        "Generate a draw from a JSON file of teams, judges and rooms",
        create_generate_parser,
        (
            "--input",
            "--seed",
            "--method",
            "--balance-positions",
            "--no-clash-avoidance",
            "--avoid-judge-clashes",
            "--history",
            "--record",
            "--rows",
            "--tournament-id",
            "--output",
        ),
    ),
    "validate": ShellCommand(
        "Check a tournament setup against the BP format",
        create_validate_parser,
        ("--input", "--rounds"),
    ),
}
HELP_WORDS = ("help", "?", "list")
QUIT_WORDS = ("exit", "quit", "q")


def print_shell_help(name: Optional[str] = None) -> None:
    """List the shell commands, or show one command's argparse help."""
    command = SHELL_COMMANDS.get(name) if name else None
    if command is not None:
        command.build_parser().print_help()
        return
    if name:
        print(paint(f"Unknown command: {name}", Colors.FAIL))
    print(paint("Commands:", Colors.BOLD))
    for command_name, info in SHELL_COMMANDS.items():
        print(f"  {command_name:<10} {info.summary}")
    print(f"  {'help [cmd]':<10} Show this list or a command's options")
    print(f"  {'exit':<10} Leave the shell")


def create_completer() -> NestedCompleter:
    """Tab completion for commands, with or without a leading slash."""
    tree: Dict[str, Optional[WordCompleter]] = {}
    for name, command in SHELL_COMMANDS.items():
        flags = WordCompleter(list(command.flags))
        tree[name] = tree[f"/{name}"] = flags
    tree["help"] = tree["/help"] = WordCompleter(list(SHELL_COMMANDS))
    tree["exit"] = tree["/exit"] = None
    return NestedCompleter.from_nested_dict(tree)


def dispatch(line: str) -> bool:
    """Run one shell line. Returns False once the user asks to leave."""
    try:
        words = shlex.split(line)
    except ValueError as e:
        # Unbalanced quotes
        print(paint(f"Error: {e}", Colors.FAIL))
        return True
    if not words:
        return True

    name, rest = words[0].lstrip("/"), words[1:]
    if name in QUIT_WORDS:
        return False
    if name in HELP_WORDS:
        print_shell_help(rest[0].lstrip("/") if rest else None)
        return True

    command = SHELL_COMMANDS.get(name)
    if command is None:
        print(paint(f"Unknown command: {name} (try 'help')", Colors.FAIL))
        return True
    try:
        args = command.build_parser().parse_args(rest)
    except SystemExit:
        # argparse has already printed the usage error
        return True
    execute(args)
    return True


def run_interactive_mode() -> int:
    """Read commands from a prompt_toolkit session until exit or EOF."""
    print(paint(f"Debate Draw {__version__}", Colors.BOLD))
    print("British Parliamentary draws. Type 'help' for commands, 'exit' to leave.\n")

    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )
    while True:
        try:
            if not dispatch(session.prompt("debatedraw> ")):
                break
        except KeyboardInterrupt:
            print(paint("Use 'exit' to leave", Colors.WARNING))
        except EOFError:
            break
    return 0


def run_standard_mode(argv: Optional[List[str]] = None) -> int:
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        return run_interactive_mode()

    if hasattr(args, "func"):
        return execute(args)
    parser.print_help()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the debatedraw CLI."""
    if argv is None:
        argv = sys.argv[1:]

    # If no arguments, start interactive mode
    if not argv or "--interactive" in argv or "-i" in argv:
        return run_interactive_mode()

    return run_standard_mode(argv)


if __name__ == "__main__":
    sys.exit(main())
