"""Terminal front end.

Renders session snapshots as text and maps typed commands onto game
actions. ``--report`` skips the game and prints an outcome sample instead.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from typing import TextIO

from surpriselift.config import GameConfig
from surpriselift.game.audio import Cue
from surpriselift.game.elevator import ElevatorGame
from surpriselift.game.probability import ProbabilityConfig
from surpriselift.game.session import SessionSnapshot
from surpriselift.game.types import PRIORITY_ORDER, FloorType, GameStatus
from surpriselift.logging_config import configure_from_env, enable_console_logging

logger = logging.getLogger(__name__)

FLOOR_BANNERS = {
    FloorType.ZOMBIE: "Zombie party!",
    FloorType.GOLD: "Shiny gold coins!",
    FloorType.CAT: "Cat paradise!",
    FloorType.NORMAL: "A cozy floor.",
}

GAMEOVER_BANNER = "GAME OVER! BOOM! The elevator was blown up by 100 bombs!"

HELP = """\
Commands:
  <digits>            type a floor (e.g. 42 or -3); '-' only goes first
  go | <enter>        start the journey
  c                   clear the keypad
  back                return to the elevator after arriving
  restart             reset the elevator (keeps your weights)
  mute                toggle sound
  settings            show/hide the weight panel
  set <type> <0-100>  change a weight (bomb, zombie, gold, cat, normal)
  defaults            restore the default weights
  help | quit"""


class TerminalPlayer:
    """Audio player that writes cue names to a stream."""

    def __init__(self, out: TextIO):
        self._out = out
        self._next_handle = 0

    def play(self, cue: Cue, loop: bool = False) -> int:
        self._next_handle += 1
        suffix = " (loop)" if loop else ""
        print(f"  ~ {cue.value}{suffix} ~", file=self._out)
        return self._next_handle

    def stop(self, handle: int) -> None:
        return None


def render(snapshot: SessionSnapshot) -> str:
    """Full-screen text view of a snapshot."""
    lines = [f"[ {snapshot.display_text:>3} ]"]

    if snapshot.status is GameStatus.INPUT:
        lines.append(f"Which floor? {snapshot.keypad_text}")
    elif snapshot.status is GameStatus.MOVING:
        lines.append(f"Going to floor {snapshot.target_floor}...")
    elif snapshot.status is GameStatus.ARRIVAL:
        lines.append(f"Floor {snapshot.current_floor}: {FLOOR_BANNERS[snapshot.floor_type]}")
        lines.append("Type 'back' to return to the elevator.")
    else:
        lines.append(GAMEOVER_BANNER)
        lines.append("Type 'restart' to repair the elevator.")

    if snapshot.message:
        lines.append(f"! {snapshot.message}")

    if snapshot.settings_visible:
        lines.append("Probability lab:")
        for floor_type in PRIORITY_ORDER:
            lines.append(
                f"  {floor_type.value:<7} {snapshot.weights[floor_type]:>3}"
                f"  ({snapshot.percentages[floor_type]}%)"
            )

    lines.append("(muted)" if snapshot.muted else "")
    return "\n".join(line for line in lines if line)


def run_command(game: ElevatorGame, command: str, out: TextIO = sys.stdout) -> bool:
    """Apply one typed command. Returns False when the player quits.

    Raises:
        ValueError: For commands the game cannot interpret.
    """
    logger.debug("Command %r", command)
    words = command.strip().split()
    if not words or words[0] == "go":
        game.confirm()
        game.settle()
        return True

    head = words[0].lower()
    if head in ("quit", "q", "exit"):
        return False
    if head == "help":
        print(HELP, file=out)
    elif head == "c":
        game.clear()
    elif head == "back":
        game.return_to_elevator()
    elif head == "restart":
        game.restart()
    elif head == "mute":
        game.toggle_mute()
    elif head == "settings":
        game.toggle_settings()
    elif head == "defaults":
        game.restore_defaults()
    elif head == "set":
        if len(words) != 3:
            raise ValueError("usage: set <type> <value>")
        game.set_weight(words[1], words[2])
    else:
        game.type_keys(head)
    return True


def play(game: ElevatorGame, read: Callable[[str], str] = input, out: TextIO = sys.stdout) -> None:
    """Interactive loop until the player quits or input ends."""

    def show_travel(snapshot: SessionSnapshot) -> None:
        if snapshot.status is GameStatus.MOVING:
            print(f"[ {snapshot.display_text:>3} ]", file=out)

    game.subscribe(show_travel)
    print(HELP, file=out)
    print(render(game.snapshot), file=out)

    while True:
        try:
            command = read("> ")
        except EOFError:
            break
        try:
            if not run_command(game, command, out):
                break
        except ValueError as exc:
            print(f"! {exc}", file=out)
            continue
        print(render(game.snapshot), file=out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="surprise-lift", description="Ride the surprise elevator")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for outcomes")
    parser.add_argument("--tick", type=float, default=0.1, help="Seconds per floor while travelling")
    parser.add_argument("--settle", type=float, default=0.5, help="Seconds before the doors open")
    parser.add_argument("--speed", type=float, default=1.0, help="Realtime speed-up factor")
    parser.add_argument("--no-realtime", action="store_true", help="Skip wall-clock pacing")
    parser.add_argument("--report", type=int, metavar="N", default=None, help="Print a sample of N draws and exit")
    parser.add_argument("--plot", default=None, metavar="PATH", help="With --report, save a chart to PATH")
    parser.add_argument("--log-level", default=None, help="Console log level (e.g. DEBUG)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    configure_from_env()
    if args.log_level:
        enable_console_logging(level=args.log_level)

    if args.report is not None:
        from surpriselift.analysis.outcomes import format_report, plot_outcome_distribution, sample_outcomes

        frame = sample_outcomes(ProbabilityConfig(), draws=args.report, seed=args.seed)
        print(format_report(frame))
        if args.plot:
            print(f"Chart saved to {plot_outcome_distribution(frame, args.plot)}")
        return 0

    config = GameConfig(tick_period_s=args.tick, settle_delay_s=args.settle, seed=args.seed)
    with ElevatorGame(
        config=config,
        player=TerminalPlayer(sys.stdout),
        realtime=not args.no_realtime,
        speed=args.speed,
    ) as game:
        play(game)
    return 0


if __name__ == "__main__":
    sys.exit(main())
