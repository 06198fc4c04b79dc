# enigma_sim.py
from __future__ import annotations

import argparse
import sys
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Iterable, List, TextIO

from config import load_machine
from debug import COMPONENTS, Debug
from errors import EnigmaError, SettingError
from machine import Machine
from utilities import format_groups, preprocess_message

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for one run of the message processor."""

    block: int = 5                  # display group size
    lenient: bool = False           # drop non-alphabet symbols instead of failing
    debug: List[str] = field(default_factory=list)
    log_to: str | None = None


# ────────────────────────────────────────────────────────────────────────
#  1. Setting lines
# ────────────────────────────────────────────────────────────────────────


def is_setting_line(line: str) -> bool:
    return line.lstrip().startswith("*")


def apply_setting_line(machine: Machine, line: str) -> None:
    """Configure MACHINE from ``* <rotors…> <setting> [<rings>] [<plugs>]``."""
    tokens = line.lstrip()[1:].split()
    n = machine.num_rotors()
    if len(tokens) < n + 1:
        raise SettingError(f"Setting line needs {n} rotors and a setting: {line.strip()!r}")

    alpha = machine.alphabet()
    names = [t.upper() for t in tokens[:n]]
    setting = alpha.normalise_case(tokens[n])
    rest = tokens[n + 1 :]

    rings = None
    if rest and not rest[0].startswith("("):
        rings = alpha.normalise_case(rest.pop(0))
    plugs = " ".join(rest)

    machine.insert_rotors(names)
    machine.set_rotors(setting)
    if rings is not None:
        machine.set_rings(rings)
    machine.set_plugboard(plugs or None)


# ────────────────────────────────────────────────────────────────────────
#  2. Message stream
# ────────────────────────────────────────────────────────────────────────


def process(machine: Machine, lines: Iterable[str], out: TextIO, cfg: Config) -> None:
    """Run every line of LINES through MACHINE, writing results to OUT."""
    for line in lines:
        line = line.rstrip("\n")
        if not line.strip():
            out.write("\n")
        elif is_setting_line(line):
            apply_setting_line(machine, line)
        else:
            if cfg.lenient:
                line = preprocess_message(line, machine.alphabet())
            out.write(format_groups(machine.convert(line), cfg.block) + "\n")


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("config", help="Machine description (.conf or .json)")
    p.add_argument("input", nargs="?", help="Message file (default: standard input)")
    p.add_argument("output", nargs="?", help="Result file (default: standard output)")
    p.add_argument("--block", type=int, default=5, help="Output group size, 0 for none. Default: 5")
    p.add_argument("--lenient", action="store_true", help="Drop symbols outside the alphabet instead of failing.")
    p.add_argument(
        "--debug",
        action="append",
        default=[],
        choices=[*COMPONENTS, "all"],
        metavar="COMPONENT",
        help=f"Log one component ({', '.join(COMPONENTS)} or all). Repeatable.",
    )
    p.add_argument("--log-to", dest="log_to", metavar="FILE", help="Also write debug log to FILE.")
    return p.parse_args(argv)


def configure_debug(cfg: Config) -> None:
    dbg = Debug(log_to=cfg.log_to)
    if "all" in cfg.debug:
        dbg.enable_all()
    else:
        dbg.enable(*cfg.debug)


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = Config(block=args.block, lenient=args.lenient, debug=args.debug, log_to=args.log_to)
    configure_debug(cfg)

    try:
        machine = load_machine(args.config)
        debug.log("config", f"loaded {args.config}: {' '.join(machine.available())}")
        src = open(args.input, encoding="utf-8") if args.input else nullcontext(sys.stdin)
        with src as lines:
            dst = open(args.output, "w", encoding="utf-8") if args.output else nullcontext(sys.stdout)
            with dst as out:
                process(machine, lines, out, cfg)
    except EnigmaError as e:
        sys.exit(f"Error: {e}")
    except UnicodeDecodeError:
        sys.exit(f"Error: {args.input or 'stdin'} is not valid UTF-8")
    except OSError as e:
        sys.exit(f"Error: could not open {e.filename}")


if __name__ == "__main__":
    main()
