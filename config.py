# config.py
"""Read machine descriptions from disk.

Two formats are understood. The plain ``.conf`` format::

    A-Z
    5 3
    I MQ (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
    Beta N (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
    B R (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
        (RX) (SZ) (TV)

and a JSON document with the keys ``alphabet``, ``rotors``, ``pawls`` and
``wheels`` (see ``REQUIRED_KEYS`` / ``REQUIRED_WHEEL_KEYS``).
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor, RotorKind

debug = Debug()

REQUIRED_KEYS = {"alphabet", "rotors", "pawls", "wheels"}
REQUIRED_WHEEL_KEYS = {"name", "type", "cycles"}
JSON_KINDS = {
    "moving": RotorKind.MOVING,
    "fixed": RotorKind.FIXED,
    "reflector": RotorKind.REFLECTING,
}


@dataclass(slots=True)
class RotorSpec:
    """One wheel as described in a configuration file."""

    name: str
    kind: RotorKind
    cycles: str
    notches: str = ""

    def build(self, alpha: Alphabet) -> Rotor:
        perm = Permutation(self.cycles, alpha)
        return Rotor(self.name, perm, self.kind, self.notches)


@dataclass(slots=True)
class MachineSpec:
    alphabet: Alphabet
    num_rotors: int
    pawls: int
    wheels: List[RotorSpec] = field(default_factory=list)

    def build(self) -> Machine:
        """A fresh Machine; every call gets its own Rotor objects."""
        return Machine(
            self.alphabet,
            self.num_rotors,
            self.pawls,
            [w.build(self.alphabet) for w in self.wheels],
        )


# ────────────────────────────────────────────────────────────────────────
#  1. Plain text format
# ────────────────────────────────────────────────────────────────────────


def parse_alphabet(line: str) -> Alphabet:
    """``X-Y`` is an inclusive range, anything else a literal run."""
    line = line.strip()
    if len(line) == 3 and line[1] == "-":
        return Alphabet.from_range(line[0], line[2])
    if not line:
        raise ConfigError("Configuration is missing its alphabet line")
    return Alphabet(line)


def _parse_kind(name: str, token: str) -> tuple[RotorKind, str]:
    head, notches = token[0].upper(), token[1:]
    if head == "M":
        return RotorKind.MOVING, notches
    if head == "N" and not notches:
        return RotorKind.FIXED, ""
    if head == "R" and not notches:
        return RotorKind.REFLECTING, ""
    raise ConfigError(f"Bad type {token!r} for rotor {name}")


def _take_cycles(tokens: List[str], pos: int) -> tuple[str, int]:
    """Collect cycle tokens from *pos* on, following parentheses across
    whitespace and line breaks."""
    parts: List[str] = []
    depth = 0
    while pos < len(tokens) and (depth > 0 or tokens[pos].startswith("(")):
        tok = tokens[pos]
        depth += tok.count("(") - tok.count(")")
        parts.append(tok)
        pos += 1
    return " ".join(parts), pos


def parse_config(text: str) -> MachineSpec:
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise ConfigError("Configuration is empty")
    alpha = parse_alphabet(lines[0])

    tokens = "\n".join(lines[1:]).split()
    if len(tokens) < 2:
        raise ConfigError("Configuration truncated: expected rotor and pawl counts")
    try:
        num_rotors, pawls = int(tokens[0]), int(tokens[1])
    except ValueError:
        raise ConfigError(f"Bad rotor/pawl counts: {tokens[0]!r} {tokens[1]!r}") from None

    wheels: List[RotorSpec] = []
    pos = 2
    while pos < len(tokens):
        name = tokens[pos].upper()
        if name.startswith("("):
            raise ConfigError(f"Cycles {tokens[pos]!r} without a rotor name")
        if pos + 1 >= len(tokens):
            raise ConfigError(f"Bad rotor description: {name} has no type")
        kind, notches = _parse_kind(name, tokens[pos + 1])
        cycles, pos = _take_cycles(tokens, pos + 2)
        wheels.append(RotorSpec(name, kind, cycles, notches))
        debug.log("config", f"wheel {name} {kind.name.lower()} {notches!r} {cycles}")

    return MachineSpec(alpha, num_rotors, pawls, wheels)


# ────────────────────────────────────────────────────────────────────────
#  2. JSON format
# ────────────────────────────────────────────────────────────────────────


def parse_json_config(data: dict) -> MachineSpec:
    missing = REQUIRED_KEYS - data.keys()
    if missing:
        raise ConfigError(f"Missing keys in config: {', '.join(sorted(missing))}")

    alpha = parse_alphabet(str(data["alphabet"]))
    if not isinstance(data["wheels"], list):
        raise ConfigError(f"'wheels' must be a list, got {data['wheels']!r}")

    wheels: List[RotorSpec] = []
    for entry in data["wheels"]:
        if not isinstance(entry, dict):
            raise ConfigError(f"Wheel {entry!r} must be an object")
        gone = REQUIRED_WHEEL_KEYS - entry.keys()
        if gone:
            raise ConfigError(f"Missing keys in wheel {entry!r}: {', '.join(sorted(gone))}")
        entry = dict({"notches": ""}, **entry)
        for key in ("name", "type", "cycles", "notches"):
            if not isinstance(entry[key], str):
                raise ConfigError(f"Wheel {key} must be a string, got {entry[key]!r}")
        try:
            kind = JSON_KINDS[entry["type"]]
        except KeyError:
            raise ConfigError(f"Bad type {entry['type']!r} for rotor {entry['name']}") from None
        wheels.append(RotorSpec(entry["name"].upper(), kind, entry["cycles"], entry["notches"]))

    try:
        num_rotors, pawls = int(data["rotors"]), int(data["pawls"])
    except (TypeError, ValueError):
        raise ConfigError(f"Bad rotor/pawl counts: {data['rotors']!r} {data['pawls']!r}") from None
    return MachineSpec(alpha, num_rotors, pawls, wheels)


# ────────────────────────────────────────────────────────────────────────
#  3. Entry point
# ────────────────────────────────────────────────────────────────────────


def load_config(path: str | Path) -> MachineSpec:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"could not open {path}: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path} is not valid UTF-8 (byte {e.start})") from e

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path}: invalid JSON ({e.msg}, line {e.lineno})") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a JSON object")
        return parse_json_config(data)
    return parse_config(text)


def load_machine(path: str | Path) -> Machine:
    return load_config(path).build()
