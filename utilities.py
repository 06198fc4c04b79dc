# utilities.py
from __future__ import annotations

from typing import Dict, List, Tuple

from alphabet import Alphabet
from errors import ConfigError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor, RotorKind

# ────────────────────────────────────────────────────────────────────────
#  0. Alphabets
# ────────────────────────────────────────────────────────────────────────

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


# ────────────────────────────────────────────────────────────────────────
#  1. Text preprocessing & output
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alpha: Alphabet) -> str:
    """Fold case, drop whitespace and any symbol the alphabet lacks."""
    text = alpha.normalise_case(msg)
    return "".join(ch for ch in text if ch in alpha)


def format_groups(text: str, block: int = 5) -> str:
    """Split *text* into space-separated blocks of *block* symbols (the
    last block may be shorter)."""
    if block <= 0:
        return text
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


# ────────────────────────────────────────────────────────────────────────
#  2. Wiring helpers
# ────────────────────────────────────────────────────────────────────────


def wiring_to_cycles(wiring: str, alpha: str) -> str:
    """Rewrite a substitution row (``wiring[i]`` is the image of
    ``alpha[i]``) in cycle notation. Fixed points are left out."""
    if sorted(wiring) != sorted(alpha):
        raise ValueError("wiring must be a permutation of alphabet")

    image = dict(zip(alpha, wiring))
    seen: set[str] = set()
    cycles: List[str] = []
    for start in alpha:
        if start in seen or image[start] == start:
            seen.add(start)
            continue
        cycle = []
        ch = start
        while ch not in seen:
            seen.add(ch)
            cycle.append(ch)
            ch = image[ch]
        cycles.append("(" + "".join(cycle) + ")")
    return " ".join(cycles)


# ────────────────────────────────────────────────────────────────────────
#  3. Wheel database (historic wirings over Alpha26)
# ────────────────────────────────────────────────────────────────────────

# name: (kind, wiring, notches)
WHEELS: Dict[str, Tuple[RotorKind, str, str]] = {
    "I":      (RotorKind.MOVING, "EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":     (RotorKind.MOVING, "AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III":    (RotorKind.MOVING, "BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":     (RotorKind.MOVING, "ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":      (RotorKind.MOVING, "VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    "VI":     (RotorKind.MOVING, "JPGVOUMFYQBENHZRDKASXLICTW", "ZM"),
    "VII":    (RotorKind.MOVING, "NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM"),
    "BETA":   (RotorKind.FIXED, "LEYJVCNIXWPBQMDRTAKZGFUHOS", ""),
    "GAMMA":  (RotorKind.FIXED, "FSOKANUERHMBTIYCWLQPZXVGJD", ""),
    "A":      (RotorKind.REFLECTING, "EJMZALYXVBWFCRQUONTSPIKHGD", ""),
    "B":      (RotorKind.REFLECTING, "YRUHQSLDPXNGOKMIEBFZCWVJAT", ""),
    "C":      (RotorKind.REFLECTING, "FVPJIAOYEDRZXWGCTKUQSBNMHL", ""),
    "B-THIN": (RotorKind.REFLECTING, "ENKQAUYWJICOPBLMDXZVFTHRGS", ""),
    "C-THIN": (RotorKind.REFLECTING, "RDOBJNTKVEHMLFCWZAXGYIPSUQ", ""),
}


def build_catalog(alpha: Alphabet | None = None) -> List[Rotor]:
    """Fresh Rotor objects for every wheel in WHEELS. The wirings are
    written over Alpha26, so *alpha* must be that alphabet."""
    alpha = alpha or Alphabet(Alpha26)
    if alpha.chars != Alpha26:
        raise ConfigError(f"Historic wheels need the A-Z alphabet, got {alpha!r}")
    catalog: List[Rotor] = []
    for name, (kind, wiring, notches) in WHEELS.items():
        perm = Permutation(wiring_to_cycles(wiring, Alpha26), alpha)
        catalog.append(Rotor(name, perm, kind, notches))
    return catalog


def default_machine(num_rotors: int = 4, pawls: int = 3) -> Machine:
    """A machine stocked with the historic wheels. The defaults give the
    three-rotor service machine; ``default_machine(5, 3)`` the naval one
    with a thin reflector and a fourth, fixed wheel."""
    alpha = Alphabet(Alpha26)
    return Machine(alpha, num_rotors, pawls, build_catalog(alpha))


__all__ = [
    "Alpha26",
    "WHEELS",
    "build_catalog",
    "default_machine",
    "format_groups",
    "preprocess_message",
    "wiring_to_cycles",
]
