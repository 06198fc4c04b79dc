# permutation.py
from __future__ import annotations

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError

debug = Debug()


def parse_cycles(cycles: str, alphabet: Alphabet) -> list[str]:
    """Split cycle notation ``"(ABC) (DE)"`` into ``["ABC", "DE"]``.

    Whitespace is ignored everywhere. Raises ConfigError on unbalanced or
    nested parentheses, stray text between cycles, empty cycles, symbols
    outside *alphabet* and symbols used twice.
    """
    groups: list[str] = []
    current: list[str] | None = None
    used: set[str] = set()

    for ch in cycles:
        if ch.isspace():
            continue
        if ch == "(":
            if current is not None:
                raise ConfigError(f"Nested '(' in cycles {cycles!r}")
            current = []
        elif ch == ")":
            if current is None:
                raise ConfigError(f"Unbalanced ')' in cycles {cycles!r}")
            if not current:
                raise ConfigError(f"Empty cycle in {cycles!r}")
            groups.append("".join(current))
            current = None
        else:
            if current is None:
                raise ConfigError(f"Symbol {ch!r} outside a cycle in {cycles!r}")
            if ch not in alphabet:
                raise ConfigError(f"Symbol {ch!r} in cycles {cycles!r} not in alphabet")
            if ch in used:
                raise ConfigError(f"Symbol {ch!r} appears twice in cycles {cycles!r}")
            used.add(ch)
            current.append(ch)

    if current is not None:
        raise ConfigError(f"Unclosed '(' in cycles {cycles!r}")
    return groups


class Permutation:
    """A permutation of an alphabet, built from cycle notation.

    Forward and inverse maps are plain lists indexed by alphabet position.
    ``permute`` and ``invert`` accept either an index or a character and
    answer in kind.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        n = alphabet.size()
        self._fwd: list[int] = list(range(n))
        self._rev: list[int] = list(range(n))

        self._groups = parse_cycles(cycles, alphabet)
        for group in self._groups:
            self._add_cycle(group)
        debug.log("permutation", f"{self.cycles()} over {alphabet!r}")

    def _add_cycle(self, cycle: str) -> None:
        """Add c0 -> c1 -> ... -> cm -> c0 for CYCLE = c0c1...cm."""
        idx = [self._alphabet.index(ch) for ch in cycle]
        m = len(idx)
        for i, here in enumerate(idx):
            self._fwd[here] = idx[(i + 1) % m]
            self._rev[here] = idx[(i - 1) % m]

    # ── basics ───────────────────────────────────────────────────
    def size(self) -> int:
        return self._alphabet.size()

    def alphabet(self) -> Alphabet:
        return self._alphabet

    def wrap(self, p: int) -> int:
        return p % self.size()

    def cycles(self) -> str:
        return " ".join(f"({g})" for g in self._groups)

    # ── mapping ──────────────────────────────────────────────────
    def permute(self, p: int | str) -> int | str:
        if isinstance(p, str):
            return self._alphabet.char(self._fwd[self._alphabet.index(p)])
        return self._fwd[self.wrap(p)]

    def invert(self, c: int | str) -> int | str:
        if isinstance(c, str):
            return self._alphabet.char(self._rev[self._alphabet.index(c)])
        return self._rev[self.wrap(c)]

    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(dst != src for src, dst in enumerate(self._fwd))

    def __repr__(self) -> str:
        return f"<Permutation {self.cycles() or 'identity'}>"
