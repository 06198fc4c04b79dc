# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError, SettingError
from permutation import Permutation

debug = Debug()


class RotorKind(Enum):
    MOVING = "M"
    FIXED = "N"
    REFLECTING = "R"


class Rotor:
    """One wheel of the machine: a permutation plus rotational state.

    The three roles (moving rotor, fixed rotor, reflector) share this class
    and differ only by ``kind``; every role-specific answer is decided by
    matching on it below. Only moving rotors carry notches.
    """

    def __init__(
        self,
        name: str,
        perm: Permutation,
        kind: RotorKind = RotorKind.FIXED,
        notches: str = "",
    ) -> None:
        self.name = name
        self.kind = kind
        self.permutation = perm
        self.position = 0
        self.ring = 0

        if kind is not RotorKind.MOVING and notches:
            raise ConfigError(f"Rotor {name}: only moving rotors have notches")
        alpha = perm.alphabet()
        for ch in notches:
            if ch not in alpha:
                raise ConfigError(f"Rotor {name}: notch {ch!r} not in alphabet")
        self.notches: frozenset[int] = frozenset(alpha.index(ch) for ch in notches)

        if kind is RotorKind.REFLECTING and not perm.derangement():
            debug.warn("rotor", f"Reflector {name} has fixed points: {perm.cycles()}")

    # ── role constructors ────────────────────────────────────────
    @classmethod
    def moving(cls, name: str, perm: Permutation, notches: str) -> "Rotor":
        return cls(name, perm, RotorKind.MOVING, notches)

    @classmethod
    def fixed(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.FIXED)

    @classmethod
    def reflector(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, perm, RotorKind.REFLECTING)

    # ── shared state ─────────────────────────────────────────────
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet()

    def size(self) -> int:
        return self.permutation.size()

    def setting(self) -> int:
        return self.position

    def ring_setting(self) -> int:
        return self.ring

    def _as_index(self, posn: int | str) -> int:
        if isinstance(posn, str):
            if posn not in self.alphabet():
                raise SettingError(f"Rotor {self.name}: {posn!r} not in alphabet")
            return self.alphabet().index(posn)
        if not (0 <= posn < self.size()):
            raise SettingError(f"Rotor {self.name}: position {posn} out of range")
        return posn

    def set(self, posn: int | str) -> None:
        """Turn the rotor so its window shows *posn* (index or symbol)."""
        posn = self._as_index(posn)
        if self.kind is RotorKind.REFLECTING and posn != 0:
            raise SettingError(f"Reflector {self.name} has only one position")
        self.position = posn

    def set_ring(self, ring: int | str) -> None:
        """Offset the wiring against the alphabet ring (Ringstellung)."""
        ring = self._as_index(ring)
        if self.kind is RotorKind.REFLECTING and ring != 0:
            raise SettingError(f"Reflector {self.name} has no ring setting")
        self.ring = ring

    # ── role-specific behaviour ──────────────────────────────────
    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTING

    def at_notch(self) -> bool:
        if self.kind is RotorKind.MOVING:
            return self.position in self.notches
        return False

    def advance(self) -> None:
        if self.kind is RotorKind.MOVING:
            self.position = (self.position + 1) % self.size()
            debug.log("rotor", f"{self.name} -> {self.alphabet().char(self.position)}")

    # ── signal paths ─────────────────────────────────────────────
    def convert_forward(self, p: int) -> int:
        k = self.position - self.ring
        perm = self.permutation
        return perm.wrap(perm.permute(perm.wrap(p + k)) - k)

    def convert_backward(self, e: int) -> int:
        k = self.position - self.ring
        perm = self.permutation
        return perm.wrap(perm.invert(perm.wrap(e + k)) - k)

    # ── niceties ─────────────────────────────────────────────────
    def __repr__(self) -> str:
        window = self.alphabet().char(self.position)
        return f"<Rotor {self.name} {self.kind.name.lower()} pos={window} ring={self.ring}>"
