# machine.py  ──────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from alphabet import Alphabet
from debug import Debug
from errors import AssemblyError, ConfigError, ConversionError, SettingError
from permutation import Permutation
from rotor_and_reflector import Rotor

debug = Debug()


class Machine:
    """A complete machine: rotor slots, a catalog of spare wheels and an
    optional plugboard. Slot 0 always holds the reflector."""

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors <= 1:
            raise ConfigError(f"Need more than one rotor slot, got {num_rotors}")
        if not (0 <= pawls < num_rotors):
            raise ConfigError(f"Pawls must be in 0–{num_rotors - 1}, got {pawls}")

        catalog: dict[str, Rotor] = {}
        for rotor in all_rotors:
            if rotor.name in catalog:
                raise ConfigError(f"Rotor {rotor.name} defined twice")
            if rotor.alphabet() != alphabet:
                raise ConfigError(f"Rotor {rotor.name} uses a different alphabet")
            catalog[rotor.name] = rotor

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls
        self._all_rotors = catalog
        self._slots: list[Rotor] = []
        self._plugboard: Permutation | None = None

    # ── accessors ───────────────────────────────────────────────
    def num_rotors(self) -> int:
        return self._num_rotors

    def num_pawls(self) -> int:
        return self._pawls

    def alphabet(self) -> Alphabet:
        return self._alphabet

    def available(self) -> list[str]:
        return list(self._all_rotors)

    def rotors(self) -> list[Rotor]:
        """The rotors currently in the slots, reflector first."""
        return list(self._slots)

    def plugboard(self) -> Permutation | None:
        return self._plugboard

    def window(self) -> str:
        """Symbols showing on slots 1.. (the reflector has no window)."""
        return "".join(self._alphabet.char(r.setting()) for r in self._slots[1:])

    # ── assembly ────────────────────────────────────────────────
    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with the rotors called NAMES (NAMES[0] is the
        reflector). Nothing changes unless every check passes."""
        if len(names) != self._num_rotors:
            raise AssemblyError(
                f"Expected {self._num_rotors} rotors, got {len(names)}: {' '.join(names)}"
            )

        chosen: list[Rotor] = []
        for name in names:
            try:
                chosen.append(self._all_rotors[name])
            except KeyError:
                raise AssemblyError(f"Rotor {name!r} not found") from None

        moving = sum(1 for r in chosen if r.rotates())
        if moving != self._pawls:
            raise AssemblyError(
                f"Pawl/rotor mismatch: {self._pawls} pawls but {moving} moving rotors"
            )
        seen: set[str] = set()
        for r in chosen:
            if r.name in seen:
                raise AssemblyError(f"Duplicate rotor {r.name}")
            seen.add(r.name)
        if not chosen[0].reflecting():
            raise AssemblyError(f"Missing reflector: slot 0 holds {chosen[0].name}")
        for r in chosen[1:]:
            if r.reflecting():
                raise AssemblyError(f"Extra reflector {r.name} outside slot 0")

        # passed validation → commit
        for r in chosen:
            r.set(0)
            r.set_ring(0)
        self._slots = chosen
        debug.log("config", f"inserted {' '.join(names)}")

    def _check_setting(self, setting: str, what: str) -> None:
        if not self._slots:
            raise ConversionError("No rotors installed")
        if len(setting) != self._num_rotors - 1:
            raise SettingError(
                f"{what} length mismatch: {setting!r} for {self._num_rotors - 1} rotors"
            )
        for ch in setting:
            if ch not in self._alphabet:
                raise SettingError(f"{what} character {ch!r} outside alphabet")

    def set_rotors(self, setting: str) -> None:
        """Turn slots 1.. to SETTING, leftmost first."""
        self._check_setting(setting, "Setting")
        for rotor, ch in zip(self._slots[1:], setting):
            rotor.set(self._alphabet.index(ch))
        debug.log("config", f"window {setting}")

    def set_rings(self, rings: str) -> None:
        """Apply ring settings to slots 1.., leftmost first."""
        self._check_setting(rings, "Ring setting")
        for rotor, ch in zip(self._slots[1:], rings):
            rotor.set_ring(self._alphabet.index(ch))
        debug.log("config", f"rings {rings}")

    def set_plugboard(self, plugboard: Permutation | str | None) -> None:
        if isinstance(plugboard, str):
            plugboard = Permutation(plugboard, self._alphabet)
        elif plugboard is not None and plugboard.alphabet() != self._alphabet:
            raise ConfigError("Plugboard uses a different alphabet")
        self._plugboard = plugboard
        debug.log("plugboard", f"{plugboard!r}")

    # ── stepping logic  ─────────────────────────────────────────
    def _step_rotors(self) -> None:
        """Advance rotors one key-press.

        Which rotors move is decided from the positions before the key-press
        and only then applied, so a rotor stepping onto its notch now does not
        carry until the next key-press (double step).
        """
        slots = self._slots
        last = len(slots) - 1
        advancing = [False] * len(slots)
        advancing[last] = True
        for i in range(last, 0, -1):
            if slots[i].at_notch() and slots[i - 1].rotates():
                advancing[i] = advancing[i - 1] = True

        for rotor, move in zip(slots, advancing):
            if move:
                rotor.advance()
        debug.log("stepping", f"window {self.window()}")

    # ── encipher one symbol  ────────────────────────────────────
    def convert_index(self, c: int) -> int:
        """Convert alphabet index C after first advancing the machine."""
        if not self._slots:
            raise ConversionError("No rotors installed")
        self._step_rotors()

        signal = c
        if self._plugboard is not None:
            signal = self._plugboard.permute(signal)
        for rotor in reversed(self._slots):
            signal = rotor.convert_forward(signal)
        for rotor in self._slots[1:]:
            signal = rotor.convert_backward(signal)
        if self._plugboard is not None:
            signal = self._plugboard.invert(signal)

        debug.log("convert", f"{self._alphabet.char(c)} -> {self._alphabet.char(signal)}")
        return signal

    def convert(self, message: str) -> str:
        """Encode or decode MESSAGE; whitespace is dropped and case folded."""
        if not self._slots:
            raise ConversionError("No rotors installed")
        text = self._alphabet.normalise_case("".join(message.split()))
        for ch in text:
            if ch not in self._alphabet:
                raise ConversionError(f"Character {ch!r} outside alphabet")
        return "".join(
            self._alphabet.char(self.convert_index(self._alphabet.index(ch)))
            for ch in text
        )

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._slots) or "empty"
        return f"<Machine [{names}] window={self.window()!r}>"
