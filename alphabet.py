# alphabet.py
from __future__ import annotations

from debug import Debug
from errors import ConfigError

debug = Debug()


class Alphabet:
    """An ordered run of distinct characters, indexable both ways."""

    def __init__(self, chars: str) -> None:
        if not chars:
            raise ConfigError("Alphabet must contain at least one character")
        seen: set[str] = set()
        for ch in chars:
            if ch in seen:
                raise ConfigError(f"Duplicate character {ch!r} in alphabet")
            if ch.isspace() or ch in "()":
                raise ConfigError(f"Character {ch!r} cannot be part of an alphabet")
            seen.add(ch)

        self._chars: str = chars
        self._index: dict[str, int] = {ch: i for i, ch in enumerate(chars)}
        debug.log("alphabet", f"built {len(chars)} symbols {chars!r}")

    @classmethod
    def from_range(cls, first: str, last: str) -> "Alphabet":
        """Inclusive contiguous range, e.g. ``Alphabet.from_range("A", "Z")``."""
        if len(first) != 1 or len(last) != 1:
            raise ConfigError(f"Alphabet bounds must be single characters: {first!r}-{last!r}")
        if ord(first) > ord(last):
            raise ConfigError(f"Alphabet bounds reversed: {first!r}-{last!r}")
        return cls("".join(chr(c) for c in range(ord(first), ord(last) + 1)))

    # ── lookups ──────────────────────────────────────────────────
    def size(self) -> int:
        return len(self._chars)

    def contains(self, ch: str) -> bool:
        return ch in self._index

    def index(self, ch: str) -> int:
        try:
            return self._index[ch]
        except KeyError:
            raise ConfigError(f"Character {ch!r} not in alphabet") from None

    def char(self, index: int) -> str:
        if not (0 <= index < len(self._chars)):
            hi = len(self._chars) - 1
            raise ConfigError(f"Index {index} out of range 0–{hi}")
        return self._chars[index]

    @property
    def chars(self) -> str:
        return self._chars

    # ── case convention ──────────────────────────────────────────
    def normalise_case(self, text: str) -> str:
        """Fold *text* to the case the alphabet is written in."""
        has_upper = any(c.isupper() for c in self._chars)
        has_lower = any(c.islower() for c in self._chars)
        if has_upper and not has_lower:
            return text.upper()
        if has_lower and not has_upper:
            return text.lower()
        return text

    # ── niceties ─────────────────────────────────────────────────
    def __len__(self) -> int:
        return len(self._chars)

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def __iter__(self):
        return iter(self._chars)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._chars == other._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __repr__(self) -> str:
        if len(self._chars) > 8:
            return f"<Alphabet {self._chars[0]}..{self._chars[-1]} ({len(self._chars)})>"
        return f"<Alphabet {self._chars}>"
