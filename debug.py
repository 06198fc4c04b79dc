# debug.py
from __future__ import annotations
import logging
import os
from typing import Dict

COMPONENTS = (
    "alphabet",
    "permutation",
    "rotor",
    "stepping",
    "plugboard",
    "convert",
    "config",
)


class Debug:
    _root_configured: bool = False          # class-level guard
    _active: Dict[str, bool] = {c: False for c in COMPONENTS}
    _enabled: bool = True

    def __init__(self, *, log_to: str | None = None) -> None:
        """
        If `log_to` is given, messages also stream to that file.
        Every Debug() instance shares the same root logger config and the
        same component map, so a switch flipped by the CLI reaches the
        module-level helpers in the core.
        """
        if not Debug._root_configured:
            handlers: list[logging.Handler] = [logging.StreamHandler()]
            if log_to:
                handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

            logging.basicConfig(
                level=logging.DEBUG,
                format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                handlers=handlers,
            )
            Debug._root_configured = True
        elif log_to and not Debug._has_file(log_to):
            handler = logging.FileHandler(log_to, encoding="utf-8")
            handler.setFormatter(logging.Formatter(
                "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
            logging.getLogger().addHandler(handler)

        self.logger = logging.getLogger("ENIGMA")

    @staticmethod
    def _has_file(log_to: str) -> bool:
        """True if the root logger already streams to *log_to*."""
        target = os.path.abspath(log_to)
        return any(
            isinstance(h, logging.FileHandler) and h.baseFilename == target
            for h in logging.getLogger().handlers
        )

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if Debug._enabled and Debug._active.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    def warn(self, component: str, message: str) -> None:
        """Always emitted, whatever the component switches say."""
        self.logger.warning("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._active[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._active[c] = False

    def enable_all(self) -> None:
        for c in Debug._active:
            Debug._active[c] = True

    def toggle(self, component: str) -> None:
        self._require(component)
        Debug._active[component] = not Debug._active[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        Debug._enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug._active.copy()

    @property
    def enabled(self) -> bool:
        return Debug._enabled

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug._active:
            raise ValueError(f"No such component: {component!r}")

    # nicety for `print(dbg)`
    def __repr__(self) -> str:
        active = [k for k, v in Debug._active.items() if v]
        return f"<Debug enabled={Debug._enabled} active={active}>"
