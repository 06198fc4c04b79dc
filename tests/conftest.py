from __future__ import annotations

from pathlib import Path

import pytest

from alphabet import Alphabet
from config import load_machine
from utilities import default_machine

CONFIGS = Path(__file__).resolve().parent.parent / "configs"
UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


@pytest.fixture
def upper() -> Alphabet:
    return Alphabet.from_range("A", "Z")


@pytest.fixture
def default_conf() -> Path:
    return CONFIGS / "default.conf"


@pytest.fixture
def naval(default_conf):
    """Five slots, three pawls, loaded from configs/default.conf."""
    return load_machine(default_conf)


@pytest.fixture
def service():
    """Reflector plus three moving rotors from the built-in wheel database."""
    return default_machine()
