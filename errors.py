# errors.py
"""Failure conditions raised by the machine and its configuration layer.

Every class derives from ValueError: all of them are caused by a bad value
handed in by the caller, and none of them is worth retrying.
"""
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class; the message names the offending value."""


class ConfigError(EnigmaError):
    """Bad alphabet, counts, cycle notation or rotor description."""


class AssemblyError(EnigmaError):
    """Rotor selection rejected by Machine.insert_rotors."""


class SettingError(EnigmaError):
    """Bad rotor/ring setting or malformed setting line."""


class ConversionError(EnigmaError):
    """Message could not be converted with the current machine state."""
