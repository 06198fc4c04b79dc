import pytest

from alphabet import Alphabet
from errors import AssemblyError, ConfigError, ConversionError, SettingError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor
from utilities import default_machine

from conftest import UPPER

NAVAL_ROTORS = ["B", "BETA", "III", "IV", "I"]
NAVAL_PLUGS = "(HQ) (EX) (IP) (TR) (BY)"


def assemble(machine, names, setting, plugs=None):
    machine.insert_rotors(names)
    machine.set_rotors(setting)
    machine.set_plugboard(plugs)
    return machine


# ── construction ────────────────────────────────────────────────


@pytest.mark.parametrize("num_rotors, pawls", [(1, 0), (3, 3), (3, -1)])
def test_bad_counts(upper, num_rotors, pawls):
    with pytest.raises(ConfigError):
        Machine(upper, num_rotors, pawls, [])


def test_duplicate_catalog_names(upper):
    wheels = [Rotor.fixed("X", Permutation("", upper)), Rotor.fixed("X", Permutation("", upper))]
    with pytest.raises(ConfigError):
        Machine(upper, 2, 0, wheels)


# ── reference traffic ───────────────────────────────────────────


def test_service_machine_reference(service):
    assemble(service, ["B", "I", "II", "III"], "AAA")
    assert service.convert("AAAAA") == "BDZGO"


def test_service_machine_ring_reference(service):
    assemble(service, ["B", "I", "II", "III"], "AAA")
    service.set_rings("BBB")
    assert service.convert("AAAAA") == "EWTYX"


def test_naval_machine_reference(naval):
    assemble(naval, NAVAL_ROTORS, "AXLE", NAVAL_PLUGS)
    assert naval.convert("FROM his shoulder Hiawatha") == "QVPQSOKOILPUBKJZPISFXDW"


def test_reciprocity(naval):
    plain = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOGANDKEEPSONRUNNING"
    assemble(naval, NAVAL_ROTORS, "QRST", NAVAL_PLUGS)
    cipher = naval.convert(plain)
    assert cipher != plain

    naval.set_rotors("QRST")
    assert naval.convert(cipher) == plain


def test_no_symbol_encrypts_to_itself(service):
    assemble(service, ["B", "I", "II", "III"], "MCK", "(AZ) (QW)")
    plain = UPPER * 3
    cipher = service.convert(plain)
    assert all(p != c for p, c in zip(plain, cipher))


# ── stepping ────────────────────────────────────────────────────


def test_double_step(service):
    assemble(service, ["B", "I", "II", "III"], "ADU")
    seen = []
    for _ in range(4):
        service.convert("A")
        seen.append(service.window())
    assert seen == ["ADV", "AEW", "BFX", "BFY"]


def test_thirty_keystroke_trace(service):
    assemble(service, ["B", "I", "II", "III"], "AAA")
    for k in range(1, 31):
        service.convert("X")
        middle = "A" if k < 22 else "B"
        assert service.window() == "A" + middle + UPPER[k % 26], f"after {k} keys"


def test_middle_rotor_steps_twice_in_a_row(service):
    # II sits one short of its notch E and I on its notch Q.
    assemble(service, ["B", "III", "II", "I"], "ADQ")
    service.convert("A")
    assert service.window() == "AER"
    service.convert("A")
    assert service.window() == "BFS"
    service.convert("A")
    assert service.window() == "BFT"


def test_fixed_rotor_blocks_carry(naval):
    # III waits on its notch V, but Beta to its left has no pawl.
    assemble(naval, NAVAL_ROTORS, "AVAA")
    naval.convert("A")
    assert naval.window() == "AVAB"
    naval.convert("A")
    assert naval.window() == "AVAC"


def test_carry_through_middle(naval):
    assemble(naval, NAVAL_ROTORS, "AAIQ")
    naval.convert("A")
    assert naval.window() == "AAJR"
    naval.convert("A")
    assert naval.window() == "ABKS"


def test_state_persists_across_calls(service):
    assemble(service, ["B", "I", "II", "III"], "AAA")
    first = service.convert("AAA") + service.convert("AA")
    service.set_rotors("AAA")
    assert service.convert("AAAAA") == first == "BDZGO"


# ── assembly errors ─────────────────────────────────────────────


@pytest.mark.parametrize(
    "names, reason",
    [
        (["B", "I", "II", "XX"], "not found"),
        (["B", "I", "I", "II"], "Duplicate"),
        (["B", "BETA", "I", "II"], "Pawl/rotor mismatch"),
        (["I", "II", "III", "B"], "Missing reflector"),
        (["B", "I", "II"], "Expected 4 rotors"),
    ],
)
def test_insert_rotors_rejects(service, names, reason):
    with pytest.raises(AssemblyError, match=reason):
        service.insert_rotors(names)


def test_extra_reflector(naval):
    with pytest.raises(AssemblyError, match="Extra reflector"):
        naval.insert_rotors(["B", "I", "II", "III", "C"])


def test_unknown_name_is_case_sensitive(service):
    with pytest.raises(AssemblyError):
        service.insert_rotors(["b", "I", "II", "III"])


def test_rejected_insert_keeps_previous_assembly(service):
    assemble(service, ["B", "I", "II", "III"], "ADU")
    with pytest.raises(AssemblyError):
        service.insert_rotors(["C", "IV", "V", "IV"])
    assert [r.name for r in service.rotors()] == ["B", "I", "II", "III"]
    assert service.window() == "ADU"


def test_insert_resets_positions(service):
    assemble(service, ["B", "I", "II", "III"], "QEV")
    service.insert_rotors(["C", "III", "II", "I"])
    assert service.window() == "AAA"


# ── settings ────────────────────────────────────────────────────


def test_set_rotors_before_insert(service):
    with pytest.raises(ConversionError):
        service.set_rotors("AAA")


@pytest.mark.parametrize("setting", ["AA", "AAAA", ""])
def test_setting_length(service, setting):
    service.insert_rotors(["B", "I", "II", "III"])
    with pytest.raises(SettingError, match="length"):
        service.set_rotors(setting)


def test_setting_outside_alphabet_moves_nothing(service):
    assemble(service, ["B", "I", "II", "III"], "XYZ")
    with pytest.raises(SettingError, match="outside alphabet"):
        service.set_rotors("AB1")
    assert service.window() == "XYZ"


def test_plugboard_forms(service, upper):
    assemble(service, ["B", "I", "II", "III"], "AAA", Permutation("(AB)", upper))
    with_perm = service.convert("HELLO")
    service.set_rotors("AAA")
    service.set_plugboard("(AB)")
    assert service.convert("HELLO") == with_perm

    service.set_plugboard(None)
    assert service.plugboard() is None


def test_plugboard_must_share_alphabet(service):
    with pytest.raises(ConfigError):
        service.set_plugboard(Permutation("(AB)", Alphabet("ABC")))


# ── conversion ──────────────────────────────────────────────────


def test_convert_without_rotors(service):
    with pytest.raises(ConversionError):
        service.convert("HELLO")


def test_whitespace_and_case_ignored(service):
    assemble(service, ["B", "I", "II", "III"], "AAA")
    assert service.convert(" a a\ta \n a a ") == "BDZGO"


def test_bad_symbol_leaves_rotors_alone(service):
    assemble(service, ["B", "I", "II", "III"], "AAA")
    with pytest.raises(ConversionError, match="'1'"):
        service.convert("AB1")
    assert service.window() == "AAA"


def test_two_slot_machine():
    abcd = Alphabet("ABCD")
    refl = Rotor.reflector("R", Permutation("(AB) (CD)", abcd))
    wheel = Rotor.moving("W", Permutation("(ABCD)", abcd), "D")
    m = Machine(abcd, 2, 1, [refl, wheel])
    assemble(m, ["R", "W"], "A")
    cipher = m.convert("AAAA")
    m.set_rotors("A")
    assert m.convert(cipher) == "AAAA"


def test_repr(service):
    assemble(service, ["B", "I", "II", "III"], "ABC")
    assert repr(service) == "<Machine [B I II III] window='ABC'>"
    assert repr(default_machine()) == "<Machine [empty] window=''>"
