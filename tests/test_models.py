import pytest

from models import A133, M3, MODELS, Alphabet28, build_machine, get_model


def test_catalog_aliases() -> None:
    assert get_model("m3") is M3
    assert get_model("A133") is A133
    assert get_model("B") is A133
    assert set(MODELS) == {"M3", "A133", "B"}
    with pytest.raises(ValueError, match="Unknown model"):
        get_model("Z")


@pytest.mark.parametrize("reflector", ["UKW-B", "UKW-C"])
@pytest.mark.parametrize("trio", [("I", "II", "III"), ("IV", "V", "VI"), ("VII", "VIII", "I")])
def test_every_m3_wheel_is_valid(trio, reflector) -> None:
    assert build_machine(M3, list(trio), reflector).validate() == []


def test_a133_is_valid_and_reciprocal() -> None:
    machine = build_machine(A133, ["I", "II", "III"], "UKW", positions="ÅÄÖ")
    assert machine.num_characters == 28
    assert machine.plugboard is None
    assert machine.validate() == []
    cipher, _ = machine.process_message("HÄLSNINGARFRÅNSTOCKHOLM")
    machine.reset()
    assert machine.process_message(cipher)[0] == "HÄLSNINGARFRÅNSTOCKHOLM"


def test_a133_has_no_w() -> None:
    assert "W" not in Alphabet28
    machine = build_machine(A133, ["I", "II", "III"], "UKW")
    _, trace = machine.process_character("W")
    assert trace.input_char == "X"


def test_wheel_order_is_right_to_left() -> None:
    machine = build_machine(M3, ["I", "II", "III"], "UKW-B", positions="ABC")
    assert [w.label for w in machine.wheels] == ["III", "II", "I"]
    assert machine.window == "ABC"
    assert machine.wheels[0].notches == frozenset({21})


def test_double_notch_wheels() -> None:
    machine = build_machine(M3, ["VI", "VII", "VIII"], "UKW-B")
    assert machine.wheels[0].notches == frozenset({12, 25})


def test_build_defaults_to_first_letter() -> None:
    machine = build_machine(M3, ["I", "II", "III"], "UKW-B")
    assert machine.window == "AAA"
    assert all(w.starting_position == 0 and w.ring_setting == 0 for w in machine.wheels)


def test_each_build_gets_its_own_wheels() -> None:
    a = build_machine(M3, ["I", "II", "III"], "UKW-B")
    b = build_machine(M3, ["I", "II", "III"], "UKW-B")
    a.process_message("AAAA")
    assert b.window == "AAA"


def test_reflector_position() -> None:
    machine = build_machine(M3, ["I", "II", "III"], "UKW-B", reflector_position="C")
    assert machine.reflector.position == 2
    assert machine.reflector.starting_position == 2
    with pytest.raises(ValueError):
        build_machine(M3, ["I", "II", "III"], "UKW-B", reflector_position="1")


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"wheels": ["I", "II"], "reflector": "UKW-B"}, "takes 3 wheels"),
        ({"wheels": ["I", "II", "IX"], "reflector": "UKW-B"}, "no wheel"),
        ({"wheels": ["I", "II", "III"], "reflector": "UKW-A"}, "no reflector"),
    ],
)
def test_build_rejects_bad_selection(kwargs, message) -> None:
    with pytest.raises(ValueError, match=message):
        build_machine(M3, **kwargs)


def test_a133_refuses_plugs() -> None:
    with pytest.raises(ValueError, match="no plugboard"):
        build_machine(A133, ["I", "II", "III"], "UKW", plugs=["AB"])
