import logging

import pytest

from debug import Debug


@pytest.fixture
def dbg():
    d = Debug()
    before = d.status()
    yield d
    d.toggle_global(True)
    for name, state in before.items():
        (d.enable if state else d.disable)(name)


def test_components_off_by_default(dbg) -> None:
    assert not any(dbg.status().values())


def test_toggles_are_shared_between_instances(dbg) -> None:
    other = Debug()
    dbg.enable("stepping")
    assert other.status()["stepping"] is True
    other.toggle("stepping")
    assert dbg.status()["stepping"] is False


def test_unknown_component_rejected(dbg) -> None:
    with pytest.raises(ValueError, match="No such component"):
        dbg.enable("flux")


def test_log_respects_switches(dbg, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="ENIGMA")
    dbg.log("rotor", "hidden")
    dbg.enable("rotor")
    dbg.log("rotor", "shown")
    dbg.toggle_global(False)
    dbg.log("rotor", "muted")
    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["[ROTOR] shown"]


def test_machine_logs_through_debug(dbg, caplog, m3) -> None:
    caplog.set_level(logging.DEBUG, logger="ENIGMA")
    dbg.enable("encipher")
    m3.process_character("A")
    assert any("'A'->'B'" in r.getMessage() for r in caplog.records)
