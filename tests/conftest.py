import pytest

from models import M3, build_machine


@pytest.fixture
def m3():
    """Enigma I / M3 with wheels I II III, UKW-B, window AAA, rings AAA."""
    return build_machine(M3, ["I", "II", "III"], "UKW-B", positions="AAA")
