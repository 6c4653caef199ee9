import pytest

from lc3.registers import CondFlag, Registers


def test_power_on_state():
    reg = Registers()
    assert reg.gpr == [0]*8
    assert reg.pc == 0x3000
    assert reg.cond == CondFlag.ZRO


def test_masking():
    reg = Registers()
    reg[3] = 0x1FFFF
    reg.pc = 0x10001
    assert reg[3] == 0xFFFF
    assert reg.pc == 1


def test_invalid_index():
    reg = Registers()
    with pytest.raises(IndexError):
        reg[8]
    with pytest.raises(IndexError):
        reg[8] = 1


@pytest.mark.parametrize("value,flag", [
    (0, CondFlag.ZRO), (0x0001, CondFlag.POS), (0x8000, CondFlag.NEG),
])
def test_update_flags(value, flag):
    reg = Registers()
    reg[5] = value
    reg.update_flags(5)
    assert reg.cond is flag


def test_flag_letters_match_br_mask():
    assert [f.letter for f in (CondFlag.NEG, CondFlag.ZRO, CondFlag.POS)] == ["N", "Z", "P"]
    assert (CondFlag.NEG, CondFlag.ZRO, CondFlag.POS) == (4, 2, 1)


def test_snapshot():
    reg = Registers()
    reg[0] = 7
    snap = reg.snapshot()
    assert snap["R0"] == 7
    assert snap["PC"] == 0x3000
    assert snap["COND"] == 2
