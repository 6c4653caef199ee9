from lc3 import BufferConsole
from lc3.keyboard import KeyboardDevice
from lc3.memory import KBDR, KBSR, MEM_SIZE, Memory


def make_memory(keys=""):
    console = BufferConsole(keys)
    mem = Memory()
    KeyboardDevice(console).register(mem)
    return mem, console


def test_read_write():
    mem = Memory()
    mem.write(0x3000, 0x1234)
    assert mem.read(0x3000) == 0x1234


def test_values_masked_to_16_bits():
    mem = Memory()
    mem.write(0x10000 + 5, 0x12345)
    assert mem.read(5) == 0x2345


def test_load_stops_at_top_of_memory():
    mem = Memory()
    assert mem.load([1, 2, 3], MEM_SIZE - 2) == 2
    assert mem.read(0xFFFE) == 1
    assert mem.read(0xFFFF) == 2
    assert mem.read(0) == 0


def test_kbsr_without_key():
    mem, _ = make_memory()
    mem.write(KBDR, 0x1234)
    mem.write(KBSR, 0x8000)
    assert mem.read(KBSR) == 0
    assert mem.read(KBDR) == 0x1234


def test_kbsr_with_key():
    mem, console = make_memory()
    assert mem.read(KBSR) == 0
    console.feed("a")
    assert mem.read(KBSR) == 0x8000
    assert mem.read(KBDR) == ord("a")
    assert not console.key_available()


def test_kbsr_clears_after_key_consumed():
    mem, _ = make_memory("a")
    assert mem.read(KBSR) == 0x8000
    assert mem.read(KBSR) == 0
    assert mem.read(KBDR) == ord("a")


def test_kbdr_read_does_not_poll():
    mem, console = make_memory("a")
    assert mem.read(KBDR) == 0
    assert console.key_available()


def test_peek_has_no_side_effects():
    mem, console = make_memory("a")
    mem.write(KBSR, 0x1111)
    assert mem.peek(KBSR) == 0x1111
    assert console.key_available()


def test_reset_keeps_device():
    mem, console = make_memory()
    mem.write(0x3000, 9)
    mem.reset()
    assert mem.read(0x3000) == 0
    console.feed("b")
    assert mem.read(KBSR) == 0x8000


def test_dump():
    mem = Memory()
    mem.load([0x1025, 0xF025], 0x3000)
    assert mem.dump(0x3000, 4, cols=4) == "x3000  1025 F025 0000 0000"
