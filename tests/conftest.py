import pytest

from lc3 import CPU, BufferConsole, ProgramImage


@pytest.fixture
def machine():
    """Build a CPU with `words` placed at `origin` and scripted keyboard input."""
    def build(words, origin=0x3000, keys=""):
        cpu = CPU(BufferConsole(keys))
        cpu.load_image(ProgramImage(origin, list(words)))
        return cpu
    return build
