import struct

import pytest

import main
from lc3 import BufferConsole
from lc3.config import SimConfig


def write_image(path, origin, words):
    path.write_bytes(struct.pack(f">H{len(words)}H", origin, *words))
    return str(path)


class InterruptingConsole(BufferConsole):
    def read_char(self):
        raise KeyboardInterrupt


def test_runs_to_halt(tmp_path):
    image = write_image(tmp_path / "a.obj", 0x3000, [0xE002, 0xF022, 0xF025, 0x4F, 0x4B, 0])
    console = BufferConsole()
    assert main.run(SimConfig(images=[image]), console) == main.EXIT_OK
    assert console.output == "OKHALT\n"


def test_several_images(tmp_path):
    first = write_image(tmp_path / "a.obj", 0x3000, [0xE0FF, 0xF022, 0xF025])
    second = write_image(tmp_path / "b.obj", 0x3100, [0x5A, 0])
    console = BufferConsole()
    assert main.run(SimConfig(images=[first, second]), console) == main.EXIT_OK
    assert console.output == "ZHALT\n"


def test_load_failure(tmp_path, capsys):
    missing = str(tmp_path / "missing.obj")
    assert main.main([missing]) == main.EXIT_LOAD_FAILED
    assert f"failed to load image: {missing}" in capsys.readouterr().err


def test_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main.main([])
    assert excinfo.value.code == main.EXIT_USAGE


def test_interrupt(tmp_path):
    image = write_image(tmp_path / "a.obj", 0x3000, [0xF020, 0xF025])
    console = InterruptingConsole()
    assert main.run(SimConfig(images=[image]), console) == main.EXIT_INTERRUPTED
    assert console.output == "\n"


def test_max_steps(tmp_path):
    image = write_image(tmp_path / "a.obj", 0x3000, [0x0FFF])
    assert main.run(SimConfig(images=[image], max_steps=50), BufferConsole()) == main.EXIT_OK


def test_config_from_args():
    args = main.build_parser().parse_args(["-vv", "--trace", "--max-steps", "9", "x.obj"])
    config = SimConfig.from_args(args)
    assert config.images == ["x.obj"]
    assert config.trace and config.verbosity == 2
    assert config.max_steps == 9
    assert config.log_level == 10


def test_interrupt_while_loading(monkeypatch):
    def interrupted(paths):
        raise KeyboardInterrupt
    monkeypatch.setattr(main, "load_images", interrupted)
    assert main.main(["x.obj"]) == main.EXIT_INTERRUPTED


def test_interrupt_in_debugger(tmp_path, monkeypatch):
    image = write_image(tmp_path / "a.obj", 0x3000, [0xF025])

    def interrupted(config, console=None):
        raise KeyboardInterrupt
    monkeypatch.setattr(main, "run", interrupted)
    assert main.main(["--gui", image]) == main.EXIT_INTERRUPTED


def test_start_pc(tmp_path):
    image = write_image(tmp_path / "a.obj", 0x3000, [0x1025, 0x1022, 0xF021, 0xF025])
    console = BufferConsole()
    config = SimConfig(images=[image], start_pc=0x3001)
    assert main.run(config, console) == main.EXIT_OK
    assert console.output == "\x02HALT\n"


@pytest.mark.parametrize("text", ["x3001", "0x3001", "12289"])
def test_start_pc_and_tick_from_args(text):
    args = main.build_parser().parse_args(["--start-pc", text, "--tick-ms", "5", "x.obj"])
    config = SimConfig.from_args(args)
    assert config.start_pc == 0x3001
    assert config.tick_ms == 5


def test_start_pc_out_of_range():
    with pytest.raises(SystemExit) as excinfo:
        main.build_parser().parse_args(["--start-pc", "x10000", "x.obj"])
    assert excinfo.value.code == main.EXIT_USAGE
