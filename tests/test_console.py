import io
import os
import sys
import time

import pytest

from lc3.console import EOF, TerminalConsole

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="termios/pty are POSIX only")


def wait_for_key(console, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if console.key_available():
            return True
        time.sleep(0.01)
    return False


@pytest.fixture
def tty_pair():
    pty = pytest.importorskip("pty")
    master, slave = pty.openpty()
    stdin = os.fdopen(slave, "rb", buffering=0)
    yield master, stdin
    stdin.close()
    os.close(master)


@pytest.fixture
def pipe_stdin():
    read_fd, write_fd = os.pipe()
    stdin = os.fdopen(read_fd, "rb", buffering=0)
    yield stdin, write_fd
    stdin.close()


@posix_only
class TestRawMode:
    def test_clears_echo_and_canonical_mode(self, tty_pair):
        import termios
        _, stdin = tty_pair
        console = TerminalConsole(stdin=stdin, stdout=io.StringIO())
        with console.raw_mode():
            lflag = termios.tcgetattr(stdin.fileno())[3]
            assert not lflag & termios.ECHO
            assert not lflag & termios.ICANON
            # Ctrl-C must still raise SIGINT
            assert lflag & termios.ISIG

    def test_restores_settings_on_normal_exit(self, tty_pair):
        import termios
        _, stdin = tty_pair
        before = termios.tcgetattr(stdin.fileno())
        with TerminalConsole(stdin=stdin, stdout=io.StringIO()).raw_mode():
            pass
        assert termios.tcgetattr(stdin.fileno()) == before

    def test_restores_settings_on_exception(self, tty_pair):
        import termios
        _, stdin = tty_pair
        before = termios.tcgetattr(stdin.fileno())
        with pytest.raises(KeyboardInterrupt):
            with TerminalConsole(stdin=stdin, stdout=io.StringIO()).raw_mode():
                raise KeyboardInterrupt
        assert termios.tcgetattr(stdin.fileno()) == before

    def test_not_a_tty_is_left_alone(self, pipe_stdin):
        stdin, write_fd = pipe_stdin
        os.close(write_fd)
        console = TerminalConsole(stdin=stdin, stdout=io.StringIO())
        with console.raw_mode() as active:
            assert active is console


@posix_only
class TestTerminalInput:
    def test_key_available_and_read(self, tty_pair):
        master, stdin = tty_pair
        console = TerminalConsole(stdin=stdin, stdout=io.StringIO())
        with console.raw_mode():
            assert not console.key_available()
            os.write(master, b"k")
            assert wait_for_key(console)
            assert console.read_char() == ord("k")
            assert not console.key_available()

    def test_reads_raw_bytes_from_pipe(self, pipe_stdin):
        stdin, write_fd = pipe_stdin
        os.write(write_fd, b"\xe9")
        os.close(write_fd)
        console = TerminalConsole(stdin=stdin, stdout=io.StringIO())
        assert console.read_char() == 0xE9

    def test_eof_reads_as_ffff(self, pipe_stdin):
        stdin, write_fd = pipe_stdin
        os.close(write_fd)
        console = TerminalConsole(stdin=stdin, stdout=io.StringIO())
        assert console.read_char() == EOF == 0xFFFF


class TestTerminalOutput:
    def test_one_byte_per_character(self):
        raw = io.BytesIO()
        stdout = io.TextIOWrapper(raw, encoding="utf-8")
        console = TerminalConsole(stdin=io.StringIO(), stdout=stdout)
        console.write("A" + chr(0xE9) + chr(0xFF))
        console.flush()
        assert raw.getvalue() == b"A\xe9\xff"

    def test_text_only_stream(self):
        stdout = io.StringIO()
        console = TerminalConsole(stdin=io.StringIO(), stdout=stdout)
        console.write("HALT\n")
        assert stdout.getvalue() == "HALT\n"
