"""Application entry-point for the LC-3 simulator.
Run `python main.py IMAGE...` from the project root, or `--gui` for the debugger."""
import argparse
import logging
import sys

from lc3 import CPU, ImageLoadError, TerminalConsole, __version__, read_image
from lc3.config import SimConfig, parse_address, setup_logging

logger = logging.getLogger("lc3")

EXIT_OK = 0
EXIT_LOAD_FAILED = 1
EXIT_USAGE = 2          # argparse's own exit status
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lc3-sim",
        description="Run LC-3 object images.")
    parser.add_argument("images", nargs="+", metavar="IMAGE",
                        help="object file(s); the first one sets the start PC")
    parser.add_argument("--gui", action="store_true",
                        help="open the debugger window instead of running")
    parser.add_argument("--trace", action="store_true",
                        help="log every executed instruction")
    parser.add_argument("--max-steps", type=int, default=0, metavar="N",
                        help="stop after N instructions (0 = no limit)")
    parser.add_argument("--batch-size", type=int, default=500, metavar="N",
                        help="debugger: instructions per run tick")
    parser.add_argument("--tick-ms", type=int, default=20, metavar="MS",
                        help="debugger: milliseconds between run ticks")
    parser.add_argument("--start-pc", type=parse_address, metavar="ADDR",
                        help="start here instead of the first image origin (x3000)")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="more log output")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="only log errors")
    parser.add_argument("--log-file", help="also write the log to a file")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def load_images(paths):
    return [read_image(p) for p in paths]


def run(config: SimConfig, console=None) -> int:
    """Load the images and run to HALT. Returns the process exit code."""
    try:
        images = load_images(config.images)
    except ImageLoadError as e:
        print(f"failed to load image: {e.path}", file=sys.stderr)
        logger.debug("%s", e)
        return EXIT_LOAD_FAILED

    if config.gui:
        from lc3_gui.main_window import run as run_gui
        return run_gui(images, config)

    console = console if console is not None else TerminalConsole()
    cpu = CPU(console, trace=config.trace)
    for image in images:
        cpu.load_image(image)
    if config.start_pc is not None:
        cpu.reg.pc = config.start_pc

    with console.raw_mode():
        try:
            cpu.run(config.max_steps or None)
        except KeyboardInterrupt:
            console.write("\n")
            console.flush()
            logger.info("interrupted at PC=x%04X", cpu.reg.pc)
            return EXIT_INTERRUPTED
    return EXIT_OK


def main(argv=None) -> int:
    try:
        args = build_parser().parse_args(argv)
        config = SimConfig.from_args(args)
        setup_logging(config)
        return run(config)
    except KeyboardInterrupt:
        # Ctrl-C outside the run loop: loading, the debugger window
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
