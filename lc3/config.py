"""Run configuration shared by the CLI and the debugger window."""
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


def parse_address(text: str) -> int:
    """Parse an LC-3 address: x3000, 0x3000 or decimal 12288."""
    text = text.strip()
    if text[:1] in ("x", "X"):
        text = "0" + text
    value = int(text, 0)
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"address out of range: {text}")
    return value


@dataclass
class SimConfig:
    images: List[str] = field(default_factory=list)
    gui: bool = False
    trace: bool = False
    max_steps: int = 0            # 0 = run until HALT
    verbosity: int = 0
    quiet: bool = False
    log_file: Optional[str] = None
    batch_size: int = 500         # GUI: instructions per timer tick
    tick_ms: int = 20             # GUI: timer interval
    start_pc: Optional[int] = None  # overrides the first image origin

    @classmethod
    def from_args(cls, args) -> "SimConfig":
        return cls(
            images=list(args.images),
            gui=args.gui,
            trace=args.trace,
            max_steps=args.max_steps,
            verbosity=args.verbose,
            quiet=args.quiet,
            log_file=args.log_file,
            batch_size=args.batch_size,
            tick_ms=args.tick_ms,
            start_pc=args.start_pc,
        )

    @property
    def log_level(self) -> int:
        if self.quiet:
            return logging.ERROR
        if self.verbosity or self.trace:
            return logging.DEBUG
        return logging.WARNING


def setup_logging(config: SimConfig):
    """Console handler on stderr, plus a timestamped file handler if asked.

    stdout belongs to the running program, so log output never goes there.
    """
    handlers = []
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(config.log_level)
    console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    handlers.append(console)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    level = logging.DEBUG if config.log_file else config.log_level
    logging.basicConfig(level=level, handlers=handlers, force=True)
