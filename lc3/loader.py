"""LC-3 object image loading.

Image layout: a stream of big-endian 16-bit words. The first word is the
origin; every following word is placed at origin, origin+1, ... until the
stream ends or the address space runs out.
"""
import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .errors import ImageLoadError
from .memory import MEM_SIZE

logger = logging.getLogger(__name__)


@dataclass
class ProgramImage:
    origin: int
    words: List[int] = field(default_factory=list)
    path: Optional[str] = None

    def __len__(self):
        return len(self.words)


def parse_image(data: bytes, path: Optional[str] = None) -> ProgramImage:
    if len(data) < 2:
        raise ImageLoadError(path, "missing origin word")
    (origin,) = struct.unpack_from(">H", data)
    max_words = MEM_SIZE - origin
    count = min((len(data) - 2) // 2, max_words)
    words = list(struct.unpack_from(f">{count}H", data, 2))
    if (len(data) - 2) // 2 > max_words:
        logger.warning("%s: %d words past xFFFF dropped", path or "image",
                       (len(data) - 2) // 2 - max_words)
    return ProgramImage(origin, words, path)


def read_image(path: Union[str, Path]) -> ProgramImage:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ImageLoadError(str(path), e.strerror or str(e)) from e
    image = parse_image(data, str(path))
    logger.info("loaded %s: %d words at x%04X", path, len(image), image.origin)
    return image
