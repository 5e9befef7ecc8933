import logging
from dataclasses import dataclass
from typing import Optional, Type, TypeVar

from .exceptions import SuperframeMarkerMismatch

logger = logging.getLogger(__name__)

SUPERFRAME_MARKER_MASK = 0xE0
SUPERFRAME_MARKER = 0xC0

INDEX_T = TypeVar("INDEX_T", bound="SuperframeIndex")


def is_superframe_marker(byte: int) -> bool:
    return (byte & SUPERFRAME_MARKER_MASK) == SUPERFRAME_MARKER


@dataclass
class SuperframeIndex:
    """
    Index trailing a VP9 superframe.

    The index is framed by the same marker byte at both ends::

        | marker | size 0 | size 1 | ... | size N-1 | marker |

    The marker is ``110SSFFF`` where ``SS + 1`` is the number of bytes used
    by each little-endian frame size and ``FFF + 1`` is the number of frames.
    """

    bytes_per_frame_size: int
    frame_sizes: list[int]

    @property
    def index_size(self) -> int:
        return 2 + self.bytes_per_frame_size * len(self.frame_sizes)

    @classmethod
    def parse(cls: Type[INDEX_T], data: bytes) -> Optional[INDEX_T]:
        """
        Parse the superframe index at the end of `data`.

        Returns `None` if `data` does not end with a superframe marker.
        """
        if not data or not is_superframe_marker(data[-1]):
            return None

        marker = data[-1]
        bytes_per_frame_size = ((marker >> 3) & 0x3) + 1
        frame_count = (marker & 0x7) + 1
        index_size = 2 + bytes_per_frame_size * frame_count

        if len(data) < index_size:
            raise SuperframeMarkerMismatch(
                f"Superframe index of {index_size} bytes does not fit "
                f"in {len(data)} bytes"
            )

        index_start = len(data) - index_size
        if data[index_start] != marker:
            raise SuperframeMarkerMismatch(
                f"Superframe index starts with 0x{data[index_start]:02x}, "
                f"expected 0x{marker:02x}"
            )

        frame_sizes = []
        pos = index_start + 1
        for _ in range(frame_count):
            frame_sizes.append(
                int.from_bytes(data[pos : pos + bytes_per_frame_size], "little")
            )
            pos += bytes_per_frame_size

        return cls(bytes_per_frame_size=bytes_per_frame_size, frame_sizes=frame_sizes)


def split_superframe(data: bytes) -> tuple[list[tuple[int, int]], int]:
    """
    Split `data` into `(offset, size)` ranges, one per frame.

    Returns the ranges and the number of trailing index bytes. A buffer
    without a superframe index is a single frame.
    """
    index = SuperframeIndex.parse(data)
    if index is None:
        return [(0, len(data))], 0

    ranges = []
    offset = 0
    for size in index.frame_sizes:
        ranges.append((offset, size))
        offset += size

    logger.debug(
        "Superframe with %d frames, sizes %s", len(ranges), index.frame_sizes
    )
    return ranges, index.index_size
