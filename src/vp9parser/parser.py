import logging
from dataclasses import dataclass
from typing import Optional

from .bitstream import BitReader
from .codecconfig import VPCodecConfigurationRecord
from .configuration import VP9ParserConfiguration
from .exceptions import InsufficientHeaderBytes, VpxParseError
from .header import UncompressedHeader, parse_uncompressed_header
from .superframe import split_superframe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VPxFrameInfo:
    frame_size: int
    "Bytes occupied by the frame, excluding any superframe index."
    uncompressed_header_size: int
    is_key_frame: bool
    width: int = 0
    height: int = 0


class VP9Parser:
    """
    Extract frame boundaries and header information from VP9 elementary
    stream buffers, without decoding them.

    The codec configuration is updated by every key frame or intra-only frame,
    so a parser instance must not be shared between streams.
    """

    def __init__(
        self, configuration: Optional[VP9ParserConfiguration] = None
    ) -> None:
        if configuration is None:
            configuration = VP9ParserConfiguration()
        self._configuration = configuration
        self._codec_config = VPCodecConfigurationRecord()
        self._last_width = 0

    @property
    def codec_config(self) -> VPCodecConfigurationRecord:
        return self._codec_config

    def get_codec_configuration(self) -> VPCodecConfigurationRecord:
        return self._codec_config

    def reset(self) -> None:
        self._codec_config = VPCodecConfigurationRecord()
        self._last_width = 0

    def parse(self, data: bytes) -> tuple[bool, list[VPxFrameInfo]]:
        """
        Parse all the frames in `data`.

        Returns whether parsing succeeded and the frames parsed so far. On
        failure the frame list is incomplete.
        """
        frames: list[VPxFrameInfo] = []
        try:
            self._parse(data, frames)
        except VpxParseError as exc:
            logger.debug("VP9Parser() failed to parse %d bytes: %s", len(data), exc)
            return False, frames
        return True, frames

    def parse_frames(self, data: bytes) -> list[VPxFrameInfo]:
        """
        Parse all the frames in `data`, raising :class:`VpxParseError` on
        failure.
        """
        frames: list[VPxFrameInfo] = []
        self._parse(data, frames)
        return frames

    def _parse(self, data: bytes, frames: list[VPxFrameInfo]) -> None:
        ranges, index_size = split_superframe(data)
        payload_size = len(data) - index_size

        for offset, size in ranges:
            if offset + size > payload_size:
                raise InsufficientHeaderBytes(
                    f"Frame of {size} bytes at offset {offset} exceeds "
                    f"payload of {payload_size} bytes"
                )

            reader = BitReader(data, offset, size)
            header = parse_uncompressed_header(reader, self._last_width)
            if not header.show_existing_frame:
                self._check_header_size(header, size)

            frames.append(self._update(header, size))

        frames_size = sum(size for _, size in ranges)
        if frames_size != payload_size:
            raise InsufficientHeaderBytes(
                f"Frames of {frames_size} bytes do not fill "
                f"payload of {payload_size} bytes"
            )

    def _check_header_size(self, header: UncompressedHeader, frame_size: int) -> None:
        if not self._configuration.check_compressed_header_size:
            return

        if header.header_size_in_bytes == 0:
            raise InsufficientHeaderBytes("Compressed header size is zero")
        if header.uncompressed_header_size + header.header_size_in_bytes > frame_size:
            raise InsufficientHeaderBytes(
                f"Not enough bytes for compressed header: "
                f"{header.uncompressed_header_size} + "
                f"{header.header_size_in_bytes} > {frame_size}"
            )

    def _update(self, header: UncompressedHeader, frame_size: int) -> VPxFrameInfo:
        if header.width:
            self._last_width = header.width

        width = height = 0
        if header.is_intra:
            assert header.color_config is not None
            self._codec_config = VPCodecConfigurationRecord.from_color_config(
                header.profile, header.color_config
            )
            width, height = header.width, header.height

        logger.debug(
            "Frame of %d bytes, header %d bytes, profile %d, key frame %s, %dx%d",
            frame_size,
            header.uncompressed_header_size,
            header.profile,
            header.is_key_frame,
            width,
            height,
        )
        return VPxFrameInfo(
            frame_size=frame_size,
            uncompressed_header_size=header.uncompressed_header_size,
            is_key_frame=header.is_key_frame,
            width=width,
            height=height,
        )
