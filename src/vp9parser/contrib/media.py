import logging
from collections.abc import Iterator
from typing import Optional

import av
from av.packet import Packet
from av.video.stream import VideoStream

from ..configuration import VP9ParserConfiguration
from ..parser import VP9Parser, VPxFrameInfo

logger = logging.getLogger(__name__)


class MediaParser:
    """
    Parse the VP9 frames of a media file, without decoding them.

    Examples:

    .. code-block:: python

        parser = MediaParser('/path/to/some.webm')
        for packet, frames in parser.frames():
            print(packet.pts, frames)
        print(parser.codec_string)

    :param file: The path to a file, or a file-like object.
    :param format: The format to use, defaults to autodetect.
    :param options: Additional options to pass to FFmpeg.
    :param configuration: The :class:`VP9ParserConfiguration` to use.
    """

    def __init__(
        self,
        file,
        format=None,
        options=None,
        configuration: Optional[VP9ParserConfiguration] = None,
    ):
        self.__container = av.open(file=file, format=format, mode="r", options=options)
        self.__parser = VP9Parser(configuration)

        self.__stream: Optional[VideoStream] = None
        for stream in self.__container.streams.video:
            if stream.codec_context.name in ["vp9", "libvpx-vp9"]:
                self.__stream = stream
                break
        if self.__stream is None:
            self.__container.close()
            raise ValueError("No VP9 video stream found")

    @property
    def parser(self) -> VP9Parser:
        return self.__parser

    @property
    def codec_string(self) -> str:
        """
        The codec string derived from the most recent key frame.
        """
        return self.__parser.codec_config.get_codec_string()

    def frames(self) -> Iterator[tuple[Packet, list[VPxFrameInfo]]]:
        """
        Demux the VP9 stream and parse each packet.

        Raises :class:`vp9parser.VpxParseError` if a packet cannot be parsed.
        """
        if self.__container is None:
            raise ValueError("MediaParser is closed")

        for packet in self.__container.demux(self.__stream):
            # flush packet
            if packet.size == 0:
                continue

            frames = self.__parser.parse_frames(bytes(packet))
            self.__log_debug("Packet pts=%s, %d frame(s)", packet.pts, len(frames))
            yield packet, frames

    def close(self) -> None:
        if self.__container is not None:
            self.__container.close()
            self.__container = None

    def __enter__(self) -> "MediaParser":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __log_debug(self, msg: str, *args) -> None:
        logger.debug(f"MediaParser(%s) {msg}", self.__container.name, *args)
